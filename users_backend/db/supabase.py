from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from supabase import Client, create_client

SUPABASE_URL_VAR = "SUPABASE_URL"
SUPABASE_KEY_VAR = "SUPABASE_SERVICE_ROLE_KEY"


class SupabaseConfigError(RuntimeError):
    """Raised when the Supabase connection settings are missing or rejected."""


@dataclass(frozen=True)
class SupabaseSettings:
    url: str
    service_role_key: str

    @classmethod
    def from_env(cls) -> SupabaseSettings:
        values = {name: (os.getenv(name) or "").strip() for name in (SUPABASE_URL_VAR, SUPABASE_KEY_VAR)}
        missing = [name for name, value in values.items() if not value]
        if missing:
            raise SupabaseConfigError(f"Missing Supabase configuration: {', '.join(missing)} not set")
        return cls(url=values[SUPABASE_URL_VAR], service_role_key=values[SUPABASE_KEY_VAR])


@lru_cache(maxsize=1)
def get_supabase_settings() -> SupabaseSettings:
    return SupabaseSettings.from_env()


def create_supabase_client(settings: SupabaseSettings | None = None) -> Client:
    """
    Open a new Supabase client with the service role key.

    Every call builds a new client. Request handlers go through the
    cached accessor in `api.deps` instead.

    Raises:
        SupabaseConfigError: settings are missing, or the client rejects the URL/key.
    """
    settings = settings or get_supabase_settings()
    try:
        return create_client(settings.url, settings.service_role_key)
    except Exception as exc:
        raise SupabaseConfigError(f"Could not create Supabase client for {settings.url}: {exc}") from exc
