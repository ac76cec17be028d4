from __future__ import annotations

import pytest

from users_backend.db import supabase as supabase_db
from users_backend.db.supabase import (
    SupabaseConfigError,
    SupabaseSettings,
    create_supabase_client,
    get_supabase_settings,
)


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_supabase_settings.cache_clear()
    yield
    get_supabase_settings.cache_clear()


def test_settings_read_and_strip_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SUPABASE_URL", " https://project.supabase.co ")
    monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "service-key\n")
    assert SupabaseSettings.from_env() == SupabaseSettings(
        url="https://project.supabase.co",
        service_role_key="service-key",
    )


def test_settings_name_every_missing_variable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "   ")
    with pytest.raises(SupabaseConfigError, match="SUPABASE_URL, SUPABASE_SERVICE_ROLE_KEY not set"):
        SupabaseSettings.from_env()


def test_settings_errors_are_not_cached(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.setenv("SUPABASE_SERVICE_ROLE_KEY", "service-key")
    with pytest.raises(SupabaseConfigError):
        get_supabase_settings()

    monkeypatch.setenv("SUPABASE_URL", "https://project.supabase.co")
    assert get_supabase_settings().url == "https://project.supabase.co"


def test_create_client_uses_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[tuple[str, str]] = []
    sentinel = object()

    def fake_create_client(url: str, key: str) -> object:
        calls.append((url, key))
        return sentinel

    monkeypatch.setattr(supabase_db, "create_client", fake_create_client)
    settings = SupabaseSettings(url="https://project.supabase.co", service_role_key="service-key")

    assert create_supabase_client(settings) is sentinel
    assert calls == [("https://project.supabase.co", "service-key")]


def test_create_client_wraps_rejected_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_create_client(url: str, key: str) -> object:
        raise ValueError("Invalid URL")

    monkeypatch.setattr(supabase_db, "create_client", fake_create_client)
    settings = SupabaseSettings(url="not-a-url", service_role_key="service-key")

    with pytest.raises(SupabaseConfigError, match="not-a-url: Invalid URL"):
        create_supabase_client(settings)


def test_create_client_without_env_raises_config_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    monkeypatch.delenv("SUPABASE_SERVICE_ROLE_KEY", raising=False)
    with pytest.raises(SupabaseConfigError, match="Missing Supabase configuration"):
        create_supabase_client()
