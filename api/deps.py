"""
Dependency injection for the Supabase client and request bodies.

The client is built once per process and shared by every request. Outside
production the handle is also parked in a module-global slot, so reloading
this module (e.g. during development) picks up the existing client instead of
opening another connection.

Routers receive a getter rather than the client itself, so a failure to build
the client is raised inside the handler and answered like any other
data-store failure.
"""
from __future__ import annotations

import json
import logging
import threading
from collections.abc import Callable
from typing import Annotated, Any

from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from supabase import Client

from users_backend.db.supabase import create_supabase_client
from users_backend.utils.env import get_app_env, is_production, load_env

load_env()

logger = logging.getLogger(__name__)

# Never assigned at import time, so the value survives importlib.reload().
_RELOAD_SLOT = "_reload_cached_supabase_client"

_client: Client | None = None
_client_lock = threading.Lock()


def get_supabase_client() -> Client:
    """
    Returns the process-wide Supabase client, constructing it on first use.
    """
    global _client
    if _client is not None:
        return _client

    with _client_lock:
        if _client is None:
            client = globals().get(_RELOAD_SLOT)
            if client is None:
                client = create_supabase_client()
                logger.info(f"Created Supabase client (APP_ENV={get_app_env()})")
            else:
                logger.info("Reusing Supabase client from a previous module load")

            if not is_production():
                globals()[_RELOAD_SLOT] = client
            _client = client
    return _client


def reset_supabase_client() -> None:
    """Forget the cached client. Intended for tests."""
    global _client
    with _client_lock:
        _client = None
        globals().pop(_RELOAD_SLOT, None)


def get_client_getter() -> Callable[[], Client]:
    return get_supabase_client


async def read_json_body(request: Request) -> Any:
    """
    Parse the request body as JSON whatever its Content-Type.
    An empty body is None.
    """
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise RequestValidationError(
            [{"type": "json_invalid", "loc": ("body",), "msg": "JSON decode error", "input": {}, "ctx": {"error": str(exc)}}]
        ) from exc


# Type aliases for dependency injection
SupabaseClientGetter = Annotated[Callable[[], Client], Depends(get_client_getter)]
JsonBody = Annotated[Any, Depends(read_json_body)]
