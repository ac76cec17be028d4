from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from supabase import Client

logger = logging.getLogger(__name__)

USERS_TABLE = "users"


class UserRepositoryError(RuntimeError):
    pass


def _raise_for_error(response: Any, context: str) -> None:
    if hasattr(response, "error") and response.error:
        raise UserRepositoryError(f"Supabase error {context}: {response.error}")


def _rows(response: Any) -> list[dict[str, Any]]:
    data = response.data or []
    return data if isinstance(data, list) else []


def _first_row(response: Any, context: str) -> dict[str, Any]:
    rows = _rows(response)
    if not rows:
        raise UserRepositoryError(f"Supabase returned no rows {context}.")
    return rows[0]


def list_users(db: Client) -> list[dict[str, Any]]:
    logger.debug(f"select * from {USERS_TABLE}")
    response = db.table(USERS_TABLE).select("*").execute()
    _raise_for_error(response, "listing users")
    return _rows(response)


def fetch_user_by_id(db: Client, user_id: str) -> dict[str, Any] | None:
    logger.debug(f"select * from {USERS_TABLE} where id={user_id!r}")
    response = db.table(USERS_TABLE).select("*").eq("id", user_id).limit(1).execute()
    _raise_for_error(response, "fetching user")
    rows = _rows(response)
    return rows[0] if rows else None


def insert_user(db: Client, payload: Mapping[str, Any]) -> dict[str, Any]:
    logger.debug(f"insert into {USERS_TABLE} fields={sorted(payload)}")
    response = db.table(USERS_TABLE).insert(dict(payload)).execute()
    _raise_for_error(response, "inserting user")
    return _first_row(response, "inserting user")


def update_user(db: Client, user_id: str, changes: Mapping[str, Any]) -> dict[str, Any]:
    """
    Update the given fields of one user and return the updated row.

    An empty `changes` mapping does not issue an UPDATE; the current row is
    re-read instead. A missing row (e.g. deleted concurrently) raises.
    """

    if not changes:
        row = fetch_user_by_id(db, user_id)
        if row is None:
            raise UserRepositoryError(f"User {user_id} no longer exists.")
        return row

    logger.debug(f"update {USERS_TABLE} set fields={sorted(changes)} where id={user_id!r}")
    response = db.table(USERS_TABLE).update(dict(changes)).eq("id", user_id).execute()
    _raise_for_error(response, "updating user")
    return _first_row(response, "updating user")


def delete_user(db: Client, user_id: str) -> dict[str, Any]:
    """Delete one user and return the row as it was before deletion."""

    logger.debug(f"delete from {USERS_TABLE} where id={user_id!r}")
    response = db.table(USERS_TABLE).delete().eq("id", user_id).execute()
    _raise_for_error(response, "deleting user")
    return _first_row(response, "deleting user")
