"""
User endpoints (list, create, update, delete) on a single resource path.

Update and delete take the user id from the JSON body, not the URL.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, ValidationError

from api.deps import JsonBody, SupabaseClientGetter
from api.errors import error_response, handle_error
from users_backend.repositories import users as users_repo

logger = logging.getLogger(__name__)


router = APIRouter(prefix="/users", tags=["users"])

INVALID_USER_ID = "Invalid or missing user ID"
USER_NOT_FOUND = "User not found"
INVALID_USER_DATA = "Invalid User Data: "


# --- Pydantic models ---


class User(BaseModel):
    id: str
    username: str | None = None
    password: str | None = None


class UserCreate(BaseModel):
    """
    User creation payload.
    Note: id is assigned by the database, never by the client.
    """

    model_config = ConfigDict(extra="forbid")

    username: str
    password: str


class UserUpdate(BaseModel):
    """
    User update payload. Only username and password can change;
    other body fields (including id) are ignored here.
    """

    username: str | None = None
    password: str | None = None


class UserMutationResult(BaseModel):
    user: User
    message: str


# --- Helpers ---


def extract_user_id(body: Any) -> str | None:
    """
    Return the `id` from a request body, or None if it is missing,
    not a string, or blank. The id is returned untrimmed.
    """
    if not isinstance(body, dict):
        return None
    user_id = body.get("id")
    if not isinstance(user_id, str) or user_id.strip() == "":
        return None
    return user_id


def _invalid_user_id() -> JSONResponse:
    logger.warning("Rejected request with invalid or missing user id")
    return error_response(INVALID_USER_ID, 400, key="error")


def _user_not_found(user_id: str) -> JSONResponse:
    logger.warning(f"User {user_id!r} not found")
    return error_response(USER_NOT_FOUND, 404, key="error")


# --- Endpoints ---


@router.get("", response_model=list[User])
def list_users(get_db: SupabaseClientGetter) -> JSONResponse:
    """List every user. An empty table is reported as 404."""
    try:
        users = users_repo.list_users(get_db())
        if len(users) == 0:
            return error_response("No users found", 404)
        return JSONResponse(content=users, status_code=200)
    except Exception as exc:
        return handle_error(exc, 404, "Error Fetching Users")


@router.post("", status_code=201, response_model=UserMutationResult)
def create_user(get_db: SupabaseClientGetter, body: JsonBody) -> JSONResponse:
    """Create a user from `{username, password}`."""
    try:
        payload = UserCreate.model_validate(body)
    except ValidationError as exc:
        return handle_error(exc, 422, INVALID_USER_DATA)

    try:
        user = users_repo.insert_user(get_db(), payload.model_dump())
        return JSONResponse(
            content={"user": user, "message": "User created successfully"},
            status_code=201,
        )
    except Exception as exc:
        return handle_error(exc, 500, "Error Creating User")


@router.patch("", response_model=UserMutationResult)
def update_user(get_db: SupabaseClientGetter, body: JsonBody) -> JSONResponse:
    """
    Update a user's username and/or password.

    Expects `{id, username?, password?}`. Fields left out of the body
    (or sent as null) keep their stored values.
    """
    user_id = extract_user_id(body)
    if user_id is None:
        return _invalid_user_id()

    try:
        db = get_db()
        existing_user = users_repo.fetch_user_by_id(db, user_id)
        if existing_user is None:
            return _user_not_found(user_id)

        changes = UserUpdate.model_validate(body).model_dump(exclude_none=True)
        user = users_repo.update_user(db, user_id, changes)
        return JSONResponse(
            content={"user": user, "message": "User updated successfully"},
            status_code=200,
        )
    except ValidationError as exc:
        return handle_error(exc, 422, INVALID_USER_DATA)
    except Exception as exc:
        return handle_error(exc, 500, "Error Updating User")


@router.delete("", response_model=UserMutationResult)
def delete_user(get_db: SupabaseClientGetter, body: JsonBody) -> JSONResponse:
    """Delete the user named by `{id}` and return its last stored state."""
    user_id = extract_user_id(body)
    if user_id is None:
        return _invalid_user_id()

    try:
        db = get_db()
        existing_user = users_repo.fetch_user_by_id(db, user_id)
        if existing_user is None:
            return _user_not_found(user_id)

        user = users_repo.delete_user(db, user_id)
        return JSONResponse(
            content={"user": user, "message": "User deleted successfully"},
            status_code=200,
        )
    except Exception as exc:
        return handle_error(exc, 500, "Error Deleting User")
