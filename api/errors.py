"""
Error responses for API endpoints.

Every error body is built by `error_response`. Failures raised while talking
to the data store go through `handle_error`, which prefixes the failure's
message and returns the status code chosen by the caller.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

UNKNOWN_ERROR_MESSAGE = "An unknown error occurred"


def error_response(text: str, status_code: int, *, key: str = "message") -> JSONResponse:
    """
    Build a JSON error body of the form `{key: text}`.

    Handler-level validation and not-found responses use `key="error"`;
    normalized failures use `key="message"`.
    """
    return JSONResponse(content={key: text}, status_code=status_code)


def handle_error(error: object, status_code: int, message: str | None = None) -> JSONResponse:
    """
    Translate a failure into a JSON response.

    Args:
        error: Whatever was raised. Only exceptions contribute their message.
        status_code: HTTP status to return. Never derived from `error`.
        message: Optional prefix, concatenated with the exception's message as-is.

    Returns:
        `{"message": ...}` with the given status code.
    """
    if isinstance(error, Exception):
        try:
            detail = str(error)
        except Exception:
            detail = type(error).__name__
        error_message = (message or "") + detail
    else:
        error_message = UNKNOWN_ERROR_MESSAGE

    logger.error(f"Request failed with {status_code}: {error_message}")
    return error_response(error_message, status_code)


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed JSON bodies never reach the handlers.
    logger.warning(f"Rejected request body for {request.method} {request.url.path}: {exc.errors()}")
    return error_response("Invalid request body", 422)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
