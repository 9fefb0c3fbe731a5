"""
Standardized response helpers for the import API.

Core errors are translated here so endpoints can stay free of status-code
bookkeeping.
"""

from typing import Any, NoReturn

from fastapi import HTTPException
from pydantic import BaseModel

from promptbank.core.import_wizard import InvalidSelection, InvalidTransition
from promptbank.core.session_registry import SessionNotFound


class APIResponse(BaseModel):
    """Standard API response model"""

    success: bool
    message: str
    data: Any | None = None
    errors: list[str] | None = None


def success_response(message: str = "Success", data: Any = None) -> APIResponse:
    return APIResponse(success=True, message=message, data=data)


def error_response(
    message: str = "An error occurred",
    errors: list[str] | None = None,
    status_code: int = 400,
) -> NoReturn:
    """Raise an HTTPException carrying an APIResponse body"""
    response_data = APIResponse(success=False, message=message, errors=errors or [])
    raise HTTPException(status_code=status_code, detail=response_data.model_dump())


# Order matters: first matching class wins.
_ERROR_STATUS: list[tuple[type[Exception], int, str]] = [
    (SessionNotFound, 404, "Import session not found"),
    (InvalidSelection, 422, "Invalid selection"),
    (InvalidTransition, 409, "Invalid wizard step"),
]


def raise_for_error(exc: Exception) -> NoReturn:
    """Map a core exception onto an HTTP error; re-raise anything unknown."""
    for error_type, status_code, message in _ERROR_STATUS:
        if isinstance(exc, error_type):
            detail = exc.args[0] if exc.args else message
            error_response(message=message, errors=[str(detail)], status_code=status_code)
    raise exc
