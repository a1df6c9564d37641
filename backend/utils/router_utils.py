"""
Shared helper functions for routers.

This module builds the JSON error bodies returned by the canvas command
endpoint so that every failure path answers with the same shape.
"""

from typing import Any

from fastapi import status
from fastapi.responses import JSONResponse

from services.llm_service import UpstreamServiceError


def command_error_response(status_code: int, error: str, message: str) -> JSONResponse:
    """
    Error body that still carries an empty action list.

    Args:
        status_code: HTTP status to return
        error: Machine-facing error description
        message: Text the editor can show to the user

    Returns:
        JSONResponse of ``{error, actions: [], message}``
    """
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "actions": [], "message": message},
    )


def _jsonable(details: Any) -> Any:
    if details is None or isinstance(details, (str, int, float, bool, list, dict)):
        return details
    return str(details)


def upstream_error_response(exc: UpstreamServiceError) -> JSONResponse:
    """
    Map a generation service failure to the status the client sees.

    429 and 402 are passed through so the editor can tell rate limiting
    and exhausted credits apart; anything else is a 502.

    Args:
        exc: The upstream failure

    Returns:
        JSONResponse of ``{error, details}``
    """
    if exc.status_code == status.HTTP_429_TOO_MANY_REQUESTS:
        status_code = status.HTTP_429_TOO_MANY_REQUESTS
        error = "Rate limited by the AI provider. Please wait a moment and try again."
    elif exc.status_code == status.HTTP_402_PAYMENT_REQUIRED:
        status_code = status.HTTP_402_PAYMENT_REQUIRED
        error = "AI provider quota exhausted. Please add credits to continue."
    else:
        status_code = status.HTTP_502_BAD_GATEWAY
        error = "Failed to interpret command"

    return JSONResponse(
        status_code=status_code,
        content={"error": error, "details": _jsonable(exc.details) or exc.message},
    )
