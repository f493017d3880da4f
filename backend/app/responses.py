"""
Pokedex Backend — Response Envelopes
=====================================

Every response body produced by the API goes through one of these helpers:

    success → {"success": true,  "message": ..., "data": ...}
    failure → {"success": false, "message": ..., "errors"?: [...], "error"?: "..."}
"""

from typing import Any, List, Optional

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def success_response(
    data: Any = None,
    message: str = "Success",
    status_code: int = 200,
) -> JSONResponse:
    """Wrap `data` in a success envelope. `data` is always present, null when empty."""
    return JSONResponse(
        status_code=status_code,
        content={
            "success": True,
            "message": message,
            "data": jsonable_encoder(data),
        },
    )


def error_response(
    message: str = "An error occurred",
    status_code: int = 500,
    errors: Optional[List[str]] = None,
    error: Optional[str] = None,
    headers: Optional[dict] = None,
) -> JSONResponse:
    """Build a failure envelope; optional keys are only emitted when set."""
    content: dict = {
        "success": False,
        "message": message,
    }
    if errors:
        content["errors"] = errors
    if error:
        content["error"] = error
    return JSONResponse(status_code=status_code, content=content, headers=headers)
