"""
Pokedex Backend — Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions for every failure the API reports.
How:   Each exception carries a client-safe message, an HTTP status code and
       an optional context dict. The global handlers registered in main.py
       turn them into the uniform `{success: false, ...}` envelope.
Who:   Raised by the store, the validation helpers and the route layer.

Exception Hierarchy:
    PokedexError (base)          → 500 Internal Server Error
    ├── ValidationError          → 400 Bad Request (all messages surfaced)
    ├── InvalidIdError           → 400 Bad Request
    ├── MalformedRequestError    → 400 Bad Request (body is not valid JSON)
    ├── NotFoundError            → 404 Not Found
    ├── StorageReadError         → 500 Internal Server Error
    └── StorageWriteError        → 500 Internal Server Error

The service layer never raises NotFoundError itself: missing records come
back as None/False and the routes translate that into a 404.
"""

from typing import Any, Dict, List, Optional


class PokedexError(Exception):
    """
    Base exception for all Pokedex application errors.

    Attributes:
        message:      User-facing error description (safe to return in API response)
        status_code:  HTTP status the global handler responds with
        context:      Additional debug info (logged, NOT returned to client)
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PokedexError):
    """
    Raised when a request payload fails shape validation.

    Carries every violation found, not just the first one, so the client
    can fix the whole payload in a single round trip.

    Example response:
        {
            "success": false,
            "message": "Validation failed",
            "errors": [
                "Name is required and must be a non-empty string",
                "Type is required and must be a non-empty array"
            ]
        }
    """

    status_code = 400

    def __init__(
        self,
        errors: Optional[List[str]] = None,
        message: str = "Validation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.errors = list(errors or [])


class InvalidIdError(PokedexError):
    """Raised when a path identifier is not a positive integer."""

    status_code = 400

    def __init__(
        self,
        raw_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if raw_id is not None:
            ctx["raw_id"] = raw_id
        super().__init__(message="Invalid ID. Must be a positive number", context=ctx)


class MalformedRequestError(PokedexError):
    """
    Raised when the request body cannot be decoded as JSON.

    The decoder's own message is kept in `detail` and returned as the
    envelope's `error` field so clients can locate the syntax problem.
    """

    status_code = 400

    def __init__(
        self,
        detail: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message="Invalid JSON format", context=context)
        self.detail = detail


class NotFoundError(PokedexError):
    """
    Raised by the route layer when an operation targets a nonexistent id.

    HTTP: 404 Not Found
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "Pokemon",
        resource_id: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)


class StorageReadError(PokedexError):
    """
    Raised when the collection file cannot be read or parsed.

    When:    File missing, permission denied, invalid JSON, or the document
             is not a JSON array.
    HTTP:    500 Internal Server Error. The underlying OS/decoder message is
             only returned outside production.
    """

    def __init__(
        self,
        message: str = "Error reading Pokemon data",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StorageWriteError(PokedexError):
    """Raised when the collection file cannot be written or replaced."""

    def __init__(
        self,
        message: str = "Error saving Pokemon data",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
