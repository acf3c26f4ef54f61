"""
Anekazoo Animals API - Custom Exception Hierarchy
==================================================

What:  Application-specific exceptions for each outcome a request can fail with.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return JSON error responses with the matching HTTP status code.
Who:   Raised by the animal store and route handlers; caught by global handlers.
When:  During request processing.

Exception Hierarchy:
    AnekazooError (base)
    ├── ValidationError   → 400 Bad Request (malformed or undecodable input)
    ├── ConflictError     → 409 Conflict (animal name already taken)
    ├── NotFoundError     → 404 Not Found (no matching row, or no rows at all)
    └── StorageError      → 500 Internal Server Error (any other store failure)

The store never lets a raw driver exception escape: every SQLAlchemy/DBAPI
error is classified into ConflictError, NotFoundError or StorageError first.
"""

from typing import Any, Dict, Optional


class AnekazooError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(AnekazooError):
    """
    Raised when client input cannot be decoded into an animal.

    HTTP:    400 Bad Request

    Only type decoding is checked: a JSON object with string `name`,
    string `class` and integer `legs`. Values themselves are not range-checked.
    """

    def __init__(
        self,
        message: str = "Invalid input",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ConflictError(AnekazooError):
    """
    Raised when an insert violates the unique constraint on `animals.name`.

    HTTP:    409 Conflict

    A conflict is recoverable: nothing was written and the client may retry
    with a different name.
    """

    def __init__(
        self,
        message: str = "Animal with this name already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(AnekazooError):
    """
    Raised when a requested animal does not exist.

    HTTP:    404 Not Found

    Also raised by the list endpoint when the table is empty.
    """

    def __init__(
        self,
        message: str = "Animal not found",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = dict(context or {})
        ctx["resource"] = "animal"
        if resource_id is not None:
            ctx["resource_id"] = str(resource_id)
        super().__init__(message=message, context=ctx)
        self.resource_id = resource_id


class StorageError(AnekazooError):
    """
    Raised when a store operation fails for any reason other than a
    uniqueness violation or a missing row.

    When:    Connection lost, query error, constraint failure on update, etc.
    HTTP:    500 Internal Server Error

    The driver error is kept in `context` for the server log only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
