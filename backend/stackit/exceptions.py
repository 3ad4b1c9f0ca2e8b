"""
StackIt Backend - Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions for the error scenarios services hit.
How:   Each exception carries a user-facing message and an optional context
       dict. Global exception handlers (registered in main.py) turn them into
       structured JSON error responses with the matching HTTP status code.
Who:   Raised by services and the auth dependency; caught by global handlers.

Exception Hierarchy:
    StackItError (base)
    ├── ValidationError          → 400 Bad Request
    ├── AuthenticationError      → 401 Unauthorized
    ├── NotFoundError            → 404 Not Found
    ├── ConflictError            → 409 Conflict
    └── DatabaseError            → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class StackItError(Exception):
    """
    Base exception for all StackIt application errors.

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


class ValidationError(StackItError):
    """
    Raised when client input fails a business rule.

    HTTP: 400 Bad Request. Schema-level failures raised by FastAPI
    (RequestValidationError) are mapped to the same response shape.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class AuthenticationError(StackItError):
    """
    Raised for a missing, malformed or expired bearer token and for bad
    login credentials.

    HTTP: 401 Unauthorized. The message is deliberately generic: login
    failures read "Invalid Credentials" whether the email or the password
    was wrong.
    """

    def __init__(
        self,
        message: str = "Unauthorized",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(StackItError):
    """
    Raised when a requested resource does not exist.

    When:    Answering a missing question, voting or commenting on a missing
             answer, marking someone else's notification as read.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource


class ConflictError(StackItError):
    """
    Raised when a write would violate a uniqueness rule.

    When:    Signing up with an email or username that is already registered.
    HTTP:    409 Conflict
    """

    def __init__(
        self,
        message: str = "Account already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(StackItError):
    """
    Raised when database operations fail unexpectedly.

    HTTP: 500 Internal Server Error. The client always gets a generic
    message; constraint names and query details are logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
