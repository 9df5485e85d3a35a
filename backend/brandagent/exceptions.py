"""
BrandAgent Backend - Custom Exception Hierarchy
=================================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes. They replace generic Python exceptions that would leak
       internal details to the client.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return `{"error": message}` JSON bodies with the matching status code.
Who:   Raised by services and dependencies; caught by global handlers.

Exception Hierarchy:
    BrandAgentError (base)
    ├── ValidationError      → 400 Bad Request (missing/invalid fields)
    ├── ConflictError        → 400 Bad Request (email already registered)
    ├── AuthError            → 401 Unauthorized (bad credentials, bad token)
    ├── ForbiddenError       → 403 Forbidden (valid token, wrong role)
    ├── InternalError        → 500 Internal Server Error (generic to client)
    └── ConfigurationError   → raised at startup, never reaches a client
"""

from typing import Any, Dict, Optional


class BrandAgentError(Exception):
    """
    Base exception for all BrandAgent application errors.

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


class ValidationError(BrandAgentError):
    """
    Raised when client input fails validation.

    When:    Missing email/password, malformed JSON body, wrong field types.
    HTTP:    400 Bad Request
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


class ConflictError(BrandAgentError):
    """
    Raised when a write violates a uniqueness constraint.

    When:    Registering an email that already exists. Detected by the store's
             unique index, so concurrent duplicate registrations also land here.
    HTTP:    400 Bad Request (kept for client compatibility, not 409)
    """

    def __init__(
        self,
        message: str = "user exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class AuthError(BrandAgentError):
    """
    Raised for bad credentials and for missing, malformed or expired tokens.

    The message never says which token check failed; "unauthorized" covers
    expiry, bad signature and garbage alike.
    HTTP:    401 Unauthorized
    """

    def __init__(
        self,
        message: str = "unauthorized",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(BrandAgentError):
    """Valid token, insufficient role. HTTP 403."""

    def __init__(
        self,
        message: str = "forbidden",
        required_role: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if required_role:
            ctx["required_role"] = required_role
        super().__init__(message=message, context=ctx)
        self.required_role = required_role


class InternalError(BrandAgentError):
    """
    Raised when store or runtime operations fail unexpectedly.

    Security Note:
        The message returned to the client is always generic.
        The underlying error type and detail go into `context` and the
        server log only.
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "internal server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ConfigurationError(BrandAgentError):
    """Required configuration is missing or invalid. Raised during startup."""

    def __init__(
        self,
        message: str = "Invalid configuration",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
