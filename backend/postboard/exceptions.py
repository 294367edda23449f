"""
Postboard API: Custom Exception Hierarchy
==========================================

What:  Application-specific exceptions for every failure the API reports.
How:   Each exception carries a message, an optional context dict, and a
       class-level HTTP status code plus error title. The global handlers
       registered in main.py turn them into the uniform error body:

           {"error": "<title>", "message": "<message>", "details": [...]}

Who:   Raised by services, the token service and the bearer dependency;
       caught by the handlers in main.py.

Exception Hierarchy:
    PostboardError (base)
    ├── ValidationError          → 400 Bad Request (field-level details)
    ├── UnauthorizedError        → 401 Unauthorized (no bearer credential)
    ├── ForbiddenError           → 403 Forbidden (bad token / wrong subject / bad login)
    ├── NotFoundError            → 404 Not Found
    └── ConflictError            → 409 Conflict (email uniqueness)

    TokenError (base, never reaches the client directly)
    ├── InvalidTokenError        → token is not three dot-separated parts
    ├── InvalidSignatureError    → signature does not match
    └── MalformedPayloadError    → claims segment cannot be decoded
"""

from typing import Any, Dict, List, Optional


class PostboardError(Exception):
    """
    Base exception for all Postboard application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code: int = 500
    error: str = "Internal Server Error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(PostboardError):
    """
    Raised when client input fails schema validation.

    `details` holds one entry per offending field:
        {"path": "age", "message": "Input should be ...", "code": "greater_than_equal"}
    """

    status_code = 400
    error = "Validation Error"

    def __init__(
        self,
        message: str = "Invalid request data",
        details: Optional[List[Dict[str, str]]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.details = details or []


class UnauthorizedError(PostboardError):
    """No usable bearer credential on a protected route."""

    status_code = 401
    error = "Unauthorized"

    def __init__(
        self,
        message: str = "Missing or invalid authorization header",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(PostboardError):
    """The caller is identified but not allowed (or the credentials are wrong)."""

    status_code = 403
    error = "Forbidden"

    def __init__(
        self,
        message: str = "You are not allowed to access this resource",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(PostboardError):
    """
    Raised when a requested resource does not exist.

    Stores return None for missing records; services convert that None into
    this exception so routes stay free of status-code logic.
    """

    status_code = 404
    error = "Not Found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ConflictError(PostboardError):
    """A write would break a uniqueness invariant (duplicate user email)."""

    status_code = 409
    error = "Conflict"

    def __init__(
        self,
        message: str = "Resource already exists",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


# ══════════════════════════════════════════════════════════════════════════
# Token errors
# ══════════════════════════════════════════════════════════════════════════


class TokenError(Exception):
    """Base class for token verification failures raised by TokenService.verify()."""


class InvalidTokenError(TokenError):
    """Token does not have the `header.claims.signature` structure."""


class InvalidSignatureError(TokenError):
    """Recomputed HMAC does not match the supplied signature."""


class MalformedPayloadError(TokenError):
    """Claims segment is not base64url-encoded JSON object."""
