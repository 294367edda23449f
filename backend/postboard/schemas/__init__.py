# Schemas package init
"""
Postboard API: Request/Response Schemas
========================================

What:  pydantic models defining the API contract, plus `validate_payload`,
       the single entry point for validating data outside FastAPI's own
       body parsing (query strings, login re-validation, tests).
"""

from postboard.schemas.common import (
    ErrorResponse,
    HealthResponse,
    Page,
    PageMeta,
    paginate,
    validate_payload,
)
from postboard.schemas.post import Post, PostCreate, PostQuery, PostUpdate
from postboard.schemas.user import (
    LoginRequest,
    TokenResponse,
    User,
    UserCreate,
    UserQuery,
    UserUpdate,
)

__all__ = [
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "Page",
    "PageMeta",
    "Post",
    "PostCreate",
    "PostQuery",
    "PostUpdate",
    "TokenResponse",
    "User",
    "UserCreate",
    "UserQuery",
    "UserUpdate",
    "paginate",
    "validate_payload",
]
