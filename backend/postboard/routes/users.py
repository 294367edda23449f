"""
Postboard API: Users Route Handlers
====================================

What:  HTTP surface of the /users resource and the login endpoint.
How:   FastAPI validates bodies and path ids; query strings go through
       `validate_payload` so they report errors in the same shape. All
       business rules live in UserService.

Route Inventory (relative to API_PREFIX):
    GET    /users                 paginated list, optional ?search
    GET    /users/{user_id}       own record only (Bearer token, sub == id)
    POST   /users                 create → 201
    PUT    /users/{user_id}       merge update
    DELETE /users/{user_id}       → 204
    POST   /users/auth/login      → {"token": ...}
"""

from typing import Any, Dict
from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status

from postboard.dependencies import get_user_service
from postboard.schemas.common import ErrorResponse, Page, validate_payload
from postboard.schemas.user import (
    LoginRequest,
    TokenResponse,
    User,
    UserCreate,
    UserQuery,
    UserUpdate,
)
from postboard.security import require_claims
from postboard.services.user_service import UserService


router = APIRouter(prefix="/users", tags=["Users"])

_VALIDATION = {400: {"description": "Invalid request data", "model": ErrorResponse}}
_NOT_FOUND = {404: {"description": "User not found", "model": ErrorResponse}}
_CONFLICT = {409: {"description": "User with email already exists", "model": ErrorResponse}}


def user_query(request: Request) -> UserQuery:
    """Validate the raw query string against UserQuery."""
    return validate_payload(UserQuery, dict(request.query_params))


@router.get(
    "",
    response_model=Page[User],
    response_model_exclude_none=True,
    responses={**_VALIDATION},
    summary="List users",
    description="Paginated list of users, optionally filtered by a case-insensitive "
    "substring of name or email (?search=). Supports ?page= and ?limit=.",
)
async def list_users(
    query: UserQuery = Depends(user_query),
    service: UserService = Depends(get_user_service),
) -> Page[User]:
    return await service.list_users(query)


@router.get(
    "/{user_id}",
    response_model=User,
    response_model_exclude_none=True,
    responses={
        **_VALIDATION,
        401: {"description": "Missing or invalid Authorization header", "model": ErrorResponse},
        403: {"description": "Cannot access another user's data", "model": ErrorResponse},
        **_NOT_FOUND,
    },
    summary="Get user by ID",
    description="Returns the caller's own user record. Requires a Bearer token whose "
    "subject equals the requested id.",
)
async def get_user(
    user_id: UUID,
    claims: Dict[str, Any] = Depends(require_claims),
    service: UserService = Depends(get_user_service),
) -> User:
    return await service.get_user(str(user_id), claims)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=User,
    response_model_exclude_none=True,
    responses={**_VALIDATION, **_CONFLICT},
    summary="Create new user",
)
async def create_user(
    payload: UserCreate,
    service: UserService = Depends(get_user_service),
) -> User:
    return await service.create_user(payload)


@router.put(
    "/{user_id}",
    response_model=User,
    response_model_exclude_none=True,
    responses={**_VALIDATION, **_NOT_FOUND, **_CONFLICT},
    summary="Update user",
    description="Merge update: only fields present in the body change.",
)
async def update_user(
    user_id: UUID,
    payload: UserUpdate,
    service: UserService = Depends(get_user_service),
) -> User:
    return await service.update_user(str(user_id), payload)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**_VALIDATION, **_NOT_FOUND},
    summary="Delete user",
)
async def delete_user(
    user_id: UUID,
    service: UserService = Depends(get_user_service),
) -> Response:
    await service.delete_user(str(user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/auth/login",
    response_model=TokenResponse,
    responses={
        **_VALIDATION,
        403: {"description": "Invalid credentials", "model": ErrorResponse},
    },
    summary="Authenticate user and return a token",
    description="Exchange email and password for a Bearer token. The body is validated "
    "against the create-user schema, so `name` must be present.",
    tags=["Auth"],
)
async def login(
    payload: LoginRequest,
    service: UserService = Depends(get_user_service),
) -> TokenResponse:
    return await service.login(payload)
