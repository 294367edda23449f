"""
Postboard API: Posts Route Handlers
====================================

What:  HTTP surface of the /posts resource. No route here requires a token.

Route Inventory (relative to API_PREFIX):
    GET    /posts                 ?page ?limit ?authorId ?published ?search
    GET    /posts/{post_id}
    POST   /posts                 → 201
    PUT    /posts/{post_id}       merge update
    DELETE /posts/{post_id}       → 204
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Request, Response, status

from postboard.dependencies import get_post_service
from postboard.schemas.common import ErrorResponse, Page, validate_payload
from postboard.schemas.post import Post, PostCreate, PostQuery, PostUpdate
from postboard.services.post_service import PostService

router = APIRouter(prefix="/posts", tags=["Posts"])

_VALIDATION = {400: {"description": "Invalid request data", "model": ErrorResponse}}
_NOT_FOUND = {404: {"description": "Post not found", "model": ErrorResponse}}


def post_query(request: Request) -> PostQuery:
    return validate_payload(PostQuery, dict(request.query_params))


@router.get(
    "",
    response_model=Page[Post],
    response_model_exclude_none=True,
    responses={**_VALIDATION},
    summary="Get all posts",
    description="Paginated list of posts. Filters: exact authorId, published=true|false, "
    "and a case-insensitive search over title and content.",
)
async def list_posts(
    query: PostQuery = Depends(post_query),
    service: PostService = Depends(get_post_service),
) -> Page[Post]:
    return await service.list_posts(query)


@router.get(
    "/{post_id}",
    response_model=Post,
    response_model_exclude_none=True,
    responses={**_VALIDATION, **_NOT_FOUND},
    summary="Get post by ID",
)
async def get_post(
    post_id: UUID,
    service: PostService = Depends(get_post_service),
) -> Post:
    return await service.get_post(str(post_id))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=Post,
    response_model_exclude_none=True,
    responses={**_VALIDATION},
    summary="Create new post",
)
async def create_post(
    payload: PostCreate,
    service: PostService = Depends(get_post_service),
) -> Post:
    return await service.create_post(payload)


@router.put(
    "/{post_id}",
    response_model=Post,
    response_model_exclude_none=True,
    responses={**_VALIDATION, **_NOT_FOUND},
    summary="Update post",
)
async def update_post(
    post_id: UUID,
    payload: PostUpdate,
    service: PostService = Depends(get_post_service),
) -> Post:
    return await service.update_post(str(post_id), payload)


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**_VALIDATION, **_NOT_FOUND},
    summary="Delete post",
)
async def delete_post(
    post_id: UUID,
    service: PostService = Depends(get_post_service),
) -> Response:
    await service.delete_post(str(post_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
