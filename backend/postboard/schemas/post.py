"""
Postboard API: Post Schemas
============================

What:  pydantic models for the Post entity and its create/update/query variants.
Who:   FastAPI validates request bodies against them; PostService stores `Post`.

`authorId` must look like a UUID but is never checked against the user store.
"""

from typing import Any, List, Optional

from pydantic import Field, field_validator

from postboard.schemas.common import CamelModel, PageQuery, UUIDStr


class Post(CamelModel):
    id: UUIDStr = Field(description="Server-generated UUID")
    title: str
    content: str
    author_id: UUIDStr
    published: bool = False
    tags: Optional[List[str]] = None
    created_at: str = Field(description="ISO-8601 UTC creation time")
    updated_at: str = Field(description="ISO-8601 UTC time of the last update")


class PostCreate(CamelModel):
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)
    author_id: UUIDStr
    published: bool = Field(default=False, strict=True)
    tags: Optional[List[str]] = None


class PostUpdate(CamelModel):
    """Merge payload. The author cannot be reassigned."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    content: Optional[str] = Field(default=None, min_length=1)
    published: Optional[bool] = Field(default=None, strict=True)
    tags: Optional[List[str]] = None


class PostQuery(PageQuery):
    """Query parameters for GET /posts."""

    author_id: Optional[UUIDStr] = None
    published: Optional[bool] = Field(
        default=None, description="'true' or 'false'; omitted means no filter"
    )
    search: Optional[str] = Field(
        default=None, description="Case-insensitive substring of title or content"
    )

    @field_validator("published", mode="before")
    @classmethod
    def parse_boolean_flag(cls, v: Any) -> Any:
        """Query strings only accept the literals 'true' and 'false'."""
        if v is None or isinstance(v, bool):
            return v
        if isinstance(v, str):
            lowered = v.strip().lower()
            if lowered == "":
                return None
            if lowered in ("true", "false"):
                return lowered == "true"
        raise ValueError("published must be 'true' or 'false'")
