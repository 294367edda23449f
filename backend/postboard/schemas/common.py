"""
Postboard API: Shared Schema Building Blocks
=============================================

What:  Base model, reusable field types, pagination/error/health envelopes,
       and the `validate_payload` helper every non-FastAPI validation goes through.
How:   `CamelModel` maps snake_case attributes to the camelCase wire format
       (`created_at` ↔ `createdAt`) and accepts either form on input.
"""

import math
import uuid
from datetime import datetime, timezone
from typing import Annotated, Any, Dict, Generic, Iterable, List, Optional, Sequence, Type, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from postboard.exceptions import ValidationError

T = TypeVar("T")
ModelT = TypeVar("ModelT", bound=BaseModel)

# Location prefixes FastAPI adds to request validation errors
_REQUEST_LOCATIONS = {"body", "query", "path", "header", "cookie"}


class CamelModel(BaseModel):
    """Base for every API model: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _canonical_uuid(value: str) -> str:
    try:
        return str(uuid.UUID(value))
    except (TypeError, ValueError, AttributeError):
        raise ValueError("Invalid UUID")


# A UUID kept as its canonical lowercase string form
UUIDStr = Annotated[str, AfterValidator(_canonical_uuid)]


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with millisecond precision, e.g. 2024-01-01T00:00:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


# ══════════════════════════════════════════════════════════════════════════
# Pagination
# ══════════════════════════════════════════════════════════════════════════


class PageMeta(CamelModel):
    page: int = Field(description="1-based page number")
    limit: int = Field(description="Items per page")
    total: int = Field(description="Items matching the filters, before slicing")
    total_pages: int = Field(description="ceil(total / limit)")


class PageQuery(CamelModel):
    """Shared `page`/`limit` query parameters; blank values fall back to 1 and 10."""

    page: int = Field(default=1, ge=1)
    limit: int = Field(default=10, ge=1)

    @field_validator("page", "limit", mode="before")
    @classmethod
    def blank_means_default(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None or (isinstance(v, str) and not v.strip()):
            return cls.model_fields[info.field_name].default
        return v


class Page(CamelModel, Generic[T]):
    """Paginated list envelope: {"data": [...], "meta": {...}}."""

    data: List[T]
    meta: PageMeta


def paginate(items: Sequence[T], page: int, limit: int) -> Page[T]:
    """
    Slice `items` to one page.

    offset = (page - 1) * limit, slice [offset, offset + limit). Pages past the
    end come back empty; total and total_pages always describe the full list.
    """
    total = len(items)
    offset = (page - 1) * limit
    return Page(
        data=list(items[offset:offset + limit]),
        meta=PageMeta(
            page=page,
            limit=limit,
            total=total,
            total_pages=math.ceil(total / limit),
        ),
    )


# ══════════════════════════════════════════════════════════════════════════
# Errors & Health
# ══════════════════════════════════════════════════════════════════════════


class ErrorDetail(BaseModel):
    path: str = Field(description="Dotted path of the offending field ('' for the whole body)")
    message: str = Field(description="Human-readable reason")
    code: str = Field(description="Machine-readable error code, e.g. string_too_short")


class ErrorResponse(BaseModel):
    """
    Standardized error body for every non-2xx response.

    Example:
        {
            "error": "Validation Error",
            "message": "Invalid request data",
            "details": [{"path": "age", "message": "...", "code": "greater_than_equal"}]
        }
    """

    error: str = Field(description="Short error title, e.g. 'Not Found'")
    message: str = Field(description="Human-readable error description")
    details: Optional[List[ErrorDetail]] = Field(default=None)


class HealthResponse(BaseModel):
    status: str = Field(examples=["ok"])
    timestamp: str = Field(examples=["2024-01-01T00:00:00.000Z"])
    version: str = Field(examples=["1.0.0"])


# ══════════════════════════════════════════════════════════════════════════
# Validation helper
# ══════════════════════════════════════════════════════════════════════════


def validation_details(errors: Iterable[Dict[str, Any]]) -> List[Dict[str, str]]:
    """
    Convert pydantic/FastAPI error dicts into [{path, message, code}].

    FastAPI prefixes locations with where the value came from ("body",
    "query", ...); that prefix is dropped so paths read like field names.
    """
    details = []
    for err in errors:
        loc = list(err.get("loc", ()))
        if loc and loc[0] in _REQUEST_LOCATIONS:
            loc = loc[1:]
        details.append(
            {
                "path": ".".join(str(part) for part in loc),
                "message": str(err.get("msg", "Invalid value")),
                "code": str(err.get("type", "invalid")),
            }
        )
    return details


def validate_payload(schema: Type[ModelT], data: Any) -> ModelT:
    """
    Validate `data` against `schema`.

    Returns:
        A typed, normalized instance of `schema`.

    Raises:
        ValidationError: listing every offending field (never just the first).
    """
    try:
        return schema.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationError(details=validation_details(e.errors()))
