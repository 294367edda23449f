"""
Postboard API: Schema Validation Unit Tests
============================================

What we test:
    ✅ validate_payload reports every offending field as {path, message, code}
    ✅ Query schemas coerce page/limit/published from strings
    ✅ Strict typing on age and published
    ✅ camelCase on the wire, snake_case in Python
    ✅ paginate() slicing and meta
"""

import re

import pytest

from postboard.exceptions import ValidationError
from postboard.schemas.common import paginate, utc_now_iso, validate_payload, validation_details
from postboard.schemas.post import PostCreate, PostQuery, PostUpdate
from postboard.schemas.user import LoginRequest, UserCreate, UserQuery, UserUpdate

AUTHOR = "3f1c2a9e-8d7b-4c6a-9e5f-1a2b3c4d5e6f"


def _paths(exc_info):
    return {d["path"] for d in exc_info.value.details}


class TestUserCreate:
    def test_valid_payload(self):
        user = validate_payload(
            UserCreate, {"email": "a@b.com", "password": "secret1", "name": "A", "age": 18}
        )
        assert user.age == 18

    def test_age_is_optional(self):
        user = validate_payload(UserCreate, {"email": "a@b.com", "password": "secret1", "name": "A"})
        assert user.age is None

    def test_reports_every_offending_field(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload(UserCreate, {"email": "nope", "password": "123", "name": "", "age": 17})
        assert _paths(exc_info) == {"email", "password", "name", "age"}
        for detail in exc_info.value.details:
            assert set(detail) == {"path", "message", "code"}

    def test_codes_are_machine_readable(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload(UserCreate, {"email": "a@b.com", "password": "123", "name": "A"})
        assert exc_info.value.details[0]["code"] == "string_too_short"

    @pytest.mark.parametrize("age", [17, 121, "30", 30.5])
    def test_age_must_be_an_integer_in_range(self, age):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload(
                UserCreate, {"email": "a@b.com", "password": "secret1", "name": "A", "age": age}
            )
        assert _paths(exc_info) == {"age"}

    def test_name_longer_than_100_is_rejected(self):
        with pytest.raises(ValidationError):
            validate_payload(
                UserCreate, {"email": "a@b.com", "password": "secret1", "name": "x" * 101}
            )

    def test_login_requires_name(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload(LoginRequest, {"email": "a@b.com", "password": "secret1"})
        assert _paths(exc_info) == {"name"}


class TestUserUpdate:
    def test_only_set_fields_are_dumped(self):
        update = validate_payload(UserUpdate, {"name": "B"})
        assert update.model_dump(exclude_unset=True) == {"name": "B"}

    def test_empty_body_is_valid(self):
        assert validate_payload(UserUpdate, {}).model_dump(exclude_unset=True) == {}


class TestPostSchemas:
    def test_published_defaults_to_false(self):
        post = validate_payload(PostCreate, {"title": "T", "content": "C", "authorId": AUTHOR})
        assert post.published is False
        assert post.author_id == AUTHOR

    def test_author_id_must_be_a_uuid(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload(PostCreate, {"title": "T", "content": "C", "authorId": "nope"})
        assert _paths(exc_info) == {"authorId"}

    def test_published_is_strict_in_bodies(self):
        with pytest.raises(ValidationError):
            validate_payload(
                PostCreate,
                {"title": "T", "content": "C", "authorId": AUTHOR, "published": "true"},
            )

    def test_title_length_limits(self):
        with pytest.raises(ValidationError):
            validate_payload(PostCreate, {"title": "x" * 201, "content": "C", "authorId": AUTHOR})

    def test_update_ignores_author_id(self):
        update = validate_payload(PostUpdate, {"authorId": AUTHOR, "title": "New"})
        assert update.model_dump(exclude_unset=True) == {"title": "New"}


class TestQuerySchemas:
    def test_defaults(self):
        query = validate_payload(UserQuery, {})
        assert (query.page, query.limit, query.search) == (1, 10, None)

    def test_string_numbers_are_coerced(self):
        query = validate_payload(UserQuery, {"page": "2", "limit": "5"})
        assert (query.page, query.limit) == (2, 5)

    def test_blank_page_falls_back_to_default(self):
        query = validate_payload(UserQuery, {"page": "", "limit": " "})
        assert (query.page, query.limit) == (1, 10)

    @pytest.mark.parametrize("params", [{"page": "0"}, {"limit": "-1"}, {"page": "abc"}])
    def test_invalid_pagination(self, params):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload(UserQuery, params)
        assert _paths(exc_info) == set(params)

    @pytest.mark.parametrize(
        "raw, expected",
        [("true", True), ("false", False), ("TRUE", True), ("False", False), ("", None)],
    )
    def test_published_flag(self, raw, expected):
        assert validate_payload(PostQuery, {"published": raw}).published is expected

    @pytest.mark.parametrize("raw", ["1", "yes", "no", "0"])
    def test_published_flag_rejects_other_strings(self, raw):
        with pytest.raises(ValidationError) as exc_info:
            validate_payload(PostQuery, {"published": raw})
        assert _paths(exc_info) == {"published"}

    def test_author_id_filter_is_canonicalized(self):
        query = validate_payload(PostQuery, {"authorId": AUTHOR.upper()})
        assert query.author_id == AUTHOR


class TestPaginate:
    @pytest.mark.parametrize(
        "n, page, limit, expected_len, expected_pages",
        [(25, 1, 10, 10, 3), (25, 3, 10, 5, 3), (25, 4, 10, 0, 3), (0, 1, 10, 0, 0), (10, 1, 10, 10, 1)],
    )
    def test_slice_and_meta(self, n, page, limit, expected_len, expected_pages):
        result = paginate(list(range(n)), page, limit)
        assert len(result.data) == expected_len
        assert result.meta.total == n
        assert result.meta.total_pages == expected_pages

    def test_meta_serializes_camel_case(self):
        dumped = paginate([1, 2, 3], 1, 2).model_dump(by_alias=True)
        assert dumped["meta"] == {"page": 1, "limit": 2, "total": 3, "totalPages": 2}
        assert dumped["data"] == [1, 2]


def test_validation_details_strips_request_location():
    details = validation_details(
        [{"loc": ("body", "age"), "msg": "too young", "type": "greater_than_equal"}]
    )
    assert details == [{"path": "age", "message": "too young", "code": "greater_than_equal"}]


def test_utc_now_iso_format():
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", utc_now_iso())
