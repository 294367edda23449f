"""
Postboard API: User Service Unit Tests
=======================================

What:  UserService against a real InMemoryStore (no HTTP).

What we test:
    ✅ Create assigns id/timestamps; duplicate email → ConflictError, store unchanged
    ✅ get_user enforces token subject == id before lookup
    ✅ Merge update, email re-check, updatedAt refresh
    ✅ Delete and NotFoundError paths
    ✅ Login issues a verifiable token; bad credentials → ForbiddenError
    ✅ Search + pagination
"""

import uuid

import pytest

from postboard.exceptions import ConflictError, ForbiddenError, NotFoundError
from postboard.schemas.user import LoginRequest, UserCreate, UserQuery, UserUpdate


def _create(email="a@b.com", name="A", **extra):
    return UserCreate(email=email, password="secret1", name=name, **extra)


class TestCreateUser:
    @pytest.mark.asyncio
    async def test_assigns_id_and_timestamps(self, user_service, user_store):
        user = await user_service.create_user(_create(age=30))
        assert uuid.UUID(user.id)
        assert user.created_at == user.updated_at
        assert user.age == 30
        assert user_store.find_by_id(user.id) == user

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts_without_mutation(self, user_service, user_store):
        await user_service.create_user(_create())
        with pytest.raises(ConflictError) as exc_info:
            await user_service.create_user(_create(name="Other"))
        assert exc_info.value.message == "User with this email already exists"
        assert user_store.count() == 1


class TestGetUser:
    @pytest.mark.asyncio
    async def test_own_record(self, user_service):
        user = await user_service.create_user(_create())
        assert await user_service.get_user(user.id, {"sub": user.id}) == user

    @pytest.mark.asyncio
    async def test_other_subject_is_forbidden(self, user_service):
        user = await user_service.create_user(_create())
        with pytest.raises(ForbiddenError):
            await user_service.get_user(user.id, {"sub": str(uuid.uuid4())})

    @pytest.mark.asyncio
    async def test_own_subject_but_deleted_is_not_found(self, user_service):
        user = await user_service.create_user(_create())
        await user_service.delete_user(user.id)
        with pytest.raises(NotFoundError):
            await user_service.get_user(user.id, {"sub": user.id})


class TestUpdateUser:
    @pytest.mark.asyncio
    async def test_merges_only_provided_fields(self, user_service):
        user = await user_service.create_user(_create(age=30))
        updated = await user_service.update_user(user.id, UserUpdate(name="B"))
        assert updated.name == "B"
        assert updated.age == 30
        assert updated.email == user.email
        assert updated.created_at == user.created_at
        assert updated.updated_at >= user.updated_at

    @pytest.mark.asyncio
    async def test_email_taken_by_another_user_conflicts(self, user_service):
        first = await user_service.create_user(_create(email="a@b.com"))
        await user_service.create_user(_create(email="c@d.com"))
        with pytest.raises(ConflictError):
            await user_service.update_user(first.id, UserUpdate(email="c@d.com"))

    @pytest.mark.asyncio
    async def test_keeping_own_email_is_allowed(self, user_service):
        user = await user_service.create_user(_create())
        updated = await user_service.update_user(user.id, UserUpdate(email="a@b.com", age=40))
        assert updated.age == 40

    @pytest.mark.asyncio
    async def test_missing_user(self, user_service):
        with pytest.raises(NotFoundError):
            await user_service.update_user(str(uuid.uuid4()), UserUpdate(name="B"))


class TestDeleteUser:
    @pytest.mark.asyncio
    async def test_delete_then_missing(self, user_service, user_store):
        user = await user_service.create_user(_create())
        await user_service.delete_user(user.id)
        assert user_store.count() == 0
        with pytest.raises(NotFoundError):
            await user_service.delete_user(user.id)


class TestLogin:
    @pytest.mark.asyncio
    async def test_issues_token_with_subject(self, user_service, token_service):
        user = await user_service.create_user(_create())
        result = await user_service.login(
            LoginRequest(email="a@b.com", password="secret1", name="A")
        )
        assert token_service.verify(result.token) == {"sub": user.id, "email": "a@b.com"}

    @pytest.mark.asyncio
    async def test_wrong_password(self, user_service):
        await user_service.create_user(_create())
        with pytest.raises(ForbiddenError) as exc_info:
            await user_service.login(LoginRequest(email="a@b.com", password="wrong-1", name="A"))
        assert exc_info.value.message == "Invalid email or password"

    @pytest.mark.asyncio
    async def test_unknown_email(self, user_service):
        with pytest.raises(ForbiddenError):
            await user_service.login(LoginRequest(email="x@y.com", password="secret1", name="A"))


class TestListUsers:
    @pytest.mark.asyncio
    async def test_search_matches_name_or_email_case_insensitively(self, user_service):
        await user_service.create_user(_create(email="alice@b.com", name="Alice"))
        await user_service.create_user(_create(email="bob@b.com", name="Bob"))
        await user_service.create_user(_create(email="carol@ALI.com", name="Carol"))

        page = await user_service.list_users(UserQuery(search="ALI"))
        assert [u.name for u in page.data] == ["Alice", "Carol"]
        assert page.meta.total == 2

    @pytest.mark.asyncio
    async def test_pagination(self, user_service):
        for i in range(5):
            await user_service.create_user(_create(email=f"u{i}@b.com", name=f"U{i}"))
        page = await user_service.list_users(UserQuery(page=2, limit=2))
        assert [u.name for u in page.data] == ["U2", "U3"]
        assert (page.meta.total, page.meta.total_pages) == (5, 3)
