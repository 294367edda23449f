"""
Postboard API: User Service
============================

What:  Business rules for the /users resource: list, fetch-own-record,
       create, merge-update, delete, and password login.
How:   Operates on an injected EntityStore[User]; issues tokens through an
       injected TokenService. Failures are raised as application exceptions
       and formatted by the global handlers in main.py.
Who:   Called by routes/users.py through postboard.dependencies.

Known defects kept on purpose (see DESIGN.md):
    - passwords are stored and returned in plaintext
    - login is validated against the full create schema
    - only GET /users/{id} is protected; update and delete are open
"""

import hmac
import logging
import uuid
from typing import Any, Dict

from postboard.exceptions import ConflictError, ForbiddenError, NotFoundError
from postboard.repositories.store import EntityStore
from postboard.schemas.common import Page, paginate, utc_now_iso
from postboard.schemas.user import (
    LoginRequest,
    TokenResponse,
    User,
    UserCreate,
    UserQuery,
    UserUpdate,
)
from postboard.services.token_service import TokenService

logger = logging.getLogger(__name__)


class UserService:
    """
    Business logic layer for user operations.

    Responsibilities:
        - list_users(): substring search + page slicing
        - get_user(): ownership check against the token subject, then lookup
        - create_user() / update_user(): email uniqueness at write time
        - delete_user(): removal by id
        - login(): credential check and token issue
    """

    def __init__(self, store: EntityStore[User], tokens: TokenService):
        self.store = store
        self.tokens = tokens

    def _require(self, user_id: str) -> User:
        user = self.store.find_by_id(user_id)
        if user is None:
            raise NotFoundError(resource="user", resource_id=user_id)
        return user

    def _email_taken(self, email: str) -> bool:
        return bool(self.store.filter(lambda u: u.email == email))

    async def list_users(self, query: UserQuery) -> Page[User]:
        """Filter by case-insensitive substring of name or email, then paginate."""
        if query.search:
            needle = query.search.lower()
            users = self.store.filter(
                lambda u: needle in u.name.lower() or needle in u.email.lower()
            )
        else:
            users = self.store.find_all()
        return paginate(users, query.page, query.limit)

    async def get_user(self, user_id: str, claims: Dict[str, Any]) -> User:
        """
        Fetch a user's own record.

        Raises:
            ForbiddenError: the token subject is not `user_id`
            NotFoundError:  no such user (only reachable by its own subject)
        """
        if claims.get("sub") != user_id:
            logger.warning("Token subject %s tried to read user %s", claims.get("sub"), user_id)
            raise ForbiddenError(message="You are not allowed to access this user's data")
        return self._require(user_id)

    async def create_user(self, data: UserCreate) -> User:
        """
        Insert a new user with a generated UUID and timestamps.

        Raises:
            ConflictError: the email already belongs to a user (store unchanged)
        """
        if self._email_taken(data.email):
            logger.warning("Rejected duplicate email on create")
            raise ConflictError(message="User with this email already exists")

        now = utc_now_iso()
        user = User(
            id=str(uuid.uuid4()),
            **data.model_dump(exclude_none=True),
            created_at=now,
            updated_at=now,
        )
        self.store.insert(user)
        logger.info("User created: %s", user.id)
        return user

    async def update_user(self, user_id: str, data: UserUpdate) -> User:
        """
        Merge the provided fields into an existing user and refresh updatedAt.

        Raises:
            NotFoundError: no such user
            ConflictError: the new email belongs to another user
        """
        user = self._require(user_id)
        updates = data.model_dump(exclude_unset=True, exclude_none=True)

        new_email = updates.get("email")
        if new_email is not None and new_email != user.email and self._email_taken(new_email):
            logger.warning("Rejected duplicate email on update of user %s", user_id)
            raise ConflictError(message="User with this email already exists")

        merged = user.model_copy(update={**updates, "updated_at": utc_now_iso()})
        self.store.replace_at(user_id, merged)
        logger.info("User updated: %s (fields=%s)", user_id, sorted(updates))
        return merged

    async def delete_user(self, user_id: str) -> None:
        if not self.store.remove_by_id(user_id):
            raise NotFoundError(resource="user", resource_id=user_id)
        logger.info("User deleted: %s", user_id)

    async def login(self, data: LoginRequest) -> TokenResponse:
        """
        Check email/password and issue a token with claims {sub, email}.

        Raises:
            ForbiddenError: unknown email or wrong password (same message for both)
        """
        matches = self.store.filter(lambda u: u.email == data.email)
        user = matches[0] if matches else None
        if user is None or not hmac.compare_digest(
            user.password.encode("utf-8"), data.password.encode("utf-8")
        ):
            logger.warning("Failed login attempt")
            raise ForbiddenError(message="Invalid email or password")

        token = self.tokens.issue({"sub": user.id, "email": user.email})
        logger.info("Issued token for user %s", user.id)
        return TokenResponse(token=token)
