"""
Postboard API: Service Wiring
==============================

What:  Process-wide stores and services, exposed as FastAPI dependencies.
How:   Routes declare `Depends(get_user_service)` etc. Tests swap any of them
       with `app.dependency_overrides[get_user_service] = ...`.
When:  Singletons are created at import; every request shares them.
"""

from postboard.repositories.store import InMemoryStore
from postboard.schemas.post import Post
from postboard.schemas.user import User
from postboard.services.post_service import PostService
from postboard.services.token_service import TokenService, token_service
from postboard.services.user_service import UserService

# ── Singleton Instances ───────────────────────────────────────────────────
user_store: InMemoryStore[User] = InMemoryStore()
post_store: InMemoryStore[Post] = InMemoryStore()

user_service = UserService(store=user_store, tokens=token_service)
post_service = PostService(store=post_store)


def get_token_service() -> TokenService:
    return token_service


def get_user_service() -> UserService:
    return user_service


def get_post_service() -> PostService:
    return post_service
