"""
Postboard API: Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the whole suite.
How:   Environment variables are set before any `postboard` import so the
       settings singleton is built for testing. API tests get a fresh app
       whose service dependencies point at empty stores.

Fixture Hierarchy (all function-scoped):
    ├── user_store / post_store: empty InMemoryStore instances
    ├── token_service:           TokenService with the test secret
    ├── user_service / post_service
    ├── app:                     create_app() with dependency_overrides
    └── client:                  httpx AsyncClient over ASGITransport
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["ENVIRONMENT"] = "test"
os.environ["JWT_SECRET"] = "test-secret-not-for-production"
os.environ["API_PREFIX"] = "/v1"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from postboard.dependencies import get_post_service, get_token_service, get_user_service
from postboard.main import create_app
from postboard.repositories.store import InMemoryStore
from postboard.services.post_service import PostService
from postboard.services.token_service import TokenService
from postboard.services.user_service import UserService

TEST_SECRET = "test-secret-not-for-production"


@pytest.fixture
def user_store():
    return InMemoryStore()


@pytest.fixture
def post_store():
    return InMemoryStore()


@pytest.fixture
def token_service():
    return TokenService(secret=TEST_SECRET)


@pytest.fixture
def user_service(user_store, token_service):
    return UserService(store=user_store, tokens=token_service)


@pytest.fixture
def post_service(post_store):
    return PostService(store=post_store)


@pytest.fixture
def user_payload():
    """A valid POST /users body."""
    return {"email": "a@b.com", "password": "secret1", "name": "A", "age": 30}


@pytest.fixture
def app(user_service, post_service, token_service):
    application = create_app()
    application.dependency_overrides[get_user_service] = lambda: user_service
    application.dependency_overrides[get_post_service] = lambda: post_service
    application.dependency_overrides[get_token_service] = lambda: token_service
    yield application
    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app):
    """
    HTTPX AsyncClient routed straight into the app.

    Unhandled exceptions come back as 500 responses instead of being raised
    into the test, so the catch-all handler can be asserted on.
    """
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
