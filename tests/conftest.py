# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os

# Must happen before the application (and its settings) is imported anywhere
os.environ["ENVIRONMENT"] = "test"
os.environ["PASSWORD_SECURITY_LEVEL"] = "low"
os.environ["JWT_SECRET"] = "test-secret-key"
os.environ["LOG_TO_FILE"] = "false"

from collections.abc import AsyncGenerator, Callable, Generator  # noqa: E402
from datetime import timedelta  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402
from uuid import UUID, uuid4  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from blogging_api.dependencies import get_blog_repository, get_user_repository  # noqa: E402
from blogging_api.main import app  # noqa: E402
from blogging_api.managers import limiter  # noqa: E402
from blogging_api.managers.token_manager import create_access_token  # noqa: E402
from blogging_api.models import BlogDB, UserDB  # noqa: E402
from blogging_api.repositories import calculate_reading_time  # noqa: E402

# Never used to verify anything; repositories are mocked in route tests
FAKE_HASH = "$argon2id$v=19$m=8192,t=1,p=1$c29tZXNhbHQ$somehash"


def make_user(**overrides: object) -> UserDB:
    data: dict[str, object] = {
        "id": uuid4(),
        "first_name": "Test",
        "last_name": "User",
        "email": "test@example.com",
        "password_hash": FAKE_HASH,
    }
    data.update(overrides)
    return UserDB(**data)


def make_blog(author: UserDB, **overrides: object) -> BlogDB:
    body = str(overrides.pop("body", "FastAPI makes building APIs quick and pleasant. " * 10))
    data: dict[str, object] = {
        "id": uuid4(),
        "author_id": author.id,
        "title": "Getting Started with FastAPI",
        "description": "A short tour",
        "body": body,
        "state": "published",
        "read_count": 0,
        "reading_time": calculate_reading_time(body),
        "tags": ["python", "fastapi"],
    }
    data.update(overrides)
    return BlogDB(**data)


@pytest.fixture
def author() -> UserDB:
    """The user who owns the blogs in most tests."""
    return make_user(first_name="Ada", last_name="Lovelace", email="ada@example.com")


@pytest.fixture
def other_user() -> UserDB:
    return make_user(first_name="Alan", last_name="Turing", email="alan@example.com")


@pytest.fixture
def blog_factory(author: UserDB) -> Callable[..., BlogDB]:
    def factory(**overrides: object) -> BlogDB:
        return make_blog(author, **overrides)

    return factory


@pytest.fixture
def author_token(author: UserDB) -> str:
    return create_access_token(user_id=author.id, expires_delta=timedelta(minutes=30))


@pytest.fixture
def auth_headers(author_token: str) -> dict[str, str]:
    """Authorization header for ``author``."""
    return {"Authorization": f"Bearer {author_token}"}


@pytest.fixture
def other_headers(other_user: UserDB) -> dict[str, str]:
    token = create_access_token(user_id=other_user.id, expires_delta=timedelta(minutes=30))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def mock_user_repo(author: UserDB, other_user: UserDB) -> AsyncMock:
    """User repository double that knows ``author`` and ``other_user``."""
    users: dict[UUID, UserDB] = {author.id: author, other_user.id: other_user}
    repo = AsyncMock()
    repo.get_by_id.side_effect = lambda user_id: users.get(user_id)
    return repo


@pytest.fixture
def mock_blog_repo() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def mock_session() -> AsyncMock:
    """Async session double; ``add`` is synchronous on the real session."""
    session = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture(autouse=True)
def override_repositories(
    mock_user_repo: AsyncMock,
    mock_blog_repo: AsyncMock,
) -> Generator[None]:
    app.dependency_overrides[get_user_repository] = lambda: mock_user_repo
    app.dependency_overrides[get_blog_repository] = lambda: mock_blog_repo

    yield

    app.dependency_overrides = {}


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for testing."""
    limiter.enabled = False
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app),
    ) as ac:
        yield ac
    limiter.enabled = True
