"""
Pytest configuration - shared fixtures
"""
import os
import sys
from typing import Callable, Dict, Generator

# Login rate limits would trip over repeated test logins
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

# Add backend directory to sys.path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../backend"))

import pytest
from fastapi.testclient import TestClient

from listo.core.security import create_access_token
from listo.main import create_app
from listo.schemas import UserCreate, UserInDB
from listo.storage import MemoryStorage, SQLStorage, Storage


@pytest.fixture(params=["memory", "sql"])
def storage(request, tmp_path) -> Generator[Storage, None, None]:
    """Every store test runs once per backend."""
    if request.param == "memory":
        store = MemoryStorage()
    else:
        store = SQLStorage(f"sqlite:///{tmp_path / 'listo_test.db'}")
    try:
        yield store
    finally:
        store.close()


@pytest.fixture
def make_user(storage) -> Callable[..., UserInDB]:
    """Create users directly in the store; the password is stored as given."""

    def _make_user(username: str, name: str = None, email: str = None, avatar_url: str = None) -> UserInDB:
        return storage.create_user(
            UserCreate(
                username=username,
                name=name or username.capitalize(),
                email=email or f"{username}@example.com",
                avatar_url=avatar_url,
                password="not-a-real-hash",
            )
        )

    return _make_user


@pytest.fixture
def alice(make_user) -> UserInDB:
    return make_user("alice", name="Alice", avatar_url="https://example.com/alice.png")


@pytest.fixture
def bob(make_user) -> UserInDB:
    return make_user("bob", name="Bob")


@pytest.fixture
def carol(make_user) -> UserInDB:
    return make_user("carol", name="Carol")


@pytest.fixture
def client(storage) -> TestClient:
    return TestClient(create_app(storage=storage))


@pytest.fixture
def auth_headers() -> Callable[[UserInDB], Dict[str, str]]:
    def _auth_headers(user: UserInDB) -> Dict[str, str]:
        token = create_access_token({"sub": user.email, "user_id": user.id})
        return {"Authorization": f"Bearer {token}"}

    return _auth_headers
