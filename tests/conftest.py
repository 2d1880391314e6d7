"""Shared test fixtures for the auth API tests."""

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import DuplicateKeyError

from auth_api.config import AuthConfig, Settings
from auth_api.dependencies import init_auth_services, reset_auth_services
from auth_api.services import AuthService, UserRepository

TEST_JWT_SECRET = "test-secret-key-for-testing-only"


class InMemoryUsersCollection:
    """
    Minimal stand-in for the Motor ``users`` collection.

    Honors the unique email index the way MongoDB does: the second insert
    with the same email raises DuplicateKeyError.
    """

    def __init__(self):
        self.docs = []
        self.indexes = []

    async def create_index(self, keys, **kwargs):
        self.indexes.append((keys, kwargs))
        return kwargs.get("name", "index")

    async def find_one(self, query):
        for doc in self.docs:
            if all(doc.get(key) == value for key, value in query.items()):
                return dict(doc)
        return None

    async def insert_one(self, doc):
        if any(existing["email"] == doc["email"] for existing in self.docs):
            raise DuplicateKeyError("E11000 duplicate key error collection: users index: email_unique")
        doc.setdefault("_id", ObjectId())
        self.docs.append(dict(doc))
        return SimpleNamespace(inserted_id=doc["_id"])


@pytest.fixture
def settings():
    return Settings(JWT_SECRET=TEST_JWT_SECRET, BCRYPT_ROUNDS=4, ENVIRONMENT="development")


@pytest.fixture
def auth_config(settings):
    return AuthConfig.from_settings(settings)


@pytest.fixture
def users_collection():
    return InMemoryUsersCollection()


@pytest.fixture
def mock_db(users_collection):
    db = MagicMock()
    db.__getitem__ = MagicMock(return_value=users_collection)
    return db


@pytest.fixture
def user_repository(users_collection):
    return UserRepository(users_collection, timeout=5)


@pytest.fixture
def auth_service(user_repository, auth_config):
    return AuthService.from_config(user_repository, auth_config)


@pytest.fixture
def client(settings, mock_db):
    from api import create_app

    app = create_app(settings)
    init_auth_services(mock_db, app.state.auth_config)
    # Lifespan is not entered, so no real MongoDB connection is made
    yield TestClient(app)
    reset_auth_services()


@pytest.fixture
def registered_user(client):
    payload = {"name": "Ada", "email": "ada@x.com", "password": "secret1"}
    response = client.post("/api/auth/register", json=payload)
    assert response.status_code == 201
    return payload
