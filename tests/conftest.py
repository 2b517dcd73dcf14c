"""Shared fixtures: an in-memory Mongo (mongomock), fast bcrypt, and a FastAPI app."""
from datetime import datetime, timezone

import mongomock
import pytest
from fastapi.testclient import TestClient
from mongoengine import connect, disconnect

from app.models.role import Role
from app.models.user import User
from app.services.auth import AuthService, TokenService
from app.services.seed import seed_roles
from app.utils.base import RoleName
from app.utils.config import Settings
from main import create_app


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        jwt_secret_key="test-secret",
        password_hash_rounds=4,
        access_token_expires_minutes=60,
        mongo_tls=False,
        admin_email="root@example.com",
        admin_password="Root1234#",
        admin_url_profile="https://github.com/root",
        admin_address="Lima, Perú",
        log_level="WARNING",
    )


@pytest.fixture(autouse=True)
def mongo():
    connect(
        "role_gate_test",
        alias="default",
        host="mongodb://localhost",
        mongo_client_class=mongomock.MongoClient,
        tz_aware=True,
    )
    User.ensure_indexes()
    Role.ensure_indexes()
    seed_roles()
    yield
    User.drop_collection()
    Role.drop_collection()
    disconnect(alias="default")


@pytest.fixture
def tokens(settings: Settings) -> TokenService:
    return TokenService(settings)


@pytest.fixture
def auth(settings: Settings, tokens: TokenService) -> AuthService:
    return AuthService(settings, tokens=tokens)


@pytest.fixture
def app(settings: Settings):
    return create_app(settings)


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def sign_up_fields() -> dict:
    return {
        "email": "a@b.com",
        "password": "Abcdef1#",
        "name": "A",
        "lastName": "B",
        "phoneNumber": "+51987654321",
        "birthdate": "2000-01-01",
    }


@pytest.fixture
def make_user(auth: AuthService):
    """Create a user directly in the store with the given roles."""

    def _make(email: str, password: str = "Secret12#", roles=(RoleName.USER,)) -> User:
        user = User(
            email=email,
            password=auth.hasher.hash(password),
            roles=[Role.get(role) for role in roles],
            name="Test",
            last_name="User",
            phone_number="+51 987 654 321",
            birthdate=datetime(1990, 5, 17, tzinfo=timezone.utc),
        )
        user.save()
        return user

    return _make
