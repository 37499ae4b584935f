"""Shared test fixtures for rentalhub-core."""

import pytest

from rentalhub_core.auth.schemas import UserCreate
from rentalhub_core.auth.service import AuthService, PasswordHasher
from rentalhub_core.auth.token import TokenIssuer
from rentalhub_core.config import Settings
from rentalhub_core.db import init_db
from rentalhub_core.db.users import UserStore
from rentalhub_core.main import create_app

TEST_SECRET = "test-secret-key-that-is-long-enough-for-hs256"
TEST_PASSWORD = "secret1"


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings pointing at a temp-file database with a fast bcrypt work factor."""
    return Settings(
        database_path=str(tmp_path / "rentalhub.db"),
        jwt_secret_key=TEST_SECRET,
        bcrypt_work_factor=4,
    )


@pytest.fixture
def store(test_settings) -> UserStore:
    """Credential store backed by a freshly initialized database."""
    init_db(test_settings.database_path)
    return UserStore(test_settings.database_path)


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(work_factor=4)


@pytest.fixture
def issuer() -> TokenIssuer:
    return TokenIssuer(TEST_SECRET, expiry_days=30)


@pytest.fixture
def service(store, hasher, issuer) -> AuthService:
    return AuthService(store, hasher, issuer)


@pytest.fixture
def app(test_settings, store):
    """Flask app wired to the test database."""
    app = create_app(test_settings)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    """Create test client for API testing."""
    with app.test_client() as client:
        yield client


@pytest.fixture
def test_user(service):
    """Register a test user.

    Returns a tuple of (user, password) where user is the UserResponse schema
    and password is the plain text password.
    """
    _token, user = service.signup(
        UserCreate(email="tester@example.com", password=TEST_PASSWORD, name="Tester")
    )
    return user, TEST_PASSWORD


@pytest.fixture
def jwt_token(test_user, issuer) -> str:
    """JWT token for the test user."""
    user, _password = test_user
    return issuer.issue(user.id)


@pytest.fixture
def auth_headers(jwt_token) -> dict:
    """Authorization header carrying the test user's token."""
    return {"Authorization": f"Bearer {jwt_token}"}
