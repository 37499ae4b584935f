"""Authentication service: password hashing and the signup/login/me logic.

AuthService sits between the HTTP layer and the credential store. It never
touches Flask objects, so it can be exercised directly in tests with any
store that offers ``create``, ``find_by_email`` and ``get_by_id``.
"""

import logging

import bcrypt

from ..exceptions import AuthenticationError, ConflictError
from .schemas import PASSWORD_MAX_BYTES, UserCreate, UserLogin, UserResponse
from .token import TokenIssuer

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


class PasswordHasher:
    """Salted one-way password hashing with bcrypt."""

    def __init__(self, work_factor: int = 10):
        self._work_factor = work_factor

    def hash(self, password: str) -> str:
        """
        Hash a password using bcrypt.

        Returns:
            60-character bcrypt hash string (``$2b$...``)
        """
        salt = bcrypt.gensalt(rounds=self._work_factor)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, hashed: str) -> bool:
        """Check a plaintext password against a bcrypt hash."""
        password_bytes = password.encode("utf-8")
        # Longer inputs are refused at signup, so they can never match
        if len(password_bytes) > PASSWORD_MAX_BYTES:
            return False
        return bcrypt.checkpw(password_bytes, hashed.encode("utf-8"))


class AuthService:
    """Signup, login and current-user lookups."""

    def __init__(self, store, hasher: PasswordHasher, issuer: TokenIssuer):
        self._store = store
        self._hasher = hasher
        self._issuer = issuer

    def signup(self, data: UserCreate) -> tuple[str, UserResponse]:
        """
        Register a new user and issue a token.

        Returns:
            (token, public user profile)

        Raises:
            ConflictError: If the email is already registered
        """
        if self._store.find_by_email(data.email) is not None:
            logger.warning("Signup rejected: email already registered")
            raise ConflictError(
                "User already exists with this email",
                {"email": data.email}
            )

        password_hash = self._hasher.hash(data.password)
        record = self._store.create(data.email, password_hash, data.name)
        token = self._issuer.issue(record.id)

        logger.info(f"User signed up: {record.id}")
        return token, UserResponse.from_record(record)

    def login(self, data: UserLogin) -> tuple[str, UserResponse]:
        """
        Verify credentials and issue a token.

        Unknown email and wrong password fail with the same message.

        Raises:
            AuthenticationError: If credentials are invalid
        """
        record = self._store.find_by_email(data.email, include_password_hash=True)
        if record is None or not self._hasher.verify(data.password, record.password_hash):
            logger.warning("Failed login attempt")
            raise AuthenticationError(INVALID_CREDENTIALS)

        token = self._issuer.issue(record.id)

        logger.info(f"Successful login: {record.id}")
        return token, UserResponse.from_record(record)

    def get_user(self, user_id: str) -> UserResponse | None:
        """Fetch the public profile for a user ID, or None if it no longer exists."""
        record = self._store.get_by_id(user_id)
        if record is None:
            return None
        return UserResponse.from_record(record)
