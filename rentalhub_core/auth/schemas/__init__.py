"""Authentication Pydantic schemas for API validation."""

from .auth import (
    PASSWORD_MAX_BYTES,
    PASSWORD_MIN_LENGTH,
    AuthResponse,
    MessageResponse,
    TokenPayload,
    UserBase,
    UserCreate,
    UserLogin,
    UserRecord,
    UserResponse,
)

__all__ = [
    "PASSWORD_MAX_BYTES",
    "PASSWORD_MIN_LENGTH",
    "UserBase",
    "UserCreate",
    "UserLogin",
    "UserRecord",
    "UserResponse",
    "TokenPayload",
    "AuthResponse",
    "MessageResponse",
]
