"""Pydantic schemas for authentication requests, responses and tokens."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

PASSWORD_MIN_LENGTH = 6
# bcrypt rejects input past this many bytes
PASSWORD_MAX_BYTES = 72


# ============================================================================
# User Schemas
# ============================================================================


class UserBase(BaseModel):
    """Fields shared by every user request schema."""

    email: EmailStr = Field(..., description="Email address (stored lower-cased)")

    @field_validator("email", mode="before")
    @classmethod
    def normalize_email(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v


class UserCreate(UserBase):
    """Signup request body."""

    password: str = Field(..., description="Plaintext password, at least 6 characters")
    name: str | None = Field(default=None, description="Optional display name")

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if len(v) < PASSWORD_MIN_LENGTH:
            raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
        if len(v.encode("utf-8")) > PASSWORD_MAX_BYTES:
            raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")
        return v

    @field_validator("name", mode="before")
    @classmethod
    def normalize_name(cls, v):
        if isinstance(v, str):
            v = v.strip()
            return v or None
        return v


class UserLogin(UserBase):
    """Login request body."""

    password: str = Field(..., min_length=1)


class UserRecord(BaseModel):
    """A user row as held by the credential store.

    ``password_hash`` is only populated when explicitly requested and is
    excluded from every dump.
    """

    id: str
    email: str
    name: str | None = None
    created_at: datetime
    password_hash: str | None = Field(default=None, exclude=True, repr=False)


class UserResponse(BaseModel):
    """Public-safe projection of a user: ``{id, email, name, createdAt}``."""

    id: str
    email: str
    name: str | None = None
    created_at: datetime = Field(..., serialization_alias="createdAt")

    @classmethod
    def from_record(cls, record: UserRecord) -> "UserResponse":
        return cls(
            id=record.id,
            email=record.email,
            name=record.name,
            created_at=record.created_at,
        )

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


# ============================================================================
# Token Schemas
# ============================================================================


class TokenPayload(BaseModel):
    """Verified JWT claims."""

    sub: str = Field(..., description="User ID")
    iat: int = Field(..., description="Issued at (Unix seconds)")
    exp: int = Field(..., description="Expires at (Unix seconds)")


# ============================================================================
# Response Bodies
# ============================================================================


class AuthResponse(BaseModel):
    """Signup/login success body."""

    success: bool = True
    token: str
    user: UserResponse

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class MessageResponse(BaseModel):
    """Plain ``{success, message}`` body."""

    success: bool = True
    message: str
