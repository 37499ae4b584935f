"""Typed containers for wired auth components and per-request identity."""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from flask import current_app

from .schemas import UserResponse

if TYPE_CHECKING:
    from .decorators import AccessGate
    from .service import AuthService
    from .transport import SessionTransport

EXTENSION_KEY = "rentalhub_auth"


@dataclass(frozen=True)
class AuthContext:
    """Identity resolved by the access gate for one request."""

    user: UserResponse
    token: str


@dataclass(frozen=True)
class AuthComponents:
    """Auth collaborators built once in ``create_app``."""

    service: "AuthService"
    gate: "AccessGate"
    transport: "SessionTransport"


def get_components() -> AuthComponents:
    """Return the components registered on the current Flask app."""
    return current_app.extensions[EXTENSION_KEY]

