"""Access gate for protected endpoints.

This module provides:
- AccessGate - verifies the request's token and resolves it to a user
- @auth_required - runs the gate and passes the result to the view

A request either ends VERIFIED (the view receives an ``auth`` keyword
argument holding an AuthContext) or REJECTED (AuthenticationError, which the
app renders as a 401). There is exactly one verification attempt per
request.
"""

import logging
from functools import wraps

import jwt
from flask import Request, request

from ..exceptions import AuthenticationError
from .context import AuthContext, get_components
from .schemas import UserResponse
from .token import TokenIssuer
from .transport import SessionTransport

logger = logging.getLogger(__name__)


class AccessGate:
    """Validates an incoming token and resolves it to a stored user."""

    def __init__(self, issuer: TokenIssuer, store, transport: SessionTransport):
        self._issuer = issuer
        self._store = store
        self._transport = transport

    def authenticate(self, req: Request) -> AuthContext:
        """
        Run the gate for one request.

        Token lookup order:
        1. Cookie named after the session cookie
        2. Authorization: Bearer <token>

        Raises:
            AuthenticationError: If the token is missing, invalid, expired,
                or its user no longer exists
        """
        token_str = self._transport.extract_token(req)
        if not token_str:
            logger.warning("Unauthenticated request to protected endpoint")
            raise AuthenticationError(
                "Not authorized to access this route",
                {"code": "missing_auth"}
            )

        try:
            payload = self._issuer.verify(token_str)
        except jwt.ExpiredSignatureError:
            logger.warning("JWT token expired")
            raise AuthenticationError(
                "Not authorized, token failed",
                {"code": "token_expired"}
            )
        except jwt.InvalidTokenError as e:
            logger.warning(f"Invalid JWT token: {e}")
            raise AuthenticationError(
                "Not authorized, token failed",
                {"code": "invalid_token"}
            )

        record = self._store.get_by_id(payload.sub)
        if record is None:
            logger.warning(f"Token subject no longer exists: {payload.sub}")
            raise AuthenticationError("User not found", {"code": "user_not_found"})

        return AuthContext(user=UserResponse.from_record(record), token=token_str)


def auth_required(f):
    """
    Decorator to require a valid token for endpoint access.

    The decorated view receives the resolved identity as ``auth``.

    Example:
    ```python
    @auth_bp.get("/me")
    @auth_required
    def me(auth: AuthContext):
        return jsonify({"user": auth.user.to_json()})
    ```
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        kwargs["auth"] = get_components().gate.authenticate(request)
        return f(*args, **kwargs)

    return wrapper
