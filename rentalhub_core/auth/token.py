"""JWT token service.

Tokens are HS256-signed JWTs carrying only three claims:

- sub: user ID
- iat: issued at (Unix seconds)
- exp: expires at (Unix seconds), a fixed ``expiry_days`` after ``iat``

Tokens are stateless bearer credentials. Nothing is persisted server-side,
so a token stays valid until ``exp`` even after logout.
"""

from datetime import timedelta

import jwt
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import TokenSigningError
from ..utils import isodatetime
from .schemas import TokenPayload


REQUIRED_CLAIMS = ["sub", "iat", "exp"]


class TokenIssuer:
    """Mints and verifies signed access tokens with a server-held secret."""

    def __init__(self, secret_key: str, expiry_days: int = 30, algorithm: str = "HS256"):
        self._secret_key = secret_key
        self._expiry = timedelta(days=expiry_days)
        self._algorithm = algorithm

    @property
    def expiry(self) -> timedelta:
        return self._expiry

    def issue(self, user_id: str) -> str:
        """
        Create a signed access token for a user.

        Raises:
            TokenSigningError: If no secret is configured or signing fails
        """
        if not self._secret_key:
            raise TokenSigningError("JWT secret key is not configured")

        now_ts = isodatetime.now_unix()
        payload = {
            "sub": user_id,
            "iat": now_ts,
            "exp": now_ts + int(self._expiry.total_seconds()),
        }

        try:
            return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
        except (jwt.PyJWTError, NotImplementedError) as e:
            raise TokenSigningError(f"Failed to sign token: {e}") from e

    def verify(self, token: str) -> TokenPayload:
        """
        Validate signature and expiry, then return the claims.

        Raises:
            jwt.ExpiredSignatureError: If the token has expired
            jwt.InvalidTokenError: If the token is malformed, forged, or
                missing a required claim
        """
        if not self._secret_key:
            raise TokenSigningError("JWT secret key is not configured")

        payload = jwt.decode(
            token,
            self._secret_key,
            algorithms=[self._algorithm],
            options={"require": REQUIRED_CLAIMS},
        )
        try:
            return TokenPayload(**payload)
        except PydanticValidationError as e:
            raise jwt.InvalidTokenError(f"Malformed token claims: {e}") from e


# ============================================================================
# Introspection (no signature check; never use for authorization)
# ============================================================================


def decode_token_no_validation(token: str) -> dict:
    """Decode token claims without verifying signature or expiry."""
    return jwt.decode(token, options={"verify_signature": False})


def get_token_expiry_remaining(token: str) -> timedelta | None:
    """
    Time left before the token expires.

    Returns:
        Remaining time, or None if the token is expired or undecodable
    """
    try:
        payload = decode_token_no_validation(token)
    except jwt.InvalidTokenError:
        return None

    exp = payload.get("exp")
    if not isinstance(exp, int):
        return None

    remaining = exp - isodatetime.now_unix()
    if remaining <= 0:
        return None
    return timedelta(seconds=remaining)


def is_token_expired(token: str) -> bool:
    """True if the token is expired or cannot be decoded."""
    return get_token_expiry_remaining(token) is None
