"""Session transport: how the token travels between client and server.

Browsers get the token in an HTTP-only cookie; API clients may send it as
``Authorization: Bearer <token>``. When both are present the cookie wins.
"""

from datetime import timedelta

from flask import Request, Response

from ..utils import isodatetime

LOGOUT_PLACEHOLDER = "none"


class SessionTransport:
    """Cookie policy and token extraction."""

    def __init__(self, cookie_name: str = "token", secure: bool = False, max_age: timedelta = timedelta(days=30)):
        self.cookie_name = cookie_name
        self._secure = secure
        self._max_age = max_age

    def extract_token(self, request: Request) -> str | None:
        """Return the token from the cookie, else the Bearer header, else None."""
        token = request.cookies.get(self.cookie_name)
        if token:
            return token

        auth_header = request.headers.get("Authorization", "")
        parts = auth_header.split(" ")
        if len(parts) == 2 and parts[0].lower() == "bearer" and parts[1]:
            return parts[1]
        return None

    def set_token(self, response: Response, token: str) -> None:
        response.set_cookie(
            self.cookie_name,
            token,
            max_age=self._max_age,
            expires=isodatetime.from_unix(isodatetime.now_unix()) + self._max_age,
            httponly=True,
            secure=self._secure,
            samesite="Strict",
        )

    def clear_token(self, response: Response) -> None:
        """Overwrite the cookie with a placeholder that expires in one second."""
        response.set_cookie(
            self.cookie_name,
            LOGOUT_PLACEHOLDER,
            max_age=1,
            expires=isodatetime.from_unix(isodatetime.now_unix() + 1),
            httponly=True,
            secure=self._secure,
            samesite="Strict",
        )
