"""Authentication API endpoints for RentalHub Core.

Mounted under ``{api_prefix}/auth`` (``/api/auth`` by default):
- POST /signup - Create an account, set the session cookie
- POST /login  - Verify credentials, set the session cookie
- POST /logout - Clear the session cookie (stateless)
- GET  /me     - Current user profile (requires a token)

Every response is JSON with a boolean ``success`` field. The password hash
never appears in any response.
"""

import logging

from flask import Blueprint, jsonify

from ..api.validation import validate_request
from ..exceptions import AuthenticationError
from .context import AuthContext, get_components
from .decorators import auth_required
from .schemas import AuthResponse, MessageResponse, UserCreate, UserLogin

logger = logging.getLogger(__name__)


# Create blueprint
auth_bp = Blueprint("auth", __name__)


def _token_response(token: str, user, status: int):
    """Build the ``{success, token, user}`` body and set the session cookie."""
    response = jsonify(AuthResponse(token=token, user=user).to_json())
    response.status_code = status
    get_components().transport.set_token(response, token)
    return response


@auth_bp.route("/signup", methods=["POST"])
@validate_request
def signup(data: UserCreate):
    """
    Register a new user.

    Example request:
    ```json
    {"email": "a@b.com", "password": "secret1", "name": "Ada"}
    ```

    Example response (201):
    ```json
    {
        "success": true,
        "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
        "user": {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "email": "a@b.com",
            "name": "Ada",
            "createdAt": "2026-10-19T10:30:00Z"
        }
    }
    ```
    """
    token, user = get_components().service.signup(data)
    return _token_response(token, user, 201)


@auth_bp.route("/login", methods=["POST"])
@validate_request
def login(data: UserLogin):
    """
    Authenticate a user and return a token.

    Unknown email and wrong password both return
    401 ``{"success": false, "message": "Invalid credentials"}``.
    """
    token, user = get_components().service.login(data)
    return _token_response(token, user, 200)


@auth_bp.route("/logout", methods=["POST"])
def logout():
    """
    Log out by clearing the session cookie.

    Tokens are self-validating and stateless; nothing is revoked
    server-side. Always returns 200.
    """
    response = jsonify(
        MessageResponse(message="User logged out successfully").model_dump()
    )
    get_components().transport.clear_token(response)
    return response, 200


@auth_bp.route("/me", methods=["GET"])
@auth_required
def me(auth: AuthContext):
    """
    Get the current user's profile.

    Accepts the token as the session cookie or as
    ``Authorization: Bearer <token>``.
    """
    user = get_components().service.get_user(auth.user.id)
    if user is None:
        raise AuthenticationError("User not found", {"code": "user_not_found"})

    return jsonify({"success": True, "user": user.to_json()}), 200
