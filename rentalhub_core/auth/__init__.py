"""Authentication module for RentalHub Core.

This module provides:
- Schema validation for auth operations
- JWT token issuing and verification
- Password hashing and verification
- The access gate for protected endpoints
- Cookie / Bearer session transport

Auth endpoints (under {api_prefix}/auth):
- POST /signup - Create account and return JWT token
- POST /login - Authenticate and return JWT token
- POST /logout - Clear session cookie
- GET /me - Get current user info
"""

from . import schemas, token

__all__ = ["schemas", "token"]
