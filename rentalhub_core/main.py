"""Flask application entry point."""

import logging

from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .auth.api import auth_bp
from .auth.context import EXTENSION_KEY, AuthComponents
from .auth.decorators import AccessGate
from .auth.service import AuthService, PasswordHasher
from .auth.token import TokenIssuer
from .auth.transport import SessionTransport
from .config import Settings, settings
from .db import init_db
from .db.users import UserStore
from .exceptions import RentalHubError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def _error_body(error_type: str, message: str, details: dict | None = None) -> dict:
    response = {
        "success": False,
        "message": message,
        "error": {"type": error_type},
    }
    if details:
        response["error"]["details"] = details
    return response


# Error handlers
def handle_rentalhub_error(error: RentalHubError):
    """Render any RentalHubError with its mapped status code."""
    if error.status_code >= 500:
        logger.error(f"{error.__class__.__name__}: {error.message}")
    return jsonify(
        _error_body(error.__class__.__name__, error.message, error.details)
    ), error.status_code


def handle_http_error(error: HTTPException):
    """Handle routing errors (404, 405, ...) raised by Werkzeug."""
    error_type = "ResourceNotFound" if error.code == 404 else error.name.replace(" ", "")
    return jsonify(_error_body(error_type, error.description)), error.code


def handle_internal_error(error: Exception):
    """Handle unexpected exceptions without leaking internals."""
    logger.exception(f"Internal error: {error}")
    return jsonify(
        _error_body("InternalServerError", "An internal error occurred")
    ), 500


def health():
    """Health check endpoint."""
    return jsonify({"status": "ok"})


def initialize_database(database_path: str) -> None:
    """Initialize database on app startup. Failure here is fatal."""
    try:
        init_db(database_path)
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise


def create_app(config: Settings | None = None, store=None) -> Flask:
    """
    Build the Flask application.

    Args:
        config: Settings to use (defaults to the environment-loaded settings)
        store: Credential store; defaults to a SQLite UserStore at
               ``config.database_path``, initialized on startup

    Returns:
        Configured Flask app with auth components in ``app.extensions``
    """
    config = config or settings

    app = Flask(__name__)

    # CORS configuration
    CORS(app, origins=config.cors_origins, supports_credentials=True)

    if store is None:
        initialize_database(config.database_path)
        store = UserStore(config.database_path)

    issuer = TokenIssuer(
        config.jwt_secret_key,
        expiry_days=config.jwt_expiry_days,
        algorithm=config.jwt_algorithm,
    )
    transport = SessionTransport(
        cookie_name=config.cookie_name,
        secure=config.is_production,
        max_age=issuer.expiry,
    )
    app.extensions[EXTENSION_KEY] = AuthComponents(
        service=AuthService(store, PasswordHasher(config.bcrypt_work_factor), issuer),
        gate=AccessGate(issuer, store, transport),
        transport=transport,
    )

    app.register_error_handler(RentalHubError, handle_rentalhub_error)
    app.register_error_handler(HTTPException, handle_http_error)
    app.register_error_handler(Exception, handle_internal_error)

    app.add_url_rule("/health", view_func=health)
    app.register_blueprint(auth_bp, url_prefix=f"{config.api_prefix}/auth")

    logger.info(f"RentalHub Core ready ({config.environment})")
    return app


if __name__ == "__main__":
    create_app().run(host=settings.host, port=settings.port, debug=not settings.is_production)
