"""Flask application entry point."""

import logging

from flask import Flask, jsonify
from flask_cors import CORS

from .api.v1 import api_v1_bp
from .config import settings
from .db import init_db
from .exceptions import (
    AuthenticationError,
    AuthorizationError,
    MyGramError,
    ResourceNotFound,
    ValidationError,
)

# Configure logging
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# Create Flask app
app = Flask(__name__)

# CORS configuration
CORS(app, origins=settings.cors_origins, supports_credentials=True)


# Database initialization (runs once on app startup)
def initialize_database():
    """Initialize database on app startup."""
    try:
        init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise


with app.app_context():
    initialize_database()


# ============================================================================
# Error handlers
# ============================================================================


def _error_response(error: MyGramError, status: int):
    """Build the {"message", "errors"} envelope; errors omitted when empty."""
    response = {"message": error.message}
    if error.errors:
        response["errors"] = error.errors
    return jsonify(response), status


@app.errorhandler(ValidationError)
def handle_validation_error(error):
    """Handle ValidationError exceptions."""
    return _error_response(error, 400)


@app.errorhandler(AuthenticationError)
def handle_authentication_error(error):
    """Handle AuthenticationError exceptions."""
    return _error_response(error, 401)


@app.errorhandler(AuthorizationError)
def handle_authorization_error(error):
    """Handle AuthorizationError exceptions."""
    return _error_response(error, 403)


@app.errorhandler(ResourceNotFound)
def handle_not_found(error):
    """Handle ResourceNotFound exceptions."""
    return _error_response(error, 404)


@app.errorhandler(MyGramError)
def handle_mygram_error(error):
    """Handle any other MyGramError (storage, hashing, signing)."""
    logger.error(f"{error.__class__.__name__}: {error.message} {error.errors}")
    return _error_response(error, 500)


@app.errorhandler(500)
def handle_internal_error(error):
    """Handle internal server errors."""
    logger.error(f"Internal error: {error}")
    return jsonify({"message": "An internal error occurred"}), 500


# Health check endpoint
@app.route("/health")
def health():
    """Health check endpoint."""
    return jsonify({"status": "ok"})


# Register API blueprints
app.register_blueprint(api_v1_bp)


if __name__ == "__main__":
    app.run(debug=True)
