"""
Global Flask error handlers.

Provides consistent ``{error: ...}`` JSON responses across all endpoints
by catching gateway exceptions and Pydantic validation errors.
"""

import logging

from flask import jsonify
from pydantic import ValidationError

from tunegate.services import GatewayError, UnknownEndpointError
from tunegate.upstream import UpstreamConfigurationError

logger = logging.getLogger(__name__)


def json_error_response(message: str, status_code: int):
    """Create a standardized JSON error response."""
    return jsonify({"error": message}), status_code


def register_error_handlers(app):
    """
    Register global error handlers with the Flask app.

    Args:
        app: The Flask application instance.
    """

    # =========================================================================
    # Pydantic Validation Errors (400)
    # =========================================================================

    @app.errorhandler(ValidationError)
    def handle_validation_error(error: ValidationError):
        """Handle Pydantic validation errors."""
        errors_list = []
        for err in error.errors():
            field = ".".join(str(loc) for loc in err["loc"])
            msg = err["msg"]
            errors_list.append(f"{field}: {msg}")

        message = "; ".join(errors_list) if errors_list else "Validation failed"
        logger.warning(f"Validation error: {message}")
        return json_error_response(message, 400)

    # =========================================================================
    # Server Errors (500)
    # =========================================================================

    @app.errorhandler(UnknownEndpointError)
    def handle_unknown_endpoint(error: UnknownEndpointError):
        logger.error(f"Unknown endpoint: {error}")
        return json_error_response("Endpoint not configured.", 500)

    @app.errorhandler(UpstreamConfigurationError)
    def handle_upstream_configuration_error(error: UpstreamConfigurationError):
        logger.error(f"Upstream configuration error: {error}")
        return json_error_response("Upstream not configured.", 500)

    @app.errorhandler(GatewayError)
    def handle_gateway_error(error: GatewayError):
        """Catch-all for gateway errors that escaped a route."""
        logger.error(f"Gateway error: {error}")
        return json_error_response(str(error), 500)

    # =========================================================================
    # HTTP Errors
    # =========================================================================

    @app.errorhandler(404)
    def handle_not_found(error):
        return json_error_response("Resource not found.", 404)

    @app.errorhandler(405)
    def handle_method_not_allowed(error):
        return json_error_response("Method not allowed.", 405)

    @app.errorhandler(500)
    def handle_internal_error(error):
        """Handle 500 Internal Server Error."""
        logger.error(f"Internal server error: {error}", exc_info=True)
        return json_error_response("An unexpected error occurred.", 500)

    logger.info("Global error handlers registered")
