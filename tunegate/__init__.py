import os
import logging
from flask import Flask
from config import config, validate_required_env_vars

logging.basicConfig(level=logging.DEBUG)
logger = logging.getLogger(__name__)


def create_app(config_name=None):
    """Create and configure the Flask application."""
    if config_name is None:
        config_name = os.getenv("FLASK_ENV", "production")

    # Ensure config_name is a known string
    if not isinstance(config_name, str) or config_name not in config:
        config_name = "production"

    logger.info("Creating app with config: %s", config_name)

    # Validate required environment variables
    try:
        validate_required_env_vars()
        logger.info("Environment validation passed")
    except ValueError as e:
        logger.error("Environment validation failed: %s", str(e))
        if config_name == "production":
            raise  # Fail fast in production
        else:
            logger.warning(
                "Continuing in %s mode with missing environment variables",
                config_name,
            )

    app = Flask(__name__)

    # Load config
    app.config.from_object(config[config_name])
    app.json.sort_keys = False

    # Log important config values
    logger.info("UPSTREAM_BASE_URL: %s", app.config.get("UPSTREAM_BASE_URL"))
    logger.info(
        "Upstream timeouts: default=%ss charts=%ss",
        app.config.get("UPSTREAM_TIMEOUT"),
        app.config.get("CHARTS_TIMEOUT"),
    )

    # Register blueprints
    from tunegate.routes import main as main_blueprint

    app.register_blueprint(main_blueprint)

    # Register global error handlers
    from tunegate.error_handlers import register_error_handlers

    register_error_handlers(app)

    # In development, responses without an explicit cache hint are marked
    # uncacheable so that proxies never hold on to stale data.
    if app.debug:

        @app.after_request
        def after_request(response):
            if "Cache-Control" not in response.headers:
                response.headers["Cache-Control"] = "no-cache"
                response.headers["Pragma"] = "no-cache"
            return response

    return app
