"""
Core routes: health check.
"""

import logging
from datetime import datetime, timezone

from flask import current_app, jsonify

from tunegate.routes import main

logger = logging.getLogger(__name__)


@main.route("/api/health")
def health():
    """Health check endpoint for Docker and monitoring."""
    upstream_configured = bool(current_app.config.get("UPSTREAM_BASE_URL"))
    overall_status = "healthy" if upstream_configured else "degraded"

    return (
        jsonify({
            "status": overall_status,
            "timestamp": datetime.now(
                timezone.utc
            ).isoformat(),
        }),
        200,
    )
