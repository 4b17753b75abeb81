"""
Flask routes package for Tunegate.

This module handles HTTP requests and responses only.
All resolution and fallback logic is delegated to the services layer.

The single `main` Blueprint is split across feature modules for
navigability. All modules import `main` from this package and
register routes on it.
"""

import logging
from typing import Optional

from flask import Blueprint, current_app, jsonify, request

from tunegate.enums import EndpointKind
from tunegate.schemas import parse_query_params
from tunegate.services import GatewayService, LogicalRequest, NormalizedResponse
from tunegate.services.resolution import get_policy

logger = logging.getLogger(__name__)
main = Blueprint("main", __name__)


# =============================================================================
# Helper Functions (shared across all route modules)
# =============================================================================


def json_response(response: NormalizedResponse):
    """Serialize a NormalizedResponse with its status and cache headers."""
    resp = jsonify(response.body)
    resp.status_code = response.status_code
    for name, value in response.headers.items():
        resp.headers[name] = value
    return resp


def open_gateway() -> GatewayService:
    """Gateway bound to the current app's config, closed by the caller."""
    return GatewayService.from_flask_config(current_app.config)


def logical_request(
    kind: EndpointKind, identifier: Optional[str] = None
) -> LogicalRequest:
    """
    Build a LogicalRequest from the current query string.

    Only the parameters the endpoint reads are parsed.

    Raises:
        pydantic.ValidationError: If one of those parameters is malformed.
    """
    accepted = get_policy(kind).query_params
    params = parse_query_params(request.args, accepted).to_params()
    return LogicalRequest(kind=kind, identifier=identifier, params=params)


def serve(kind: EndpointKind, identifier: Optional[str] = None):
    """Run one logical request through a fresh gateway and serialize it."""
    logical = logical_request(kind, identifier)
    with open_gateway() as gateway:
        return json_response(gateway.handle(logical))


# =============================================================================
# Import route modules to register their routes on the blueprint.
# These imports MUST come after `main` is defined.
# =============================================================================

from tunegate.routes import (  # noqa: E402, F401
    core,
    music,
    trending,
    highlights,
)
