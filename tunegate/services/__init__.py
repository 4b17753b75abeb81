"""
Tunegate Services Package

Usage:
    from tunegate.services import GatewayService, LogicalRequest
    from tunegate.enums import EndpointKind

    with GatewayService.from_flask_config(app.config) as gateway:
        response = gateway.handle(LogicalRequest(
            kind=EndpointKind.SEARCH,
            identifier="daft punk",
            params={"limit": 10},
        ))
"""

from tunegate.services.resolution import (
    GatewayError,
    LogicalRequest,
    MissingParameterError,
    NormalizedResponse,
    UnknownEndpointError,
)
from tunegate.services.gateway_service import GatewayService
from tunegate.services.trending_service import TrendingService

__all__ = [
    "GatewayService",
    "TrendingService",
    "LogicalRequest",
    "NormalizedResponse",
    "GatewayError",
    "MissingParameterError",
    "UnknownEndpointError",
]
