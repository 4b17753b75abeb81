"""Resolution package: identifier resolution, fallback chains and response normalization."""

from .base import (
    CacheHint,
    EndpointPolicy,
    GatewayError,
    LogicalRequest,
    MissingParameterError,
    NormalizedResponse,
    UnknownEndpointError,
)
from .endpoints import ENDPOINTS, get_policy, normalize
from .identifiers import IdentifierResolver
from .orchestrator import FallbackOrchestrator

__all__ = [
    "CacheHint",
    "EndpointPolicy",
    "ENDPOINTS",
    "FallbackOrchestrator",
    "GatewayError",
    "IdentifierResolver",
    "LogicalRequest",
    "MissingParameterError",
    "NormalizedResponse",
    "UnknownEndpointError",
    "get_policy",
    "normalize",
]
