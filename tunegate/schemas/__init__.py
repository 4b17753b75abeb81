"""
Pydantic schemas for request validation.
"""

from pydantic import ValidationError

from .requests import GatewayQueryParams, parse_query_params

__all__ = [
    # Exceptions
    "ValidationError",
    # Query schemas
    "GatewayQueryParams",
    # Utility functions
    "parse_query_params",
]
