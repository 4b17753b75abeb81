"""
Upstream module exceptions.

Provides a small exception hierarchy for upstream client setup.
Per-call failures are never raised; they are classified into an
UpstreamOutcome instead.
"""


class UpstreamError(Exception):
    """Base exception for all upstream-related errors."""
    pass


class UpstreamConfigurationError(UpstreamError):
    """Raised when an upstream has no base URL configured."""

    def __init__(self, upstream: str):
        super().__init__(f"No base URL configured for upstream '{upstream}'")
        self.upstream = upstream
