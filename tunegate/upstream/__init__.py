"""
Upstream integration module.

Architecture:
    - models.py: CandidateAttempt and UpstreamOutcome value objects
    - http_client.py: UpstreamHTTPClient, one classified call per attempt
    - exceptions.py: Exception hierarchy

Usage:
    from tunegate.upstream import CandidateAttempt, UpstreamHTTPClient

    with UpstreamHTTPClient.from_flask_config(app.config) as client:
        outcome = client.call(
            CandidateAttempt(path="/charts", params={"country": "ZZ"}, timeout=15)
        )
        if outcome.ok:
            ...
"""

from .exceptions import UpstreamError, UpstreamConfigurationError
from .http_client import UpstreamHTTPClient
from .models import CandidateAttempt, UpstreamOutcome

__all__ = [
    "UpstreamHTTPClient",
    "CandidateAttempt",
    "UpstreamOutcome",
    "UpstreamError",
    "UpstreamConfigurationError",
]
