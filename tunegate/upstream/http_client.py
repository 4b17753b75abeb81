"""
Lightweight HTTP client for the upstream music services.

Wraps requests.Session with base-URL routing per named upstream and
classifies every call into an UpstreamOutcome. Performs exactly one
network call per request; fallback and retry decisions belong to the
FallbackOrchestrator.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from typing import Any, Mapping, Optional

import requests
from requests.exceptions import RequestException, Timeout

from tunegate.enums import OutcomeStatus, Upstream
from .exceptions import UpstreamConfigurationError
from .models import CandidateAttempt, UpstreamOutcome

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30  # seconds
DEFAULT_USER_AGENT = "Tunegate/1.0"

_CONFIG_KEYS = {
    Upstream.PRIMARY: "UPSTREAM_BASE_URL",
    Upstream.SKIP_SEGMENTS: "SKIP_SEGMENTS_BASE_URL",
    Upstream.TRENDING: "TRENDING_BASE_URL",
    Upstream.LANGUAGE_TRENDING: "LANGUAGE_TRENDING_BASE_URL",
}


class UpstreamHTTPClient:
    """
    HTTP client for upstream API requests.

    One instance serves one inbound request; the session gives
    connection reuse across the calls of a single fallback chain.
    """

    def __init__(
        self,
        base_urls: Mapping[Upstream, Optional[str]],
        default_timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        """
        Initialize the HTTP client.

        Args:
            base_urls: Base URL for each named upstream. Missing or
                empty entries make calls to that upstream fail with a
                transport_error outcome.
            default_timeout: Ambient transport timeout in seconds, used
                when a candidate carries no explicit budget.
            user_agent: Value of the User-Agent header.
        """
        self._base_urls = dict(base_urls)
        self._default_timeout = default_timeout
        self._session = requests.Session()
        self._session.headers.update({
            "User-Agent": user_agent,
            "Accept": "application/json",
        })

    @classmethod
    def from_flask_config(cls, config: Mapping[str, Any]) -> "UpstreamHTTPClient":
        """Build a client from a Flask config mapping."""
        return cls(
            base_urls={
                upstream: config.get(key)
                for upstream, key in _CONFIG_KEYS.items()
            },
            default_timeout=config.get("UPSTREAM_TIMEOUT", DEFAULT_TIMEOUT),
            user_agent=config.get("UPSTREAM_USER_AGENT", DEFAULT_USER_AGENT),
        )

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def url_for(self, candidate: CandidateAttempt) -> str:
        """Absolute URL for a candidate's upstream and path."""
        base = self._base_urls.get(candidate.upstream)
        if not base:
            raise UpstreamConfigurationError(candidate.upstream)
        return f"{base.rstrip('/')}{candidate.path}"

    # -----------------------------------------------------------------
    # Internal request handling
    # -----------------------------------------------------------------

    def call(self, candidate: CandidateAttempt) -> UpstreamOutcome:
        """
        Execute one upstream call and classify the result.

        2xx is success, 404 is not_found, any other status is
        upstream_error. Exceeding an explicit timeout budget is a
        timeout; every other transport failure, including the ambient
        timeout, is a transport_error.
        """
        try:
            url = self.url_for(candidate)
        except UpstreamConfigurationError as e:
            logger.warning(f"{e}")
            return UpstreamOutcome(
                status=OutcomeStatus.TRANSPORT_ERROR,
                candidate=candidate,
                error=str(e),
            )

        explicit_budget = candidate.timeout is not None

        try:
            if explicit_budget:
                response = self._send_within_budget(candidate, url)
            else:
                response = self._send(candidate, url, self._default_timeout)
        except (Timeout, FutureTimeout) as e:
            if explicit_budget:
                logger.warning(
                    f"Upstream call {candidate.describe()} exceeded "
                    f"{candidate.timeout}s budget"
                )
                return UpstreamOutcome(
                    status=OutcomeStatus.TIMEOUT,
                    candidate=candidate,
                    error=str(e) or f"Exceeded {candidate.timeout}s budget",
                )
            return self._transport_error(candidate, e)
        except RequestException as e:
            return self._transport_error(candidate, e)

        return self._classify_response(candidate, response)

    def _send(self, candidate: CandidateAttempt, url: str, timeout: float):
        return self._session.request(
            candidate.method,
            url,
            params=candidate.params or None,
            timeout=timeout,
        )

    def _send_within_budget(self, candidate: CandidateAttempt, url: str):
        """
        Send a request that must complete within the candidate's budget.

        requests applies its timeout to each socket read, so a body that
        trickles in can outlast it. The request runs on a worker thread
        and the caller stops waiting once the budget is spent. A response
        that arrives after that is closed as soon as it lands.
        """
        executor = ThreadPoolExecutor(max_workers=1)
        future = executor.submit(self._send, candidate, url, candidate.timeout)
        try:
            return future.result(timeout=candidate.timeout)
        except FutureTimeout:
            future.add_done_callback(_close_late_response)
            raise
        finally:
            executor.shutdown(wait=False)

    def _classify_response(
        self, candidate: CandidateAttempt, response
    ) -> UpstreamOutcome:
        status_code = response.status_code

        if 200 <= status_code < 300:
            if status_code == 204 or not response.content:
                return UpstreamOutcome(
                    status=OutcomeStatus.SUCCESS,
                    status_code=status_code,
                    candidate=candidate,
                )
            try:
                payload = response.json()
            except ValueError as e:
                logger.warning(
                    f"Upstream {candidate.describe()} returned undecodable JSON: {e}"
                )
                return UpstreamOutcome(
                    status=OutcomeStatus.UPSTREAM_ERROR,
                    status_code=status_code,
                    candidate=candidate,
                    error="Malformed JSON payload",
                )
            return UpstreamOutcome(
                status=OutcomeStatus.SUCCESS,
                payload=payload,
                status_code=status_code,
                candidate=candidate,
            )

        if status_code == 404:
            logger.debug(f"Upstream {candidate.describe()} returned 404")
            return UpstreamOutcome(
                status=OutcomeStatus.NOT_FOUND,
                status_code=status_code,
                candidate=candidate,
                error="Resource not found",
            )

        logger.warning(f"Upstream {candidate.describe()} returned {status_code}")
        return UpstreamOutcome(
            status=OutcomeStatus.UPSTREAM_ERROR,
            status_code=status_code,
            candidate=candidate,
            error=f"Upstream error {status_code}",
        )

    @staticmethod
    def _transport_error(
        candidate: CandidateAttempt, error: Exception
    ) -> UpstreamOutcome:
        logger.warning(f"Network error calling {candidate.describe()}: {error}")
        return UpstreamOutcome(
            status=OutcomeStatus.TRANSPORT_ERROR,
            candidate=candidate,
            error=str(error),
        )


def _close_late_response(future) -> None:
    if future.cancelled() or future.exception() is not None:
        return
    future.result().close()
