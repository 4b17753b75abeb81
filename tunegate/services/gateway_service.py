"""
Gateway service for serving logical requests.

Looks up the endpoint policy, resolves the identifier into a candidate
chain, runs the chain through the fallback orchestrator, normalizes the
outcome and attaches the cache hint. Never raises for upstream
failures; every path yields a NormalizedResponse.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import quote

from tunegate.upstream import CandidateAttempt, UpstreamHTTPClient, UpstreamOutcome
from tunegate.services.resolution import (
    EndpointPolicy,
    FallbackOrchestrator,
    IdentifierResolver,
    LogicalRequest,
    MissingParameterError,
    NormalizedResponse,
    get_policy,
    normalize,
)

logger = logging.getLogger(__name__)


class GatewayService:
    """Serves logical requests against the configured upstreams.

    Built once per inbound request and closed at its end; holds no
    state beyond the client and the read-only config.
    """

    def __init__(
        self,
        client,
        config: Mapping[str, Any],
        resolver: Optional[IdentifierResolver] = None,
    ):
        """
        Initialize the service.

        Args:
            client: Object with ``call(CandidateAttempt) -> UpstreamOutcome``.
            config: Flask config mapping (timeouts, cache windows).
            resolver: Identifier resolver; defaults to the standard policies.
        """
        self._client = client
        self._config = config
        self._resolver = resolver or IdentifierResolver()
        self._orchestrator = FallbackOrchestrator(client)

    @classmethod
    def from_flask_config(cls, config: Mapping[str, Any]) -> "GatewayService":
        return cls(UpstreamHTTPClient.from_flask_config(config), config)

    def close(self) -> None:
        close = getattr(self._client, "close", None)
        if close is not None:
            close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    # -----------------------------------------------------------------
    # Request handling
    # -----------------------------------------------------------------

    def handle(self, request: LogicalRequest) -> NormalizedResponse:
        """Serve one logical request end to end."""
        policy = get_policy(request.kind)
        try:
            outcome = self.fetch(policy, request)
        except MissingParameterError as e:
            logger.info(f"Rejected {request.kind} request: {e}")
            response = policy.missing_response()
            response.headers.update(self.cache_headers(policy, cacheable=False))
            return response

        response = normalize(request.kind, request, outcome)
        self._apply_cache_hint(policy, outcome, response)
        return response

    def fetch(
        self, policy: EndpointPolicy, request: LogicalRequest
    ) -> UpstreamOutcome:
        """
        Run the endpoint's fallback chain for a request.

        Raises:
            MissingParameterError: If the endpoint needs an identifier
                and the request has none. No upstream call is made.
        """
        if policy.requires_identifier and not request.has_identifier():
            raise MissingParameterError(
                f"{request.kind} requires a non-empty identifier"
            )
        candidates = self.build_candidates(policy, request)
        return self._orchestrator.execute(
            candidates, success=policy.success, definitive=policy.definitive,
        )

    def build_candidates(
        self, policy: EndpointPolicy, request: LogicalRequest
    ) -> List[CandidateAttempt]:
        """Ordered candidate attempts for a request."""
        params = policy.merged_params(request)
        timeout = (
            self._config.get(policy.timeout_key) if policy.timeout_key else None
        )

        candidates = []
        readings = self._resolver.resolve(request.kind, request.identifier)
        for ordinal, (identifier, interpretation) in enumerate(readings):
            template = policy.paths.get(interpretation)
            if template is None:
                logger.debug(
                    f"{request.kind} has no path for {interpretation}, skipping"
                )
                continue
            path_id = (
                quote(identifier, safe="") if policy.quote_identifier else identifier
            )
            candidates.append(CandidateAttempt(
                path=template.format(id=path_id),
                ordinal=ordinal,
                interpretation=interpretation,
                timeout=timeout,
                params=policy.query({**params, "identifier": identifier}, interpretation),
                method=policy.method,
                upstream=policy.upstream,
            ))
        return candidates

    # -----------------------------------------------------------------
    # Cache hints
    # -----------------------------------------------------------------

    def cache_headers(
        self, policy: EndpointPolicy, cacheable: bool
    ) -> Dict[str, str]:
        """
        Headers carrying the endpoint's cache hint.

        ``no-store`` hints apply to every response; freshness windows
        apply only to responses built from a definitive upstream answer.
        """
        value = policy.cache_hint.header_value(self._config)
        if value is None:
            return {}
        if policy.cache_hint.no_store or cacheable:
            return {"Cache-Control": value}
        return {}

    def _apply_cache_hint(
        self,
        policy: EndpointPolicy,
        outcome: UpstreamOutcome,
        response: NormalizedResponse,
    ) -> None:
        cacheable = response.status_code == 200 and (
            outcome.ok or outcome.not_found
        )
        response.headers.update(self.cache_headers(policy, cacheable))

