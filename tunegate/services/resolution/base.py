"""Base types for the resolution package."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, Mapping, Optional, Tuple

from tunegate.enums import EndpointKind, Interpretation, Upstream
from tunegate.upstream.models import UpstreamOutcome

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """Base exception for gateway request handling."""
    pass


class MissingParameterError(GatewayError):
    """Raised when an endpoint's required identifier is empty."""
    pass


class UnknownEndpointError(GatewayError):
    """Raised when no endpoint policy is registered for a kind."""
    pass


@dataclass(frozen=True)
class LogicalRequest:
    """One inbound request, reduced to what the engine needs."""

    kind: EndpointKind
    identifier: Optional[str] = None
    params: Dict[str, Any] = field(default_factory=dict)

    def has_identifier(self) -> bool:
        return bool(self.identifier and self.identifier.strip())

    def param(self, name: str, default: Any = None) -> Any:
        value = self.params.get(name)
        return default if value is None else value


@dataclass
class NormalizedResponse:
    """Declared output shape for an endpoint, ready to serialize."""

    body: Any
    status_code: int = 200
    headers: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class CacheHint:
    """Freshness hint attached to outgoing responses.

    ``ttl_key`` names the config entry holding the freshness window.
    """

    ttl_key: Optional[str] = None
    no_store: bool = False

    def header_value(self, config: Mapping[str, Any]) -> Optional[str]:
        if self.no_store:
            return "no-store"
        if self.ttl_key is None:
            return None
        ttl = config.get(self.ttl_key)
        if not ttl:
            return None
        swr = config.get("STALE_WHILE_REVALIDATE", 0)
        value = f"public, max-age=0, s-maxage={ttl}"
        if swr:
            value += f", stale-while-revalidate={swr}"
        return value


Predicate = Callable[[UpstreamOutcome], bool]
QueryBuilder = Callable[[Dict[str, Any], Interpretation], Dict[str, Any]]
Normalizer = Callable[[LogicalRequest, UpstreamOutcome], NormalizedResponse]


def no_query(params: Dict[str, Any], interpretation: Interpretation) -> Dict[str, Any]:
    return {}


@dataclass(frozen=True)
class EndpointPolicy:
    """Declarative description of how one logical endpoint is served."""

    kind: EndpointKind
    paths: Mapping[Interpretation, str]
    normalizer: Normalizer
    success: Predicate
    definitive: Optional[Predicate] = None
    query: QueryBuilder = no_query
    defaults: Mapping[str, Any] = field(default_factory=dict)
    method: str = "GET"
    upstream: Upstream = Upstream.PRIMARY
    timeout_key: Optional[str] = None
    missing: Optional[Tuple[Any, int]] = None
    cache_hint: CacheHint = CacheHint()
    quote_identifier: bool = True
    # Query parameters read besides the keys of ``defaults``
    accepts: Tuple[str, ...] = ()

    @property
    def query_params(self) -> FrozenSet[str]:
        """Names of the query-string parameters this endpoint reads."""
        return frozenset(self.defaults) | frozenset(self.accepts)

    @property
    def requires_identifier(self) -> bool:
        return self.missing is not None

    def missing_response(self) -> NormalizedResponse:
        body, status_code = self.missing
        return NormalizedResponse(
            body=copy.deepcopy(body), status_code=status_code
        )

    def merged_params(self, request: LogicalRequest) -> Dict[str, Any]:
        """Request parameters layered over this endpoint's defaults."""
        merged = dict(self.defaults)
        merged.update(
            {k: v for k, v in request.params.items() if v is not None}
        )
        return merged
