"""Value objects exchanged between the upstream client and the orchestrator."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

from tunegate.enums import Interpretation, OutcomeStatus, Upstream


@dataclass(frozen=True)
class CandidateAttempt:
    """One upstream call in a fallback chain."""

    path: str
    ordinal: int = 0
    interpretation: Interpretation = Interpretation.VERBATIM
    timeout: Optional[float] = None
    params: Dict[str, Any] = field(default_factory=dict)
    method: str = "GET"
    upstream: Upstream = Upstream.PRIMARY

    def describe(self) -> str:
        return f"{self.method} {self.upstream}:{self.path}"


@dataclass(frozen=True)
class UpstreamOutcome:
    """Classified result of one upstream call, or of a whole chain."""

    status: OutcomeStatus
    payload: Any = None
    status_code: Optional[int] = None
    candidate: Optional[CandidateAttempt] = None
    exhausted: bool = False
    attempts: int = 1
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == OutcomeStatus.SUCCESS and not self.exhausted

    @property
    def not_found(self) -> bool:
        return self.status == OutcomeStatus.NOT_FOUND

    def as_exhausted(self, attempts: int) -> UpstreamOutcome:
        """Copy of this outcome marked as the end of an exhausted chain."""
        return replace(self, exhausted=True, attempts=attempts, payload=None)

    def as_rejected(self) -> UpstreamOutcome:
        """Copy of a 2xx outcome whose payload failed a shape check."""
        return replace(
            self,
            status=OutcomeStatus.UPSTREAM_ERROR,
            error="Unexpected payload shape",
        )
