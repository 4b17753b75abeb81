"""Fallback orchestrator. Drives the upstream client through a candidate chain."""

import logging
from dataclasses import replace
from typing import Optional, Sequence

from tunegate.enums import OutcomeStatus
from tunegate.upstream.models import CandidateAttempt, UpstreamOutcome
from .base import Predicate
from .predicates import is_success

logger = logging.getLogger(__name__)


class FallbackOrchestrator:
    """Tries candidates strictly in order until one qualifies.

    Stateless: holds only the client used to issue calls. Candidates
    are never fanned out; the common case stops after the first call.
    """

    def __init__(self, client):
        self._client = client

    def execute(
        self,
        candidates: Sequence[CandidateAttempt],
        success: Predicate = is_success,
        definitive: Optional[Predicate] = None,
    ) -> UpstreamOutcome:
        """
        Execute the chain and return the first qualifying outcome.

        Args:
            candidates: Ordered attempts; must not be empty.
            success: Decides whether an outcome ends the chain.
            definitive: Marks a failure that ends the chain without
                trying the remaining candidates.

        Returns:
            The accepted outcome, the definitive failure, or a synthetic
            exhausted outcome carrying the last candidate's failure
            classification.
        """
        if not candidates:
            raise ValueError("Fallback chain needs at least one candidate")

        last: Optional[UpstreamOutcome] = None
        for attempt, candidate in enumerate(candidates, start=1):
            outcome = self._client.call(candidate)

            if success(outcome):
                logger.info(
                    f"Resolved {candidate.describe()} via candidate "
                    f"{attempt}/{len(candidates)} ({candidate.interpretation})"
                )
                return replace(outcome, attempts=attempt)

            if outcome.status == OutcomeStatus.SUCCESS:
                outcome = outcome.as_rejected()

            if definitive is not None and definitive(outcome):
                logger.info(
                    f"Definitive {outcome.status} from {candidate.describe()}, "
                    f"not trying further candidates"
                )
                return replace(outcome, attempts=attempt)

            logger.debug(
                f"Candidate {attempt}/{len(candidates)} {candidate.describe()} "
                f"failed: {outcome.status}"
            )
            last = outcome

        logger.warning(
            f"All {len(candidates)} candidates exhausted, "
            f"last status {last.status}"
        )
        return last.as_exhausted(len(candidates))
