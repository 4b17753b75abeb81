"""
Success and definitive-result predicates for fallback chains.

A success predicate decides whether the orchestrator stops on an
outcome. A definitive predicate marks a failure that must not be
retried with the next candidate.
"""

from typing import Callable

from tunegate.enums import OutcomeStatus
from tunegate.upstream.models import UpstreamOutcome


def is_success(outcome: UpstreamOutcome) -> bool:
    """HTTP 2xx."""
    return outcome.status == OutcomeStatus.SUCCESS


def is_not_found(outcome: UpstreamOutcome) -> bool:
    """Upstream explicitly denied the resource exists."""
    return outcome.status == OutcomeStatus.NOT_FOUND


def is_object(outcome: UpstreamOutcome) -> bool:
    """HTTP 2xx with a JSON object payload."""
    return is_success(outcome) and isinstance(outcome.payload, dict)


def has_array_fields(*fields: str) -> Callable[[UpstreamOutcome], bool]:
    """
    HTTP 2xx with an object payload carrying array-typed fields.

    With field names, every named field that is present must be an
    array and at least one must be present. Without names, any
    array-valued field qualifies.
    """

    def predicate(outcome: UpstreamOutcome) -> bool:
        if not is_object(outcome):
            return False
        payload = outcome.payload
        if not fields:
            return any(isinstance(v, list) for v in payload.values())
        present = [name for name in fields if name in payload]
        if not present:
            return False
        return all(isinstance(payload[name], list) for name in present)

    predicate.__name__ = f"has_array_fields({', '.join(fields)})"
    return predicate


def is_accepted(outcome: UpstreamOutcome) -> bool:
    """Upstream accepted a state-changing call (any 2xx, body optional)."""
    return outcome.status == OutcomeStatus.SUCCESS
