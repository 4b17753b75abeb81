"""Identifier resolver. Maps an ambiguous identifier to ordered interpretations."""

import logging
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from tunegate.enums import EndpointKind, Interpretation

logger = logging.getLogger(__name__)

PLAYLIST_MARKER = "VL"

Transform = Callable[[str], str]
ResolutionPolicy = Sequence[Tuple[Transform, Interpretation]]


def identity(identifier: str) -> str:
    return identifier


def strip_marker(marker: str) -> Transform:
    """Build a transform removing a case-insensitive leading marker."""

    def _strip(identifier: str) -> str:
        if identifier[:len(marker)].upper() == marker.upper():
            return identifier[len(marker):]
        return identifier

    _strip.__name__ = f"strip_{marker.lower()}"
    return _strip


# A play identifier may be a playlist (optionally carrying the VL marker),
# a radio/mix, or a plain song. Playlist readings come first.
PLAY_POLICY: ResolutionPolicy = (
    (strip_marker(PLAYLIST_MARKER), Interpretation.PLAYLIST),
    (identity, Interpretation.PLAYLIST),
    (identity, Interpretation.SONG),
)

# The podcast upstream accepts full, partial and bare forms itself.
PODCAST_POLICY: ResolutionPolicy = (
    (identity, Interpretation.PODCAST),
)

DEFAULT_POLICY: ResolutionPolicy = (
    (identity, Interpretation.VERBATIM),
)


class IdentifierResolver:
    """Resolves a raw identifier into an ordered list of interpretations.

    Policies are plain data: a sequence of (transform, interpretation)
    pairs per endpoint kind. Duplicate readings collapse to their first
    occurrence, so an unmarked play identifier yields two candidates.
    """

    def __init__(
        self,
        policies: Optional[Mapping[EndpointKind, ResolutionPolicy]] = None,
    ):
        if policies is not None:
            self._policies: Dict[EndpointKind, ResolutionPolicy] = dict(policies)
        else:
            self._policies = self._default_policies()

    @staticmethod
    def _default_policies() -> Dict[EndpointKind, ResolutionPolicy]:
        return {
            EndpointKind.PLAY: PLAY_POLICY,
            EndpointKind.PODCAST: PODCAST_POLICY,
        }

    def policy_for(self, kind: EndpointKind) -> ResolutionPolicy:
        return self._policies.get(kind, DEFAULT_POLICY)

    def resolve(
        self, kind: EndpointKind, raw_id: Optional[str]
    ) -> List[Tuple[str, Interpretation]]:
        """Ordered, de-duplicated (identifier, interpretation) pairs."""
        raw_id = (raw_id or "").strip()
        seen = set()
        resolved = []
        for transform, interpretation in self.policy_for(kind):
            reading = (transform(raw_id), interpretation)
            if raw_id and not reading[0]:
                continue
            if reading in seen:
                continue
            seen.add(reading)
            resolved.append(reading)

        if len(resolved) > 1:
            logger.debug(
                f"Resolved {kind} identifier {raw_id!r} into "
                f"{len(resolved)} candidates"
            )
        return resolved
