"""
Response normalizers.

Each normalizer reshapes the orchestrator's outcome into an endpoint's
declared output contract. Missing fields become empty containers or
sentinel values, never absent keys. Normalizers are pure: the same
request and outcome always produce the same body, and upstream payloads
are never mutated.
"""

import copy
import logging
from typing import Any, Dict, List, Optional

from tunegate.enums import OutcomeStatus
from tunegate.upstream.models import UpstreamOutcome
from .base import LogicalRequest, Normalizer, NormalizedResponse

logger = logging.getLogger(__name__)

CHART_FIELDS = ("songs", "videos", "artists", "trending")


# =============================================================================
# Field helpers
# =============================================================================


def _as_list(value: Any) -> List[Any]:
    return list(value) if isinstance(value, list) else []


def _as_number(value: Any) -> Any:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return value


def _as_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _payload(outcome: UpstreamOutcome) -> Any:
    return copy.deepcopy(outcome.payload) if outcome.ok else None


def _failure(body: Any, status_code: int) -> NormalizedResponse:
    return NormalizedResponse(body=copy.deepcopy(body), status_code=status_code)


# =============================================================================
# Normalizer factories
# =============================================================================


def passthrough(
    failure: Dict[str, Any],
    failure_status: int = 500,
    not_found: Optional[Dict[str, Any]] = None,
) -> Normalizer:
    """
    Return the upstream payload unchanged on success.

    Args:
        failure: Body returned when the chain failed.
        failure_status: HTTP status for that body.
        not_found: Optional body returned with 404 when the upstream
            definitively denied the resource.
    """

    def normalize(request: LogicalRequest, outcome: UpstreamOutcome) -> NormalizedResponse:
        payload = _payload(outcome)
        if payload is not None:
            return NormalizedResponse(body=payload)
        if not_found is not None and outcome.not_found:
            return _failure(not_found, 404)
        return _failure(failure, failure_status)

    return normalize


def record_list(failure_status: int = 200) -> Normalizer:
    """Array of records, or an empty array for any other payload."""

    def normalize(request: LogicalRequest, outcome: UpstreamOutcome) -> NormalizedResponse:
        payload = _payload(outcome)
        if not isinstance(payload, list):
            return _failure([], failure_status if not outcome.ok else 200)
        return NormalizedResponse(
            body=[item for item in payload if isinstance(item, dict)]
        )

    return normalize


def queue(failure_status: int = 500) -> Normalizer:
    """``{tracks, count}`` queue shape, other upstream fields kept."""

    def normalize(request: LogicalRequest, outcome: UpstreamOutcome) -> NormalizedResponse:
        payload = _payload(outcome)
        if not isinstance(payload, dict):
            return _failure({"tracks": [], "count": 0}, failure_status)
        tracks = _as_list(payload.get("tracks"))
        count = payload.get("count")
        if isinstance(count, bool) or not isinstance(count, int):
            count = len(tracks)
        return NormalizedResponse(body={**payload, "tracks": tracks, "count": count})

    return normalize


# =============================================================================
# Endpoint-specific normalizers
# =============================================================================


def search_results(request: LogicalRequest, outcome: UpstreamOutcome) -> NormalizedResponse:
    """
    ``{results, count, hasMore, total}``.

    Offset and limit were already applied upstream; results are never
    re-sliced here.
    """
    payload = _payload(outcome)
    if not isinstance(payload, dict):
        return _failure(
            {"results": [], "count": 0, "hasMore": False, "total": 0}, 500
        )
    return NormalizedResponse(body={
        "results": _as_list(payload.get("results")),
        "count": _as_number(payload.get("count")),
        "hasMore": bool(payload.get("hasMore")),
        "total": _as_number(payload.get("total")),
    })


def suggestions(request: LogicalRequest, outcome: UpstreamOutcome) -> NormalizedResponse:
    """Text-only suggestions wrapped as ``{suggestions}``."""
    payload = _payload(outcome)
    items = payload if isinstance(payload, list) else []
    return NormalizedResponse(
        body={"suggestions": [s for s in items if isinstance(s, str)]}
    )


def charts(request: LogicalRequest, outcome: UpstreamOutcome) -> NormalizedResponse:
    payload = _payload(outcome)
    if not isinstance(payload, dict):
        payload = {}
    return NormalizedResponse(
        body={name: _as_list(payload.get(name)) for name in CHART_FIELDS}
    )


def artist_songs(request: LogicalRequest, outcome: UpstreamOutcome) -> NormalizedResponse:
    payload = _payload(outcome)
    if not isinstance(payload, dict):
        return _failure({"songs": [], "total": 0, "name": ""}, 500)
    return NormalizedResponse(body={
        "songs": _as_list(payload.get("songs")),
        "total": _as_number(payload.get("total")),
        "name": _as_text(payload.get("name")),
    })


def mood_categories(request: LogicalRequest, outcome: UpstreamOutcome) -> NormalizedResponse:
    """Categories usable for a follow-up playlist lookup."""
    payload = _payload(outcome)
    if not isinstance(payload, list):
        return _failure([], 500)
    return NormalizedResponse(body=[
        c for c in payload
        if isinstance(c, dict) and c.get("params") and c.get("title")
    ])


def _best_thumbnail(item: Dict[str, Any]) -> str:
    if item.get("thumbnail"):
        return item["thumbnail"]
    thumbnails = item.get("thumbnails")
    if isinstance(thumbnails, list) and thumbnails:
        first = thumbnails[0]
        if isinstance(first, dict):
            return _as_text(first.get("url"))
    return ""


def mood_playlists(request: LogicalRequest, outcome: UpstreamOutcome) -> NormalizedResponse:
    """Playlists for a mood, each guaranteed a browseId and title."""
    payload = _payload(outcome)
    if not isinstance(payload, list):
        return _failure([], 500)

    cleaned = []
    for item in payload:
        if not isinstance(item, dict):
            continue
        playlist = {
            "browseId": item.get("browseId") or item.get("playlistId") or "",
            "title": item.get("title") or "",
            "subtitle": item.get("subtitle") or "",
            "thumbnail": _best_thumbnail(item),
            "thumbnails": item.get("thumbnails") or [],
        }
        if playlist["browseId"] and playlist["title"]:
            cleaned.append(playlist)
    return NormalizedResponse(body=cleaned)


def highlight(request: LogicalRequest, outcome: UpstreamOutcome) -> NormalizedResponse:
    """
    First point-of-interest segment as ``{found, highlight, ...}``.

    A point of interest is a segment whose two boundaries are equal, so
    the first boundary is the highlight timestamp.
    """
    payload = _payload(outcome)
    if not isinstance(payload, list) or not payload or not isinstance(payload[0], dict):
        return NormalizedResponse(body={"highlight": None, "found": False})

    poi = payload[0]
    segment = poi.get("segment")
    time = segment[0] if isinstance(segment, list) and segment else None
    return NormalizedResponse(body={
        "found": time is not None,
        "highlight": time,
        "videoDuration": poi.get("videoDuration"),
        "votes": poi.get("votes"),
    })


def upnext_cleared(request: LogicalRequest, outcome: UpstreamOutcome) -> NormalizedResponse:
    """Echo the cleared identifier once the upstream accepted the DELETE."""
    if not outcome.ok:
        return _failure({"error": "Failed"}, 500)
    return NormalizedResponse(body={"cleared": request.identifier})


def country_trending(request: LogicalRequest, outcome: UpstreamOutcome) -> NormalizedResponse:
    """Trending tracks for one country, each tagged with ``_country``."""
    country = request.param("country", "")
    payload = _payload(outcome)
    if not outcome.ok:
        failed_in_transit = outcome.status in (
            OutcomeStatus.TIMEOUT, OutcomeStatus.TRANSPORT_ERROR,
        )
        return NormalizedResponse(body={
            "trending": [],
            "count": 0,
            "source": "error" if failed_in_transit else country,
        })

    tracks: List[Any] = []
    if isinstance(payload, dict):
        data = payload.get("data")
        nested = data.get("trending") if isinstance(data, dict) else None
        tracks = _as_list(nested) or _as_list(payload.get("trending"))

    tagged = [
        {**track, "_country": country}
        for track in tracks
        if isinstance(track, dict)
    ]
    return NormalizedResponse(body={
        "trending": tagged,
        "count": len(tagged),
        "source": country,
    })
