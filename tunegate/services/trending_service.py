"""
Trending service: per-country trending lists and the global mix.

A single country is one gateway request. The global mix asks a fixed
set of countries in turn, interleaves their lists round-robin and drops
repeated songs.
"""

import logging
import math
from typing import Any, Dict, List

from tunegate.enums import EndpointKind
from tunegate.services.resolution import (
    LogicalRequest,
    NormalizedResponse,
    get_policy,
)

logger = logging.getLogger(__name__)

GLOBAL_MIX_COUNTRIES = ("US", "GB", "IN")
GLOBAL_MARKER = "ZZ"
DEFAULT_LIMIT = 20


def interleave(lists: List[List[Any]]) -> List[Any]:
    """Take one item from each list in rotation until all are drained."""
    merged = []
    longest = max((len(items) for items in lists), default=0)
    for i in range(longest):
        for items in lists:
            if i < len(items):
                merged.append(items[i])
    return merged


def dedupe_tracks(tracks: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Drop repeats by case-insensitive title and artist.

    The trending upstream carries no video IDs to key on.
    """
    seen = set()
    unique = []
    for track in tracks:
        key = f"{track.get('title', '')}||{track.get('artist', '')}".lower()
        if key in seen:
            continue
        seen.add(key)
        unique.append(track)
    return unique


class TrendingService:
    """Serves country trending requests through a GatewayService."""

    def __init__(self, gateway):
        self._gateway = gateway

    def country_trending(self, request: LogicalRequest) -> NormalizedResponse:
        country = request.param("country", "")
        if request.param("multi") or not country or country == GLOBAL_MARKER:
            return self.global_mix(request.param("limit", DEFAULT_LIMIT))
        return self._gateway.handle(request)

    def global_mix(self, limit: int) -> NormalizedResponse:
        per_country = math.ceil(limit / len(GLOBAL_MIX_COUNTRIES))

        responses = [
            self._gateway.handle(LogicalRequest(
                kind=EndpointKind.COUNTRY_TRENDING,
                params={"country": country, "limit": per_country},
            ))
            for country in GLOBAL_MIX_COUNTRIES
        ]
        deduped = dedupe_tracks(
            interleave([r.body["trending"] for r in responses])
        )
        logger.info(
            f"Global trending mix: {len(deduped)} unique tracks from "
            f"{len(GLOBAL_MIX_COUNTRIES)} countries"
        )

        policy = get_policy(EndpointKind.COUNTRY_TRENDING)
        cacheable = any("Cache-Control" in r.headers for r in responses)
        return NormalizedResponse(
            body={
                "trending": deduped[:limit],
                "count": len(deduped),
                "source": "global",
            },
            headers=self._gateway.cache_headers(policy, cacheable),
        )
