"""
Endpoint table: one declarative policy per logical endpoint.

Each entry names the upstream path per identifier interpretation, the
query it sends, the success and definitive predicates, the timeout
budget, the normalizer, the missing-parameter shape, and the cache
hint. The orchestrator and gateway service stay generic; changing an
endpoint's behaviour is a data edit here.
"""

from typing import Any, Dict

from tunegate.enums import EndpointKind, Interpretation, Upstream
from tunegate.upstream.models import UpstreamOutcome
from . import normalizers
from .base import (
    CacheHint,
    EndpointPolicy,
    LogicalRequest,
    NormalizedResponse,
    UnknownEndpointError,
)
from .predicates import has_array_fields, is_accepted, is_not_found, is_success

NO_STORE = CacheHint(no_store=True)
PRIMARY_CACHE = CacheHint(ttl_key="CACHE_HINT_TTL")
MOOD_CATEGORIES_CACHE = CacheHint(ttl_key="MOOD_CATEGORIES_TTL")
HIGHLIGHT_CACHE = CacheHint(ttl_key="HIGHLIGHT_CACHE_TTL")

POI_CATEGORIES = '["poi_highlight"]'
POI_ACTION_TYPES = '["poi"]'

MISSING_ID = ({"error": "Missing id"}, 400)
MISSING_VIDEO_ID = ({"error": "Missing videoId"}, 400)
EMPTY_QUEUE = ({"tracks": [], "count": 0}, 400)

# The up-next upstream always builds queues of this length.
UPNEXT_QUEUE_LENGTH = 20


def _verbatim(path: str) -> Dict[Interpretation, str]:
    return {Interpretation.VERBATIM: path}


def _select(*names: str, **renames: str):
    """Query builder copying request params, optionally renaming them.

    ``renames`` maps upstream query names to request param names.
    """

    def build(params: Dict[str, Any], interpretation: Interpretation) -> Dict[str, Any]:
        query = {name: params[name] for name in names if name in params}
        for upstream_name, param_name in renames.items():
            if param_name in params:
                query[upstream_name] = params[param_name]
        return query

    return build


def _play_query(params: Dict[str, Any], interpretation: Interpretation) -> Dict[str, Any]:
    if interpretation == Interpretation.PLAYLIST:
        return {"limit": params["limit"]}
    return {}


def _upnext_query(params: Dict[str, Any], interpretation: Interpretation) -> Dict[str, Any]:
    query = {"limit": UPNEXT_QUEUE_LENGTH}
    if params.get("force_refresh"):
        query["force_refresh"] = "true"
    return query


def _highlight_query(params: Dict[str, Any], interpretation: Interpretation) -> Dict[str, Any]:
    return {
        "videoID": params["identifier"],
        "categories": POI_CATEGORIES,
        "actionTypes": POI_ACTION_TYPES,
    }


def _search_query(params: Dict[str, Any], interpretation: Interpretation) -> Dict[str, Any]:
    return {
        "query": params["identifier"],
        "filter": params["filter"],
        "limit": params["limit"],
        "offset": params["offset"],
    }


def _video_search_query(params: Dict[str, Any], interpretation: Interpretation) -> Dict[str, Any]:
    return {
        "query": params["identifier"],
        "filter": "videos",
        "limit": params["limit"],
    }


def _suggestions_query(params: Dict[str, Any], interpretation: Interpretation) -> Dict[str, Any]:
    return {"query": params["identifier"]}


_POLICIES = [
    # -------------------------------------------------------------------
    # List-shaped discovery endpoints
    # -------------------------------------------------------------------
    EndpointPolicy(
        kind=EndpointKind.HOME,
        paths=_verbatim("/home"),
        query=_select("limit"),
        defaults={"limit": 6},
        success=is_success,
        normalizer=normalizers.record_list(),
    ),
    EndpointPolicy(
        kind=EndpointKind.TOP_PLAYLISTS,
        paths=_verbatim("/top_playlists"),
        query=_select("country", "limit"),
        defaults={"country": "ZZ", "limit": 16},
        success=is_success,
        normalizer=normalizers.record_list(),
    ),
    EndpointPolicy(
        kind=EndpointKind.CHARTS,
        paths=_verbatim("/charts"),
        query=_select("country"),
        defaults={"country": "ZZ"},
        success=has_array_fields(*normalizers.CHART_FIELDS),
        timeout_key="CHARTS_TIMEOUT",
        normalizer=normalizers.charts,
        cache_hint=PRIMARY_CACHE,
    ),
    EndpointPolicy(
        kind=EndpointKind.EXPLORE,
        paths=_verbatim("/explore"),
        success=has_array_fields(),
        normalizer=normalizers.passthrough({"error": "Explore unavailable"}),
        cache_hint=PRIMARY_CACHE,
    ),
    EndpointPolicy(
        kind=EndpointKind.MOOD_CATEGORIES,
        paths=_verbatim("/mood_categories"),
        success=is_success,
        normalizer=normalizers.mood_categories,
        cache_hint=MOOD_CATEGORIES_CACHE,
    ),
    EndpointPolicy(
        kind=EndpointKind.MOOD_PLAYLISTS,
        paths=_verbatim("/mood_playlists/{id}"),
        success=is_success,
        normalizer=normalizers.mood_playlists,
        missing=([], 400),
        cache_hint=PRIMARY_CACHE,
        # params tokens are already encoded by the upstream
        quote_identifier=False,
    ),
    # -------------------------------------------------------------------
    # Search
    # -------------------------------------------------------------------
    EndpointPolicy(
        kind=EndpointKind.SEARCH,
        paths=_verbatim("/search"),
        query=_search_query,
        defaults={"filter": "songs", "limit": 20, "offset": 0},
        success=is_success,
        normalizer=normalizers.search_results,
        missing=({"results": [], "count": 0, "hasMore": False, "total": 0}, 200),
    ),
    EndpointPolicy(
        kind=EndpointKind.SUGGESTIONS,
        paths=_verbatim("/search_suggestions"),
        query=_suggestions_query,
        success=is_success,
        normalizer=normalizers.suggestions,
        missing=({"suggestions": []}, 200),
    ),
    EndpointPolicy(
        kind=EndpointKind.VIDEO_SEARCH,
        paths=_verbatim("/search"),
        query=_video_search_query,
        defaults={"limit": 20},
        success=is_success,
        normalizer=normalizers.passthrough(
            {"error": "Video search failed", "videos": []}
        ),
        missing=({"error": "Missing 'q' parameter"}, 400),
    ),
    # -------------------------------------------------------------------
    # Metadata endpoints (error-terminal)
    # -------------------------------------------------------------------
    EndpointPolicy(
        kind=EndpointKind.ALBUM,
        paths=_verbatim("/album/{id}"),
        success=is_success,
        normalizer=normalizers.passthrough({"error": "Album unavailable"}),
        missing=MISSING_ID,
    ),
    EndpointPolicy(
        kind=EndpointKind.ARTIST,
        paths=_verbatim("/artist/{id}"),
        success=is_success,
        normalizer=normalizers.passthrough({"error": "Artist unavailable"}),
        missing=MISSING_ID,
    ),
    EndpointPolicy(
        kind=EndpointKind.ARTIST_SONGS,
        paths=_verbatim("/artist/{id}/songs"),
        query=_select("limit"),
        defaults={"limit": 100},
        success=is_success,
        normalizer=normalizers.artist_songs,
        missing=({"songs": [], "total": 0, "name": ""}, 400),
    ),
    EndpointPolicy(
        kind=EndpointKind.SONG,
        paths=_verbatim("/song/{id}"),
        success=is_success,
        normalizer=normalizers.passthrough({"error": "Song metadata unavailable"}),
        missing=({"error": "Missing 'video_id' parameter"}, 400),
    ),
    EndpointPolicy(
        kind=EndpointKind.PLAYLIST,
        paths=_verbatim("/playlist/{id}"),
        query=_select("limit"),
        defaults={"limit": 100},
        success=is_success,
        normalizer=normalizers.passthrough({"error": "Playlist unavailable"}),
        missing=MISSING_ID,
    ),
    EndpointPolicy(
        kind=EndpointKind.PODCAST,
        paths={Interpretation.PODCAST: "/podcast/{id}"},
        query=_select("limit"),
        defaults={"limit": 50},
        success=is_success,
        definitive=is_not_found,
        normalizer=normalizers.passthrough(
            {"error": "Podcast unavailable"},
            not_found={"error": "Podcast not found"},
        ),
        missing=MISSING_ID,
    ),
    EndpointPolicy(
        kind=EndpointKind.LYRICS_BY_VIDEO,
        paths=_verbatim("/lyrics_by_video/{id}"),
        success=is_success,
        normalizer=normalizers.passthrough(
            {"lyricsId": None, "error": "Lyrics unavailable"}
        ),
        missing=MISSING_VIDEO_ID,
    ),
    # -------------------------------------------------------------------
    # Playback
    # -------------------------------------------------------------------
    EndpointPolicy(
        kind=EndpointKind.PLAY,
        paths={
            Interpretation.PLAYLIST: "/playlist/{id}",
            Interpretation.SONG: "/song/{id}",
        },
        query=_play_query,
        defaults={"limit": 100},
        success=is_success,
        normalizer=normalizers.passthrough({"error": "Not found"}),
        missing=MISSING_VIDEO_ID,
    ),
    EndpointPolicy(
        kind=EndpointKind.STREAM,
        paths=_verbatim("/stream/{id}"),
        success=is_success,
        normalizer=normalizers.passthrough({"error": "Stream unavailable"}, 503),
        missing=MISSING_VIDEO_ID,
        cache_hint=NO_STORE,
    ),
    EndpointPolicy(
        kind=EndpointKind.NOW_PLAYING,
        paths=_verbatim("/now_playing/{id}"),
        query=_select(related_limit="limit"),
        defaults={"limit": 10},
        success=is_success,
        normalizer=normalizers.passthrough({"error": "Not found"}),
        missing=MISSING_VIDEO_ID,
    ),
    EndpointPolicy(
        kind=EndpointKind.RELATED_SONGS,
        paths=_verbatim("/related_songs/{id}"),
        query=_select("limit"),
        defaults={"limit": 15},
        success=is_success,
        normalizer=normalizers.queue(),
        missing=EMPTY_QUEUE,
    ),
    EndpointPolicy(
        kind=EndpointKind.UPNEXT,
        paths=_verbatim("/upnext/{id}"),
        query=_upnext_query,
        accepts=("force_refresh",),
        success=is_success,
        normalizer=normalizers.queue(),
        missing=EMPTY_QUEUE,
        cache_hint=NO_STORE,
    ),
    EndpointPolicy(
        kind=EndpointKind.UPNEXT_CLEAR,
        paths=_verbatim("/upnext/{id}"),
        method="DELETE",
        success=is_accepted,
        normalizer=normalizers.upnext_cleared,
        missing=MISSING_VIDEO_ID,
        cache_hint=NO_STORE,
    ),
    # -------------------------------------------------------------------
    # Secondary upstreams
    # -------------------------------------------------------------------
    EndpointPolicy(
        kind=EndpointKind.HIGHLIGHT,
        paths=_verbatim("/api/skipSegments"),
        query=_highlight_query,
        upstream=Upstream.SKIP_SEGMENTS,
        success=is_success,
        definitive=is_not_found,
        normalizer=normalizers.highlight,
        missing=MISSING_VIDEO_ID,
        cache_hint=HIGHLIGHT_CACHE,
    ),
    EndpointPolicy(
        kind=EndpointKind.COUNTRY_TRENDING,
        paths=_verbatim("/trending/"),
        query=_select("country", "limit"),
        defaults={"limit": 20},
        upstream=Upstream.TRENDING,
        accepts=("country", "multi"),
        success=is_success,
        normalizer=normalizers.country_trending,
        cache_hint=PRIMARY_CACHE,
    ),
    EndpointPolicy(
        kind=EndpointKind.LANGUAGE_TRENDING,
        paths=_verbatim("/trending"),
        query=_select("language", "limit"),
        defaults={"language": "Hindi", "limit": 10},
        upstream=Upstream.LANGUAGE_TRENDING,
        success=is_success,
        normalizer=normalizers.passthrough(
            {"error": "Failed to fetch trending songs"}
        ),
    ),
]

ENDPOINTS: Dict[EndpointKind, EndpointPolicy] = {
    policy.kind: policy for policy in _POLICIES
}


def get_policy(kind: EndpointKind) -> EndpointPolicy:
    """Look up the policy for an endpoint kind."""
    try:
        return ENDPOINTS[kind]
    except KeyError:
        raise UnknownEndpointError(f"No endpoint policy for '{kind}'")


def normalize(
    kind: EndpointKind,
    request: LogicalRequest,
    outcome: UpstreamOutcome,
) -> NormalizedResponse:
    """Reshape an outcome into the declared output for ``kind``."""
    return get_policy(kind).normalizer(request, outcome)
