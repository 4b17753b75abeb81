"""
Enums for endpoint kinds, upstream outcomes, and identifier interpretations.

Single source of truth for string constants used across schemas,
the resolution engine, and the routes.
"""

from enum import StrEnum


class EndpointKind(StrEnum):
    """Logical endpoints served by the gateway."""
    HOME = "home"
    TOP_PLAYLISTS = "top_playlists"
    SEARCH = "search"
    SUGGESTIONS = "suggestions"
    CHARTS = "charts"
    EXPLORE = "explore"
    ALBUM = "album"
    ARTIST = "artist"
    ARTIST_SONGS = "artist_songs"
    SONG = "song"
    STREAM = "stream"
    PLAY = "play"
    PLAYLIST = "playlist"
    PODCAST = "podcast"
    LYRICS_BY_VIDEO = "lyrics_by_video"
    NOW_PLAYING = "now_playing"
    RELATED_SONGS = "related_songs"
    UPNEXT = "upnext"
    UPNEXT_CLEAR = "upnext_clear"
    VIDEO_SEARCH = "video_search"
    MOOD_CATEGORIES = "mood_categories"
    MOOD_PLAYLISTS = "mood_playlists"
    COUNTRY_TRENDING = "country_trending"
    LANGUAGE_TRENDING = "language_trending"
    HIGHLIGHT = "highlight"


class OutcomeStatus(StrEnum):
    """Classification of a single upstream call."""
    SUCCESS = "success"
    NOT_FOUND = "not_found"
    UPSTREAM_ERROR = "upstream_error"
    TIMEOUT = "timeout"
    TRANSPORT_ERROR = "transport_error"


class Interpretation(StrEnum):
    """How an identifier is read when building an upstream path."""
    VERBATIM = "verbatim"
    PLAYLIST = "playlist"
    SONG = "song"
    PODCAST = "podcast"


class Upstream(StrEnum):
    """Named upstream services, each mapped to a configured base URL."""
    PRIMARY = "primary"
    SKIP_SEGMENTS = "skip_segments"
    TRENDING = "trending"
    LANGUAGE_TRENDING = "language_trending"
