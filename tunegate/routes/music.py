"""
Music routes: discovery, search, metadata, playback and queues.

Every route maps its query string onto one logical request; the gateway
service picks the upstream candidates and shapes the response.
"""

import logging

from flask import request

from tunegate.enums import EndpointKind
from tunegate.routes import main, serve

logger = logging.getLogger(__name__)

PREFIX = "/api/musiva"


# =============================================================================
# Discovery
# =============================================================================


@main.route(f"{PREFIX}/home")
def home():
    return serve(EndpointKind.HOME)


@main.route(f"{PREFIX}/top-playlists")
def top_playlists():
    return serve(EndpointKind.TOP_PLAYLISTS)


@main.route(f"{PREFIX}/charts")
def charts():
    return serve(EndpointKind.CHARTS)


@main.route(f"{PREFIX}/explore")
def explore():
    return serve(EndpointKind.EXPLORE)


@main.route(f"{PREFIX}/mood")
def mood():
    """Mood categories, or one category's playlists when ``params`` is set."""
    params = request.args.get("params")
    if not params:
        return serve(EndpointKind.MOOD_CATEGORIES)
    return serve(EndpointKind.MOOD_PLAYLISTS, params)


# =============================================================================
# Search
# =============================================================================


@main.route(f"{PREFIX}/search")
def search():
    return serve(EndpointKind.SEARCH, request.args.get("q"))


@main.route(f"{PREFIX}/suggestions")
def suggestions():
    query = request.args.get("q") or request.args.get("query")
    return serve(EndpointKind.SUGGESTIONS, query)


@main.route(f"{PREFIX}/video/search")
def video_search():
    return serve(EndpointKind.VIDEO_SEARCH, request.args.get("q"))


# =============================================================================
# Metadata
# =============================================================================


@main.route(f"{PREFIX}/album")
def album():
    return serve(EndpointKind.ALBUM, request.args.get("id"))


@main.route(f"{PREFIX}/artist")
def artist():
    return serve(EndpointKind.ARTIST, request.args.get("id"))


@main.route(f"{PREFIX}/artist-songs")
def artist_songs():
    return serve(EndpointKind.ARTIST_SONGS, request.args.get("id"))


@main.route(f"{PREFIX}/song")
def song():
    return serve(EndpointKind.SONG, request.args.get("video_id"))


@main.route(f"{PREFIX}/playlist")
def playlist():
    return serve(EndpointKind.PLAYLIST, request.args.get("id"))


@main.route(f"{PREFIX}/podcast")
def podcast():
    return serve(EndpointKind.PODCAST, request.args.get("id"))


@main.route(f"{PREFIX}/lyrics-by-video")
def lyrics_by_video():
    return serve(EndpointKind.LYRICS_BY_VIDEO, request.args.get("videoId"))


# =============================================================================
# Playback and queues
# =============================================================================


@main.route(f"{PREFIX}/stream/<video_id>")
def stream(video_id):
    return serve(EndpointKind.STREAM, video_id)


@main.route(f"{PREFIX}/play/<video_id>")
def play(video_id):
    """Playlist-or-song lookup for an ambiguous identifier."""
    return serve(EndpointKind.PLAY, video_id)


@main.route(f"{PREFIX}/now-playing")
def now_playing():
    return serve(EndpointKind.NOW_PLAYING, request.args.get("videoId"))


@main.route(f"{PREFIX}/related-songs")
def related_songs():
    return serve(EndpointKind.RELATED_SONGS, request.args.get("videoId"))


@main.route(f"{PREFIX}/upnext", methods=["GET", "DELETE"])
def upnext():
    video_id = request.args.get("videoId")
    if request.method == "DELETE":
        return serve(EndpointKind.UPNEXT_CLEAR, video_id)
    return serve(EndpointKind.UPNEXT, video_id)
