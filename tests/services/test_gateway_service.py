"""Tests for GatewayService."""

import pytest
from unittest.mock import patch

from tunegate.enums import EndpointKind, Interpretation, OutcomeStatus, Upstream
from tunegate.services import GatewayService, LogicalRequest, MissingParameterError
from tunegate.services.resolution import get_policy, normalize
from tunegate.upstream.models import UpstreamOutcome


# =========================================================================
# Helpers
# =========================================================================


def _ok(payload):
    return UpstreamOutcome(
        status=OutcomeStatus.SUCCESS, payload=payload, status_code=200
    )


def _status(status, status_code=None):
    return UpstreamOutcome(status=status, status_code=status_code)


@pytest.fixture
def gateway(stub_client, gateway_config):
    return GatewayService(stub_client, gateway_config)


def _called_paths(stub_client):
    return [c.args[0].path for c in stub_client.call.call_args_list]


# =========================================================================
# Candidate construction
# =========================================================================


class TestBuildCandidates:
    """Tests for GatewayService.build_candidates."""

    def test_play_chain_order(self, gateway):
        request = LogicalRequest(kind=EndpointKind.PLAY, identifier="VLabc")
        candidates = gateway.build_candidates(get_policy(EndpointKind.PLAY), request)

        assert [(c.path, c.interpretation) for c in candidates] == [
            ("/playlist/abc", Interpretation.PLAYLIST),
            ("/playlist/VLabc", Interpretation.PLAYLIST),
            ("/song/VLabc", Interpretation.SONG),
        ]
        assert candidates[0].params == {"limit": 100}
        assert candidates[2].params == {}

    def test_identifier_is_url_quoted(self, gateway):
        request = LogicalRequest(kind=EndpointKind.ALBUM, identifier="a/b c")
        [candidate] = gateway.build_candidates(get_policy(EndpointKind.ALBUM), request)
        assert candidate.path == "/album/a%2Fb%20c"

    def test_mood_params_not_quoted(self, gateway):
        request = LogicalRequest(kind=EndpointKind.MOOD_PLAYLISTS, identifier="ggMPOg%3D")
        [candidate] = gateway.build_candidates(
            get_policy(EndpointKind.MOOD_PLAYLISTS), request
        )
        assert candidate.path == "/mood_playlists/ggMPOg%3D"

    def test_charts_timeout_from_config(self, gateway):
        request = LogicalRequest(kind=EndpointKind.CHARTS)
        [candidate] = gateway.build_candidates(get_policy(EndpointKind.CHARTS), request)
        assert candidate.timeout == 15.0
        assert candidate.params == {"country": "ZZ"}

    def test_other_endpoints_use_ambient_timeout(self, gateway):
        request = LogicalRequest(kind=EndpointKind.HOME)
        [candidate] = gateway.build_candidates(get_policy(EndpointKind.HOME), request)
        assert candidate.timeout is None

    def test_search_query(self, gateway):
        request = LogicalRequest(
            kind=EndpointKind.SEARCH, identifier="daft punk", params={"offset": 20}
        )
        [candidate] = gateway.build_candidates(get_policy(EndpointKind.SEARCH), request)
        assert candidate.params == {
            "query": "daft punk", "filter": "songs", "limit": 20, "offset": 20,
        }

    def test_highlight_targets_skip_segment_upstream(self, gateway):
        request = LogicalRequest(kind=EndpointKind.HIGHLIGHT, identifier="vid001")
        [candidate] = gateway.build_candidates(
            get_policy(EndpointKind.HIGHLIGHT), request
        )
        assert candidate.upstream == Upstream.SKIP_SEGMENTS
        assert candidate.params["videoID"] == "vid001"


# =========================================================================
# Request handling
# =========================================================================


class TestHandle:
    """Tests for GatewayService.handle."""

    def test_success_passes_payload(self, gateway, stub_client):
        stub_client.call.return_value = _ok({"title": "Discovery"})
        response = gateway.handle(
            LogicalRequest(kind=EndpointKind.ALBUM, identifier="MPREb1")
        )
        assert response.status_code == 200
        assert response.body == {"title": "Discovery"}
        assert _called_paths(stub_client) == ["/album/MPREb1"]

    def test_outcome_normalized_by_endpoint_kind(self, gateway, stub_client):
        stub_client.call.return_value = _ok({"title": "Discovery"})
        request = LogicalRequest(kind=EndpointKind.ALBUM, identifier="MPREb1")

        with patch(
            "tunegate.services.gateway_service.normalize", wraps=normalize
        ) as mock_normalize:
            gateway.handle(request)

        kind, normalized_request, normalized_outcome = mock_normalize.call_args.args
        assert (kind, normalized_request) == (EndpointKind.ALBUM, request)
        assert normalized_outcome.payload == {"title": "Discovery"}

    def test_missing_identifier_makes_no_call(self, gateway, stub_client):
        response = gateway.handle(
            LogicalRequest(kind=EndpointKind.ALBUM, identifier="  ")
        )
        assert response.status_code == 400
        assert response.body == {"error": "Missing id"}
        stub_client.call.assert_not_called()

    def test_missing_search_query_is_empty_200(self, gateway, stub_client):
        response = gateway.handle(LogicalRequest(kind=EndpointKind.SEARCH))
        assert response.status_code == 200
        assert response.body == {
            "results": [], "count": 0, "hasMore": False, "total": 0,
        }
        stub_client.call.assert_not_called()

    def test_fetch_raises_for_missing_identifier(self, gateway):
        with pytest.raises(MissingParameterError):
            gateway.fetch(
                get_policy(EndpointKind.SONG),
                LogicalRequest(kind=EndpointKind.SONG),
            )

    def test_play_falls_back_to_song(self, gateway, stub_client):
        stub_client.call.side_effect = [
            _status(OutcomeStatus.NOT_FOUND, 404),
            _ok({"videoId": "abc", "title": "Song"}),
        ]
        response = gateway.handle(
            LogicalRequest(kind=EndpointKind.PLAY, identifier="abc")
        )
        assert response.body == {"videoId": "abc", "title": "Song"}
        assert _called_paths(stub_client) == ["/playlist/abc", "/song/abc"]

    def test_play_exhausted_uses_failure_shape(self, gateway, stub_client):
        stub_client.call.return_value = _status(OutcomeStatus.NOT_FOUND, 404)
        response = gateway.handle(
            LogicalRequest(kind=EndpointKind.PLAY, identifier="abc")
        )
        assert response.status_code == 500
        assert response.body == {"error": "Not found"}
        assert stub_client.call.call_count == 2

    def test_podcast_not_found_is_terminal(self, gateway, stub_client):
        stub_client.call.return_value = _status(OutcomeStatus.NOT_FOUND, 404)
        response = gateway.handle(
            LogicalRequest(kind=EndpointKind.PODCAST, identifier="MPSPPLxyz")
        )
        assert response.status_code == 404
        assert response.body == {"error": "Podcast not found"}
        assert stub_client.call.call_count == 1

    def test_podcast_upstream_error(self, gateway, stub_client):
        stub_client.call.return_value = _status(OutcomeStatus.UPSTREAM_ERROR, 502)
        response = gateway.handle(
            LogicalRequest(kind=EndpointKind.PODCAST, identifier="MPSPPLxyz")
        )
        assert response.status_code == 500
        assert response.body == {"error": "Podcast unavailable"}

    def test_charts_timeout_degrades_to_empty(self, gateway, stub_client):
        stub_client.call.return_value = _status(OutcomeStatus.TIMEOUT)
        response = gateway.handle(LogicalRequest(kind=EndpointKind.CHARTS))
        assert response.status_code == 200
        assert response.body == {
            "songs": [], "videos": [], "artists": [], "trending": [],
        }

    def test_upnext_clear_uses_delete(self, gateway, stub_client):
        stub_client.call.return_value = _ok(None)
        response = gateway.handle(
            LogicalRequest(kind=EndpointKind.UPNEXT_CLEAR, identifier="vid001")
        )
        assert response.body == {"cleared": "vid001"}
        assert stub_client.call.call_args.args[0].method == "DELETE"


# =========================================================================
# Cache hints
# =========================================================================


class TestCacheHints:
    """Tests for Cache-Control headers on responses."""

    def test_cacheable_success(self, gateway, stub_client):
        stub_client.call.return_value = _ok({"songs": []})
        response = gateway.handle(LogicalRequest(kind=EndpointKind.CHARTS))
        assert response.headers["Cache-Control"] == (
            "public, max-age=0, s-maxage=600, stale-while-revalidate=60"
        )

    def test_failed_chain_not_cacheable(self, gateway, stub_client):
        stub_client.call.return_value = _status(OutcomeStatus.TIMEOUT)
        response = gateway.handle(LogicalRequest(kind=EndpointKind.CHARTS))
        assert "Cache-Control" not in response.headers

    def test_no_store_always_applied(self, gateway, stub_client):
        stub_client.call.return_value = _status(OutcomeStatus.UPSTREAM_ERROR, 500)
        response = gateway.handle(
            LogicalRequest(kind=EndpointKind.STREAM, identifier="vid001")
        )
        assert response.status_code == 503
        assert response.headers["Cache-Control"] == "no-store"

    def test_no_store_on_missing_parameter(self, gateway):
        response = gateway.handle(LogicalRequest(kind=EndpointKind.UPNEXT))
        assert response.status_code == 400
        assert response.headers["Cache-Control"] == "no-store"

    def test_highlight_not_found_cached(self, gateway, stub_client):
        stub_client.call.return_value = _status(OutcomeStatus.NOT_FOUND, 404)
        response = gateway.handle(
            LogicalRequest(kind=EndpointKind.HIGHLIGHT, identifier="vid001")
        )
        assert response.body == {"highlight": None, "found": False}
        assert "s-maxage=3600" in response.headers["Cache-Control"]

    def test_endpoint_without_hint(self, gateway, stub_client):
        stub_client.call.return_value = _ok({"title": "x"})
        response = gateway.handle(
            LogicalRequest(kind=EndpointKind.ALBUM, identifier="abc")
        )
        assert response.headers == {}


# =========================================================================
# Lifecycle
# =========================================================================


class TestLifecycle:

    def test_context_manager_closes_client(self, stub_client, gateway_config):
        with GatewayService(stub_client, gateway_config):
            pass
        stub_client.close.assert_called_once()

    @patch("tunegate.services.gateway_service.UpstreamHTTPClient")
    def test_from_flask_config(self, mock_client_cls, gateway_config):
        service = GatewayService.from_flask_config(gateway_config)
        mock_client_cls.from_flask_config.assert_called_once_with(gateway_config)
        assert service._client is mock_client_cls.from_flask_config.return_value
