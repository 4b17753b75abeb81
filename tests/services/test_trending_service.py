"""Tests for TrendingService and its merge helpers."""

import pytest
from unittest.mock import MagicMock

from tunegate.enums import EndpointKind, OutcomeStatus
from tunegate.services import GatewayService, LogicalRequest, NormalizedResponse, TrendingService
from tunegate.services.trending_service import dedupe_tracks, interleave
from tunegate.upstream.models import UpstreamOutcome


def _trending(*titles):
    return UpstreamOutcome(
        status=OutcomeStatus.SUCCESS,
        payload={"data": {"trending": [
            {"title": t, "artist": "X"} for t in titles
        ]}},
        status_code=200,
    )


class TestInterleave:

    def test_round_robin(self):
        assert interleave([[1, 4], [2, 5, 6], [3]]) == [1, 2, 3, 4, 5, 6]

    def test_empty(self):
        assert interleave([]) == []
        assert interleave([[], []]) == []


class TestDedupeTracks:

    def test_case_insensitive_title_and_artist(self):
        tracks = [
            {"title": "Song", "artist": "A"},
            {"title": "SONG", "artist": "a"},
            {"title": "Song", "artist": "B"},
        ]
        assert dedupe_tracks(tracks) == [
            {"title": "Song", "artist": "A"},
            {"title": "Song", "artist": "B"},
        ]

    def test_keeps_first_occurrence(self):
        tracks = [
            {"title": "Song", "artist": "A", "_country": "US"},
            {"title": "song", "artist": "A", "_country": "GB"},
        ]
        assert dedupe_tracks(tracks)[0]["_country"] == "US"


class TestCountryTrending:
    """Tests for TrendingService.country_trending."""

    @pytest.fixture
    def service(self, stub_client, gateway_config):
        return TrendingService(GatewayService(stub_client, gateway_config))

    def test_single_country(self, service, stub_client):
        stub_client.call.return_value = _trending("A", "B")
        response = service.country_trending(LogicalRequest(
            kind=EndpointKind.COUNTRY_TRENDING, params={"country": "IN"},
        ))
        assert response.body["source"] == "IN"
        assert response.body["count"] == 2
        assert stub_client.call.call_count == 1
        candidate = stub_client.call.call_args.args[0]
        assert candidate.params == {"country": "IN", "limit": 20}

    @pytest.mark.parametrize("params", [
        {},
        {"country": "ZZ"},
        {"country": "IN", "multi": True},
    ])
    def test_global_mix_triggers(self, service, stub_client, params):
        stub_client.call.return_value = _trending("A")
        response = service.country_trending(LogicalRequest(
            kind=EndpointKind.COUNTRY_TRENDING, params=params,
        ))
        assert response.body["source"] == "global"
        countries = [
            c.args[0].params["country"] for c in stub_client.call.call_args_list
        ]
        assert countries == ["US", "GB", "IN"]

    def test_global_mix_interleaves_and_dedupes(self, service, stub_client):
        stub_client.call.side_effect = [
            _trending("One", "Shared"),
            _trending("Shared", "Two"),
            _trending("Three"),
        ]
        response = service.global_mix(limit=4)

        titles = [t["title"] for t in response.body["trending"]]
        assert titles == ["One", "Shared", "Three", "Two"]
        assert response.body["trending"][1]["_country"] == "GB"
        assert response.body["count"] == 4

    def test_global_mix_per_country_limit(self, service, stub_client):
        stub_client.call.return_value = _trending()
        service.global_mix(limit=10)
        limits = {c.args[0].params["limit"] for c in stub_client.call.call_args_list}
        assert limits == {4}

    def test_global_mix_slices_to_limit(self, service, stub_client):
        stub_client.call.side_effect = [
            _trending("a", "b"),
            _trending("c", "d"),
            _trending("e", "f"),
        ]
        response = service.global_mix(limit=3)
        assert len(response.body["trending"]) == 3
        assert response.body["count"] == 6

    def test_failed_country_contributes_nothing(self, service, stub_client):
        stub_client.call.side_effect = [
            _trending("One"),
            UpstreamOutcome(status=OutcomeStatus.TRANSPORT_ERROR),
            _trending("Two"),
        ]
        response = service.global_mix(limit=20)
        assert [t["title"] for t in response.body["trending"]] == ["One", "Two"]

    def test_global_mix_cache_hint(self, service, stub_client):
        stub_client.call.return_value = _trending("A")
        response = service.global_mix(limit=20)
        assert "s-maxage=600" in response.headers["Cache-Control"]

    def test_global_mix_all_failed_not_cached(self, service, stub_client):
        stub_client.call.return_value = UpstreamOutcome(
            status=OutcomeStatus.TIMEOUT
        )
        response = service.global_mix(limit=20)
        assert response.body == {"trending": [], "count": 0, "source": "global"}
        assert response.headers == {}


class TestDelegation:

    def test_single_country_delegates_to_gateway(self):
        gateway = MagicMock()
        gateway.handle.return_value = NormalizedResponse(body={"trending": []})
        request = LogicalRequest(
            kind=EndpointKind.COUNTRY_TRENDING, params={"country": "GB"}
        )
        TrendingService(gateway).country_trending(request)
        gateway.handle.assert_called_once_with(request)
