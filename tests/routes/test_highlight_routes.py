"""Tests for the /api/sponsorblock highlight route."""

from unittest.mock import patch

from tunegate.enums import OutcomeStatus, Upstream
from tunegate.upstream.models import UpstreamOutcome


class TestSponsorblockRoute:

    @patch("tunegate.upstream.http_client.UpstreamHTTPClient.call")
    def test_found(self, mock_call, client):
        mock_call.return_value = UpstreamOutcome(
            status=OutcomeStatus.SUCCESS,
            payload=[{"segment": [61.2, 61.2], "videoDuration": 200, "votes": 3}],
            status_code=200,
        )
        resp = client.get("/api/sponsorblock?videoId=vid001")
        assert resp.status_code == 200
        assert resp.get_json() == {
            "found": True, "highlight": 61.2, "videoDuration": 200, "votes": 3,
        }
        assert "s-maxage=3600" in resp.headers["Cache-Control"]
        candidate = mock_call.call_args.args[0]
        assert candidate.upstream == Upstream.SKIP_SEGMENTS
        assert candidate.params["videoID"] == "vid001"

    @patch("tunegate.upstream.http_client.UpstreamHTTPClient.call")
    def test_no_highlight(self, mock_call, client):
        mock_call.return_value = UpstreamOutcome(
            status=OutcomeStatus.NOT_FOUND, status_code=404
        )
        resp = client.get("/api/sponsorblock?videoId=vid001")
        assert resp.status_code == 200
        assert resp.get_json() == {"highlight": None, "found": False}
        assert mock_call.call_count == 1

    @patch("tunegate.upstream.http_client.UpstreamHTTPClient.call")
    def test_missing_video_id(self, mock_call, client):
        resp = client.get("/api/sponsorblock")
        assert resp.status_code == 400
        assert resp.get_json() == {"error": "Missing videoId"}
        mock_call.assert_not_called()
