"""
Pytest configuration and shared fixtures for Tunegate tests.

This module provides common fixtures used across all test modules,
including sample data, a stub upstream client, and Flask
app contexts.
"""

import pytest
from unittest.mock import MagicMock

from tunegate.enums import OutcomeStatus
from tunegate.upstream.models import UpstreamOutcome


# =============================================================================
# Sample Data Fixtures
# =============================================================================


@pytest.fixture
def sample_tracks():
    """Track records as the primary upstream returns them."""
    return [
        {"videoId": "vid001", "title": "Song One", "artist": "Artist A"},
        {"videoId": "vid002", "title": "Song Two", "artist": "Artist B"},
        {"videoId": "vid003", "title": "Song Three", "artist": "Artist C"},
    ]


@pytest.fixture
def gateway_config():
    """Config mapping with every key the gateway service reads."""
    return {
        "UPSTREAM_BASE_URL": "http://upstream.test",
        "SKIP_SEGMENTS_BASE_URL": "http://skip-segments.test",
        "TRENDING_BASE_URL": "http://trending.test",
        "LANGUAGE_TRENDING_BASE_URL": "http://language-trending.test",
        "UPSTREAM_TIMEOUT": 30.0,
        "CHARTS_TIMEOUT": 15.0,
        "CACHE_HINT_TTL": 600,
        "MOOD_CATEGORIES_TTL": 1800,
        "HIGHLIGHT_CACHE_TTL": 3600,
        "STALE_WHILE_REVALIDATE": 60,
    }


@pytest.fixture
def stub_client():
    """Upstream client stub; set ``call.side_effect`` or ``return_value``."""
    client = MagicMock()
    client.call.return_value = UpstreamOutcome(
        status=OutcomeStatus.SUCCESS, payload={}, status_code=200
    )
    return client


# =============================================================================
# Flask App Fixtures
# =============================================================================


@pytest.fixture
def app():
    """Create a Flask app configured for testing."""
    from tunegate import create_app

    return create_app("testing")


@pytest.fixture
def app_context(app):
    """Provide an application context."""
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    """Flask test client."""
    return app.test_client()
