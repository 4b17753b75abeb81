"""
Trending routes: per-country lists with a global mix, and language trending.
"""

import logging

from tunegate.enums import EndpointKind
from tunegate.routes import json_response, logical_request, main, open_gateway, serve
from tunegate.services import TrendingService

logger = logging.getLogger(__name__)


@main.route("/api/musiva/trending")
def country_trending():
    logical = logical_request(EndpointKind.COUNTRY_TRENDING)
    with open_gateway() as gateway:
        return json_response(TrendingService(gateway).country_trending(logical))


@main.route("/api/trending")
def language_trending():
    return serve(EndpointKind.LANGUAGE_TRENDING)
