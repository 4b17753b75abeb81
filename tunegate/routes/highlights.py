"""
Highlight routes: community-submitted song highlights from the
skip-segment service.
"""

from flask import request

from tunegate.enums import EndpointKind
from tunegate.routes import main, serve


@main.route("/api/sponsorblock")
def sponsorblock():
    return serve(EndpointKind.HIGHLIGHT, request.args.get("videoId"))
