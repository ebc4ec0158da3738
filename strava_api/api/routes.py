"""
Route endpoints.

The export functions return the raw GPX/TCX document text rather than JSON.
"""

from typing import Any, Dict, List

from . import endpoints, http
from .models import Route
from .parsers import parse_route
from .validation import require_id, require_paging


def get_route(access_token: str, route_id: int) -> Dict[str, Any]:
    route_id = require_id(route_id, "route_id")
    return http.get(endpoints.ROUTE.format(route_id=route_id), access_token)


def get_athlete_routes(
    access_token: str, athlete_id: int, page: int = 1, per_page: int = 30
) -> List[Dict[str, Any]]:
    athlete_id = require_id(athlete_id, "athlete_id")
    require_paging(page, per_page)
    return http.get(
        endpoints.ATHLETE_ROUTES.format(athlete_id=athlete_id),
        access_token,
        {"page": page, "per_page": per_page},
        expect=http.ARRAY,
    )


def export_route_gpx(access_token: str, route_id: int) -> str:
    """Route as a GPX document."""
    route_id = require_id(route_id, "route_id")
    return http.get(
        endpoints.ROUTE_EXPORT_GPX.format(route_id=route_id), access_token, expect=http.TEXT
    )


def export_route_tcx(access_token: str, route_id: int) -> str:
    """Route as a TCX document."""
    route_id = require_id(route_id, "route_id")
    return http.get(
        endpoints.ROUTE_EXPORT_TCX.format(route_id=route_id), access_token, expect=http.TEXT
    )


def fetch_route(access_token: str, route_id: int) -> Route:
    """Typed variant of get_route()."""
    return parse_route(get_route(access_token, route_id))
