"""Athlete endpoints: profile, stats, zones and weight update."""

import logging
from typing import Any, Dict

from ..exceptions import InvalidArgumentError
from . import endpoints, http
from .models import ActivityStats, SummaryAthlete
from .parsers import parse_activity_stats, parse_athlete
from .validation import require_id

logger = logging.getLogger(__name__)


def get_authenticated_athlete(access_token: str) -> Dict[str, Any]:
    """Profile of the athlete the token belongs to."""
    return http.get(endpoints.ATHLETE, access_token)


def get_athlete_stats(access_token: str, athlete_id: int) -> Dict[str, Any]:
    """
    Activity totals for an athlete.

    Strava only returns stats for the authenticated athlete, so athlete_id
    must be that athlete's id.
    """
    athlete_id = require_id(athlete_id, "athlete_id")
    return http.get(endpoints.ATHLETE_STATS.format(athlete_id=athlete_id), access_token)


def get_athlete_zones(access_token: str) -> Dict[str, Any]:
    """Heart rate and power zones of the authenticated athlete (profile:read_all)."""
    return http.get(endpoints.ATHLETE_ZONES, access_token)


def update_athlete(access_token: str, weight: float) -> Dict[str, Any]:
    """
    Update the authenticated athlete's weight.

    Args:
        access_token: Bearer token with profile:write scope
        weight: Weight in kilograms

    Returns:
        The updated athlete
    """
    if isinstance(weight, bool) or not isinstance(weight, (int, float)) or weight <= 0:
        raise InvalidArgumentError("weight", "Weight must be a positive number")

    logger.info("Updating athlete weight")
    return http.request("PUT", endpoints.ATHLETE, access_token, json_data={"weight": weight})


def fetch_authenticated_athlete(access_token: str) -> SummaryAthlete:
    """Typed variant of get_authenticated_athlete()."""
    return parse_athlete(get_authenticated_athlete(access_token))


def fetch_athlete_stats(access_token: str, athlete_id: int) -> ActivityStats:
    """Typed variant of get_athlete_stats()."""
    return parse_activity_stats(get_athlete_stats(access_token, athlete_id))
