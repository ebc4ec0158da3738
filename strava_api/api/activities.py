"""
Activity endpoints.

Listing, reading, creating and updating activities of the authenticated
athlete. Uploading activity files lives in uploads.py.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..exceptions import InvalidArgumentError
from . import endpoints, http
from .models import Comment, Lap, SummaryActivity
from .parsers import parse_activity, parse_comment, parse_laps
from .validation import bool_param, require_id, require_paging, require_text

logger = logging.getLogger(__name__)


def get_athlete_activities(
    access_token: str,
    before: int = 0,
    after: int = 0,
    page: int = 1,
    per_page: int = 30,
) -> List[Dict[str, Any]]:
    """
    List the authenticated athlete's activities, newest first.

    Args:
        access_token: Bearer token with activity:read scope
        before: Only activities before this Unix time (0 = no bound)
        after: Only activities after this Unix time (0 = no bound)
        page: Page number (1-based)
        per_page: Items per page
    """
    require_paging(page, per_page)
    params: Dict[str, Any] = {}
    if before > 0:
        params["before"] = before
    if after > 0:
        params["after"] = after
    params["page"] = page
    params["per_page"] = per_page

    return http.get(endpoints.ATHLETE_ACTIVITIES, access_token, params, expect=http.ARRAY)


def get_activity(
    access_token: str, activity_id: int, include_all_efforts: bool = False
) -> Dict[str, Any]:
    """Get a detailed activity owned by the authenticated athlete."""
    activity_id = require_id(activity_id, "activity_id")
    params = {"include_all_efforts": "true"} if include_all_efforts else None
    return http.get(
        endpoints.ACTIVITY.format(activity_id=activity_id), access_token, params
    )


def get_activity_laps(access_token: str, activity_id: int) -> List[Dict[str, Any]]:
    activity_id = require_id(activity_id, "activity_id")
    return http.get(
        endpoints.ACTIVITY_LAPS.format(activity_id=activity_id),
        access_token,
        expect=http.ARRAY,
    )


def get_activity_zones(access_token: str, activity_id: int) -> List[Dict[str, Any]]:
    """Heart rate and power zone distributions of an activity (Summit feature)."""
    activity_id = require_id(activity_id, "activity_id")
    return http.get(
        endpoints.ACTIVITY_ZONES.format(activity_id=activity_id),
        access_token,
        expect=http.ARRAY,
    )


def get_activity_comments(
    access_token: str, activity_id: int, page: int = 1, per_page: int = 30
) -> List[Dict[str, Any]]:
    activity_id = require_id(activity_id, "activity_id")
    require_paging(page, per_page)
    return http.get(
        endpoints.ACTIVITY_COMMENTS.format(activity_id=activity_id),
        access_token,
        {"page": page, "per_page": per_page},
        expect=http.ARRAY,
    )


def get_activity_kudoers(
    access_token: str, activity_id: int, page: int = 1, per_page: int = 30
) -> List[Dict[str, Any]]:
    activity_id = require_id(activity_id, "activity_id")
    require_paging(page, per_page)
    return http.get(
        endpoints.ACTIVITY_KUDOS.format(activity_id=activity_id),
        access_token,
        {"page": page, "per_page": per_page},
        expect=http.ARRAY,
    )


def create_activity(
    access_token: str,
    name: str,
    sport_type: str,
    start_date_local: datetime,
    elapsed_time: int,
    description: Optional[str] = None,
    distance: Optional[float] = None,
    trainer: bool = False,
    commute: bool = False,
) -> Dict[str, Any]:
    """
    Create a manual activity.

    Args:
        access_token: Bearer token with activity:write scope
        name: Activity name
        sport_type: Sport type, e.g. "Run" or "Ride"
        start_date_local: Local start time
        elapsed_time: Duration in seconds
        description: Optional description
        distance: Distance in meters
        trainer: Mark as a trainer activity
        commute: Mark as a commute

    Returns:
        The created detailed activity
    """
    name = require_text(name, "name")
    sport_type = require_text(sport_type, "sport_type")
    if elapsed_time is None or elapsed_time <= 0:
        raise InvalidArgumentError("elapsed_time", "Elapsed time must be greater than zero")
    if start_date_local is None:
        raise InvalidArgumentError("start_date_local", "Start date cannot be null")

    form: Dict[str, Any] = {
        "name": name,
        "sport_type": sport_type,
        "start_date_local": start_date_local.isoformat(),
        "elapsed_time": elapsed_time,
    }
    if description:
        form["description"] = description
    if distance is not None:
        form["distance"] = distance
    if trainer:
        form["trainer"] = 1
    if commute:
        form["commute"] = 1

    logger.info(f"Creating manual {sport_type} activity")
    return http.request("POST", endpoints.ACTIVITIES, access_token, data=form)


def update_activity(
    access_token: str,
    activity_id: int,
    name: Optional[str] = None,
    description: Optional[str] = None,
    trainer: Optional[bool] = None,
    commute: Optional[bool] = None,
    sport_type: Optional[str] = None,
    gear_id: Optional[str] = None,
    hide_from_home: Optional[bool] = None,
) -> Dict[str, Any]:
    """
    Update fields of an activity owned by the authenticated athlete.

    Only arguments that are given (or non-blank strings) are sent.

    Returns:
        The updated detailed activity
    """
    activity_id = require_id(activity_id, "activity_id")

    form: Dict[str, str] = {}
    if name and name.strip():
        form["name"] = name
    if description and description.strip():
        form["description"] = description
    if trainer is not None:
        form["trainer"] = bool_param(trainer)
    if commute is not None:
        form["commute"] = bool_param(commute)
    if sport_type and sport_type.strip():
        form["sport_type"] = sport_type
    if gear_id and gear_id.strip():
        form["gear_id"] = gear_id
    if hide_from_home is not None:
        form["hide_from_home"] = bool_param(hide_from_home)

    logger.info(f"Updating activity {activity_id} ({', '.join(form) or 'no fields'})")
    return http.request(
        "PUT",
        endpoints.ACTIVITY.format(activity_id=activity_id),
        access_token,
        data=form,
    )


def list_athlete_activities(
    access_token: str,
    before: int = 0,
    after: int = 0,
    page: int = 1,
    per_page: int = 30,
) -> List[SummaryActivity]:
    """Typed variant of get_athlete_activities()."""
    return [
        parse_activity(item)
        for item in get_athlete_activities(access_token, before, after, page, per_page)
    ]


def fetch_activity(access_token: str, activity_id: int) -> SummaryActivity:
    """Typed variant of get_activity()."""
    return parse_activity(get_activity(access_token, activity_id))


def fetch_activity_laps(access_token: str, activity_id: int) -> List[Lap]:
    """Typed variant of get_activity_laps()."""
    return parse_laps(get_activity_laps(access_token, activity_id))


def fetch_activity_comments(
    access_token: str, activity_id: int, page: int = 1, per_page: int = 30
) -> List[Comment]:
    """Typed variant of get_activity_comments()."""
    return [
        parse_comment(item)
        for item in get_activity_comments(access_token, activity_id, page, per_page)
    ]
