"""
Strava API response parsers.

This module converts raw Strava JSON into the dataclasses in models.py.
Unknown keys are ignored and absent optional keys fall back to the model
defaults. A payload without an "id" where one is required raises
MalformedResponseError.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..exceptions import MalformedResponseError
from .models import (
    ActivityStats,
    ActivityTotal,
    Comment,
    LatLng,
    Lap,
    MetaAthlete,
    Route,
    SegmentEffort,
    Stream,
    SummaryActivity,
    SummaryAthlete,
    SummaryClub,
    SummaryGear,
    SummarySegment,
    Upload,
)

logger = logging.getLogger(__name__)


def parse_datetime(value: Optional[str], local: bool = False) -> Optional[datetime]:
    """
    Parse a Strava ISO-8601 timestamp.

    Strava suffixes local times with "Z" as well, so local=True drops the
    offset and returns a naive datetime.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (TypeError, ValueError):
        logger.warning(f"Unparseable timestamp: {value!r}")
        return None
    if local:
        return parsed.replace(tzinfo=None)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_latlng(value: Optional[List[float]]) -> Optional[LatLng]:
    if not value or len(value) != 2:
        return None
    return LatLng(lat=float(value[0]), lng=float(value[1]))


def _require_id(data: Dict[str, Any], kind: str) -> Any:
    if not isinstance(data, dict) or data.get("id") is None:
        raise MalformedResponseError(f"{kind} payload has no id")
    return data["id"]


def parse_athlete(data: Dict[str, Any]) -> SummaryAthlete:
    return SummaryAthlete(
        id=int(_require_id(data, "Athlete")),
        firstname=data.get("firstname"),
        lastname=data.get("lastname"),
        city=data.get("city"),
        country=data.get("country"),
        sex=data.get("sex"),
        premium=bool(data.get("premium") or data.get("summit")),
        weight=data.get("weight"),
        profile=data.get("profile"),
        created_at=parse_datetime(data.get("created_at")),
    )


def parse_activity(data: Dict[str, Any]) -> SummaryActivity:
    """
    Parse a summary or detailed activity.

    Args:
        data: Raw activity payload

    Returns:
        SummaryActivity (detailed-only fields are dropped)
    """
    athlete = data.get("athlete") or {}
    return SummaryActivity(
        id=int(_require_id(data, "Activity")),
        name=data.get("name", ""),
        # Older payloads only carry the deprecated "type"
        sport_type=data.get("sport_type") or data.get("type"),
        distance=float(data.get("distance") or 0.0),
        moving_time=int(data.get("moving_time") or 0),
        elapsed_time=int(data.get("elapsed_time") or 0),
        total_elevation_gain=float(data.get("total_elevation_gain") or 0.0),
        start_date=parse_datetime(data.get("start_date")),
        start_date_local=parse_datetime(data.get("start_date_local"), local=True),
        timezone=data.get("timezone", ""),
        start_latlng=parse_latlng(data.get("start_latlng")),
        end_latlng=parse_latlng(data.get("end_latlng")),
        average_speed=float(data.get("average_speed") or 0.0),
        max_speed=float(data.get("max_speed") or 0.0),
        average_heartrate=data.get("average_heartrate"),
        average_watts=data.get("average_watts"),
        kudos_count=int(data.get("kudos_count") or 0),
        trainer=bool(data.get("trainer")),
        commute=bool(data.get("commute")),
        manual=bool(data.get("manual")),
        private=bool(data.get("private")),
        gear_id=data.get("gear_id"),
        athlete=MetaAthlete(id=int(athlete["id"])) if athlete.get("id") else None,
        external_id=data.get("external_id"),
        upload_id=data.get("upload_id"),
    )


def parse_laps(items: List[Dict[str, Any]]) -> List[Lap]:
    return [
        Lap(
            id=int(_require_id(item, "Lap")),
            name=item.get("name", ""),
            lap_index=int(item.get("lap_index") or 0),
            distance=float(item.get("distance") or 0.0),
            moving_time=int(item.get("moving_time") or 0),
            elapsed_time=int(item.get("elapsed_time") or 0),
            start_date=parse_datetime(item.get("start_date")),
            average_speed=float(item.get("average_speed") or 0.0),
            max_speed=float(item.get("max_speed") or 0.0),
            total_elevation_gain=float(item.get("total_elevation_gain") or 0.0),
        )
        for item in items
    ]


def _parse_total(data: Optional[Dict[str, Any]]) -> ActivityTotal:
    data = data or {}
    return ActivityTotal(
        count=int(data.get("count") or 0),
        distance=float(data.get("distance") or 0.0),
        moving_time=int(data.get("moving_time") or 0),
        elapsed_time=int(data.get("elapsed_time") or 0),
        elevation_gain=float(data.get("elevation_gain") or 0.0),
        achievement_count=data.get("achievement_count"),
    )


def parse_activity_stats(data: Dict[str, Any]) -> ActivityStats:
    totals = {
        name: _parse_total(data.get(name))
        for name in (
            "recent_ride_totals",
            "recent_run_totals",
            "recent_swim_totals",
            "ytd_ride_totals",
            "ytd_run_totals",
            "ytd_swim_totals",
            "all_ride_totals",
            "all_run_totals",
            "all_swim_totals",
        )
    }
    return ActivityStats(
        biggest_ride_distance=data.get("biggest_ride_distance"),
        biggest_climb_elevation_gain=data.get("biggest_climb_elevation_gain"),
        **totals,
    )


def parse_club(data: Dict[str, Any]) -> SummaryClub:
    return SummaryClub(
        id=int(_require_id(data, "Club")),
        name=data.get("name", ""),
        sport_type=data.get("sport_type"),
        city=data.get("city"),
        country=data.get("country"),
        member_count=int(data.get("member_count") or 0),
        private=bool(data.get("private")),
        url=data.get("url"),
    )


def parse_gear(data: Dict[str, Any]) -> SummaryGear:
    return SummaryGear(
        id=str(_require_id(data, "Gear")),
        name=data.get("name") or data.get("nickname") or "",
        primary=bool(data.get("primary")),
        distance=float(data.get("distance") or 0.0),
        brand_name=data.get("brand_name"),
        model_name=data.get("model_name"),
    )


def parse_segment(data: Dict[str, Any]) -> SummarySegment:
    return SummarySegment(
        id=int(_require_id(data, "Segment")),
        name=data.get("name", ""),
        activity_type=data.get("activity_type"),
        distance=float(data.get("distance") or 0.0),
        average_grade=float(data.get("average_grade") or 0.0),
        maximum_grade=float(data.get("maximum_grade") or 0.0),
        elevation_high=data.get("elevation_high"),
        elevation_low=data.get("elevation_low"),
        climb_category=int(data.get("climb_category") or 0),
        city=data.get("city"),
        country=data.get("country"),
        starred=bool(data.get("starred")),
        start_latlng=parse_latlng(data.get("start_latlng")),
        end_latlng=parse_latlng(data.get("end_latlng")),
    )


def parse_segment_effort(data: Dict[str, Any]) -> SegmentEffort:
    activity = data.get("activity") or {}
    segment = data.get("segment")
    return SegmentEffort(
        id=int(_require_id(data, "Segment effort")),
        name=data.get("name", ""),
        elapsed_time=int(data.get("elapsed_time") or 0),
        moving_time=int(data.get("moving_time") or 0),
        distance=float(data.get("distance") or 0.0),
        start_date=parse_datetime(data.get("start_date")),
        start_date_local=parse_datetime(data.get("start_date_local"), local=True),
        activity_id=activity.get("id") or data.get("activity_id"),
        segment=parse_segment(segment) if segment else None,
        pr_rank=data.get("pr_rank"),
        kom_rank=data.get("kom_rank"),
    )


def parse_route(data: Dict[str, Any]) -> Route:
    athlete = data.get("athlete")
    return Route(
        id=int(_require_id(data, "Route")),
        name=data.get("name", ""),
        description=data.get("description"),
        distance=float(data.get("distance") or 0.0),
        elevation_gain=float(data.get("elevation_gain") or 0.0),
        type=data.get("type"),
        sub_type=data.get("sub_type"),
        private=bool(data.get("private")),
        starred=bool(data.get("starred")),
        estimated_moving_time=data.get("estimated_moving_time"),
        athlete=parse_athlete(athlete) if athlete else None,
        created_at=parse_datetime(data.get("created_at")),
    )


def parse_comment(data: Dict[str, Any]) -> Comment:
    athlete = data.get("athlete")
    return Comment(
        id=int(_require_id(data, "Comment")),
        activity_id=data.get("activity_id"),
        text=data.get("text", ""),
        athlete=parse_athlete(athlete) if athlete and athlete.get("id") else None,
        created_at=parse_datetime(data.get("created_at")),
    )


def parse_upload(data: Dict[str, Any]) -> Upload:
    return Upload(
        id=int(_require_id(data, "Upload")),
        id_str=data.get("id_str"),
        external_id=data.get("external_id"),
        error=data.get("error"),
        status=data.get("status"),
        activity_id=data.get("activity_id"),
    )


def parse_streams(payload: Any) -> Dict[str, Stream]:
    """
    Parse a stream set keyed by stream type.

    Accepts both shapes Strava returns: a dict keyed by type
    (key_by_type=true) or a list of stream objects each carrying "type".
    """
    if isinstance(payload, dict):
        if not all(isinstance(value, dict) for value in payload.values()):
            raise MalformedResponseError("Keyed stream entries must be objects")
        items = [dict(value, type=key) for key, value in payload.items()]
    elif isinstance(payload, list):
        items = payload
    else:
        raise MalformedResponseError("Stream payload is neither an object nor an array")

    streams: Dict[str, Stream] = {}
    for item in items:
        if not isinstance(item, dict):
            raise MalformedResponseError("Stream entry is not an object")
        stream_type = item.get("type")
        if not stream_type:
            raise MalformedResponseError("Stream entry has no type")
        streams[stream_type] = Stream(
            type=stream_type,
            data=list(item.get("data") or []),
            series_type=item.get("series_type"),
            original_size=item.get("original_size"),
            resolution=item.get("resolution"),
        )
    return streams
