"""Segment endpoints: details, starred segments, explore and starring."""

import logging
from collections.abc import Sequence
from typing import Any, Dict, List, Optional

from ..exceptions import InvalidArgumentError, MalformedResponseError
from . import endpoints, http
from .models import SummarySegment
from .parsers import parse_segment
from .validation import require_bounds, require_id, require_paging

logger = logging.getLogger(__name__)

EXPLORE_ACTIVITY_TYPES = ("running", "riding")


def get_segment(access_token: str, segment_id: int) -> Dict[str, Any]:
    segment_id = require_id(segment_id, "segment_id")
    return http.get(endpoints.SEGMENT.format(segment_id=segment_id), access_token)


def get_starred_segments(
    access_token: str, page: int = 1, per_page: int = 30
) -> List[Dict[str, Any]]:
    """Segments starred by the authenticated athlete."""
    require_paging(page, per_page)
    return http.get(
        endpoints.SEGMENTS_STARRED,
        access_token,
        {"page": page, "per_page": per_page},
        expect=http.ARRAY,
    )


def explore_segments(
    access_token: str,
    bounds: Sequence[float],
    activity_type: Optional[str] = None,
    min_cat: Optional[int] = None,
    max_cat: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """
    Find popular segments within a bounding box.

    Args:
        access_token: Bearer token
        bounds: [SW lat, SW lng, NE lat, NE lng]
        activity_type: "running" or "riding"
        min_cat: Minimum climb category (0-5)
        max_cat: Maximum climb category (0-5)

    Returns:
        The "segments" array of the explorer response
    """
    params: Dict[str, Any] = {"bounds": require_bounds(bounds)}
    if activity_type:
        if activity_type not in EXPLORE_ACTIVITY_TYPES:
            raise InvalidArgumentError(
                "activity_type", "Activity type must be 'running' or 'riding'"
            )
        params["activity_type"] = activity_type
    for name, value in (("min_cat", min_cat), ("max_cat", max_cat)):
        if value is not None:
            if not 0 <= value <= 5:
                raise InvalidArgumentError(name, f"{name} must be between 0 and 5")
            params[name] = value

    payload = http.get(endpoints.SEGMENTS_EXPLORE, access_token, params)
    segments = payload.get("segments")
    if not isinstance(segments, list):
        raise MalformedResponseError("The JSON does not contain a 'segments' array")
    return segments


def star_segment(access_token: str, segment_id: int, starred: bool) -> Dict[str, Any]:
    """
    Star or unstar a segment for the authenticated athlete.

    Returns:
        The updated detailed segment
    """
    segment_id = require_id(segment_id, "segment_id")
    logger.info(f"{'Starring' if starred else 'Unstarring'} segment {segment_id}")
    return http.request(
        "PUT",
        endpoints.SEGMENT_STARRED.format(segment_id=segment_id),
        access_token,
        json_data={"starred": bool(starred)},
    )


def fetch_segment(access_token: str, segment_id: int) -> SummarySegment:
    """Typed variant of get_segment()."""
    return parse_segment(get_segment(access_token, segment_id))
