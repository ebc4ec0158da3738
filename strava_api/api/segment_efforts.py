"""
Segment effort endpoints.

Listing efforts requires a Strava subscription on the authenticated account.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from ..exceptions import InvalidArgumentError
from . import endpoints, http
from .models import SegmentEffort
from .parsers import parse_segment_effort
from .validation import require_id


def get_segment_efforts(
    access_token: str,
    segment_id: int,
    start_date_local: Optional[datetime] = None,
    end_date_local: Optional[datetime] = None,
    per_page: int = 30,
) -> List[Dict[str, Any]]:
    """
    Efforts of the authenticated athlete on a segment.

    Args:
        access_token: Bearer token
        segment_id: Segment id
        start_date_local: Only efforts after this local time
        end_date_local: Only efforts before this local time
        per_page: Items per page
    """
    segment_id = require_id(segment_id, "segment_id")
    if per_page < 1:
        raise InvalidArgumentError("per_page", "PerPage must be greater than zero")

    params: Dict[str, Any] = {"segment_id": segment_id, "per_page": per_page}
    if start_date_local is not None:
        params["start_date_local"] = start_date_local.isoformat()
    if end_date_local is not None:
        params["end_date_local"] = end_date_local.isoformat()

    return http.get(endpoints.SEGMENT_EFFORTS, access_token, params, expect=http.ARRAY)


def get_segment_effort(access_token: str, segment_effort_id: int) -> Dict[str, Any]:
    segment_effort_id = require_id(segment_effort_id, "segment_effort_id")
    return http.get(
        endpoints.SEGMENT_EFFORT.format(segment_effort_id=segment_effort_id), access_token
    )


def list_segment_efforts(
    access_token: str,
    segment_id: int,
    start_date_local: Optional[datetime] = None,
    end_date_local: Optional[datetime] = None,
    per_page: int = 30,
) -> List[SegmentEffort]:
    """Typed variant of get_segment_efforts()."""
    return [
        parse_segment_effort(item)
        for item in get_segment_efforts(
            access_token, segment_id, start_date_local, end_date_local, per_page
        )
    ]
