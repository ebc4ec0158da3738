"""
Stream endpoints.

Streams are the raw time series (time, distance, latlng, altitude, heartrate,
watts, ...) of an activity, segment, route or segment effort. With
key_by_type=True Strava answers with an object keyed by stream type,
otherwise with an array of stream objects.
"""

from typing import Any, Dict, Iterable, Optional, Union

from . import endpoints, http
from .models import Stream
from .parsers import parse_streams
from .validation import require_id

StreamKeys = Optional[Union[str, Iterable[str]]]


def _stream_params(keys: StreamKeys, key_by_type: bool) -> Optional[Dict[str, str]]:
    params: Dict[str, str] = {}
    if keys:
        params["keys"] = keys if isinstance(keys, str) else ",".join(keys)
    if key_by_type:
        params["key_by_type"] = "true"
    return params or None


def _get_streams(path: str, access_token: str, keys: StreamKeys, key_by_type: bool) -> Any:
    return http.get(path, access_token, _stream_params(keys, key_by_type), expect=http.ANY)


def get_activity_streams(
    access_token: str, activity_id: int, keys: StreamKeys = None, key_by_type: bool = False
) -> Any:
    """
    Streams of an activity.

    Args:
        access_token: Bearer token
        activity_id: Activity id
        keys: Stream types to request, e.g. "time,heartrate" or ["time", "watts"]
        key_by_type: Ask for an object keyed by stream type
    """
    activity_id = require_id(activity_id, "activity_id")
    return _get_streams(
        endpoints.ACTIVITY_STREAMS.format(activity_id=activity_id),
        access_token,
        keys,
        key_by_type,
    )


def get_segment_streams(
    access_token: str, segment_id: int, keys: StreamKeys = None, key_by_type: bool = False
) -> Any:
    segment_id = require_id(segment_id, "segment_id")
    return _get_streams(
        endpoints.SEGMENT_STREAMS.format(segment_id=segment_id),
        access_token,
        keys,
        key_by_type,
    )


def get_route_streams(
    access_token: str, route_id: int, keys: StreamKeys = None, key_by_type: bool = False
) -> Any:
    route_id = require_id(route_id, "route_id")
    return _get_streams(
        endpoints.ROUTE_STREAMS.format(route_id=route_id), access_token, keys, key_by_type
    )


def get_segment_effort_streams(
    access_token: str,
    segment_effort_id: int,
    keys: StreamKeys = None,
    key_by_type: bool = False,
) -> Any:
    segment_effort_id = require_id(segment_effort_id, "segment_effort_id")
    return _get_streams(
        endpoints.SEGMENT_EFFORT_STREAMS.format(segment_effort_id=segment_effort_id),
        access_token,
        keys,
        key_by_type,
    )


def fetch_activity_streams(
    access_token: str, activity_id: int, keys: StreamKeys = None
) -> Dict[str, Stream]:
    """Typed variant of get_activity_streams(), keyed by stream type."""
    return parse_streams(
        get_activity_streams(access_token, activity_id, keys=keys, key_by_type=True)
    )
