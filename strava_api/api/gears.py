"""Gear endpoint."""

from typing import Any, Dict

from . import endpoints, http
from .models import SummaryGear
from .parsers import parse_gear
from .validation import require_text


def get_gear(access_token: str, gear_id: str) -> Dict[str, Any]:
    """
    Get a bike or pair of shoes.

    Args:
        access_token: Bearer token
        gear_id: Gear id such as "b12345678" (bike) or "g12345678" (shoes)
    """
    gear_id = require_text(gear_id, "gear_id")
    return http.get(endpoints.GEAR.format(gear_id=gear_id), access_token)


def fetch_gear(access_token: str, gear_id: str) -> SummaryGear:
    """Typed variant of get_gear()."""
    return parse_gear(get_gear(access_token, gear_id))
