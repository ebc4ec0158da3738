"""Club endpoints."""

from typing import Any, Dict, List

from . import endpoints, http
from .models import SummaryClub
from .parsers import parse_club
from .validation import require_id, require_paging


def get_club(access_token: str, club_id: int) -> Dict[str, Any]:
    club_id = require_id(club_id, "club_id")
    return http.get(endpoints.CLUB.format(club_id=club_id), access_token)


def get_athlete_clubs(
    access_token: str, page: int = 1, per_page: int = 30
) -> List[Dict[str, Any]]:
    """Clubs the authenticated athlete is a member of."""
    require_paging(page, per_page)
    return http.get(
        endpoints.ATHLETE_CLUBS,
        access_token,
        {"page": page, "per_page": per_page},
        expect=http.ARRAY,
    )


def _club_listing(
    path: str, access_token: str, club_id: int, page: int, per_page: int
) -> List[Dict[str, Any]]:
    club_id = require_id(club_id, "club_id")
    require_paging(page, per_page)
    return http.get(
        path.format(club_id=club_id),
        access_token,
        {"page": page, "per_page": per_page},
        expect=http.ARRAY,
    )


def get_club_members(
    access_token: str, club_id: int, page: int = 1, per_page: int = 30
) -> List[Dict[str, Any]]:
    return _club_listing(endpoints.CLUB_MEMBERS, access_token, club_id, page, per_page)


def get_club_activities(
    access_token: str, club_id: int, page: int = 1, per_page: int = 30
) -> List[Dict[str, Any]]:
    """Recent activities of club members (reduced athlete info, no ids)."""
    return _club_listing(endpoints.CLUB_ACTIVITIES, access_token, club_id, page, per_page)


def get_club_admins(
    access_token: str, club_id: int, page: int = 1, per_page: int = 30
) -> List[Dict[str, Any]]:
    return _club_listing(endpoints.CLUB_ADMINS, access_token, club_id, page, per_page)


def list_athlete_clubs(
    access_token: str, page: int = 1, per_page: int = 30
) -> List[SummaryClub]:
    """Typed variant of get_athlete_clubs()."""
    return [parse_club(item) for item in get_athlete_clubs(access_token, page, per_page)]
