"""Argument validation shared by the resource functions."""

from collections.abc import Sequence
from numbers import Real
from typing import Any, Optional

from ..exceptions import InvalidArgumentError


def require_token(access_token: Optional[str]) -> str:
    """
    Check an access token is usable.

    Raises:
        InvalidArgumentError: If the token is None, empty or whitespace
    """
    if access_token is None or not str(access_token).strip():
        raise InvalidArgumentError("access_token", "Access token cannot be null or empty")
    return access_token


def require_id(value: Any, parameter: str) -> int:
    """
    Check a numeric resource id is a positive integer.

    Numeric strings are accepted since Strava ids often arrive as text.
    """
    if isinstance(value, bool):
        raise InvalidArgumentError(parameter, f"{parameter} must be an integer id")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise InvalidArgumentError(parameter, f"{parameter} must be an integer id") from None
    if number <= 0:
        raise InvalidArgumentError(parameter, f"{parameter} must be greater than zero")
    return number


def require_text(value: Optional[str], parameter: str) -> str:
    """Check a string argument (e.g. a gear id like "b12345") is not blank."""
    if value is None or not str(value).strip():
        raise InvalidArgumentError(parameter, f"{parameter} cannot be null or empty")
    return str(value).strip()


def require_paging(page: int, per_page: int) -> None:
    """Check page and per_page are at least 1."""
    if page < 1:
        raise InvalidArgumentError("page", "Page must be greater than 0")
    if per_page < 1:
        raise InvalidArgumentError("per_page", "PerPage must be greater than 0")


def require_bounds(bounds: Sequence[float]) -> str:
    """
    Check explore bounds and render them for the query string.

    Args:
        bounds: [south-west lat, south-west lng, north-east lat, north-east lng]

    Returns:
        Comma-separated bounds
    """
    if (
        bounds is None
        or isinstance(bounds, str)
        or len(bounds) != 4
        or not all(isinstance(v, Real) and not isinstance(v, bool) for v in bounds)
    ):
        raise InvalidArgumentError(
            "bounds", "Bounds must be [SW lat, SW lon, NE lat, NE lon]"
        )
    return ",".join(str(v) for v in bounds)


def bool_param(value: bool) -> str:
    """Render a boolean the way Strava form/query fields expect it."""
    return "true" if value else "false"
