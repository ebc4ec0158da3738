"""
Authenticated request helper for the Strava API.

Every resource function goes through request(): it attaches the bearer
token, issues exactly one HTTP call with a bounded timeout, classifies the
response and parses the body. There are no retries, no caching and no
backoff; callers wrap their own policy around these calls (see
OAuthCoordinator.call for the refresh-and-retry-once convention).
"""

import logging
from typing import Any, Dict, Optional
from urllib.parse import urljoin

import requests

from ..exceptions import (
    ConnectionFailedError,
    EmptyResponseError,
    MalformedResponseError,
    RateLimitError,
    RemoteRequestError,
    RequestTimeoutError,
    UnauthorizedError,
)
from .endpoints import BASE_URL
from .validation import require_token

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30
UPLOAD_TIMEOUT = 120

# Expected body shapes
OBJECT = "object"
ARRAY = "array"
TEXT = "text"
ANY = "any"


def _get_full_url(endpoint: str) -> str:
    """Join an endpoint path (e.g. "/athlete") onto BASE_URL."""
    return urljoin(BASE_URL + "/", endpoint.lstrip("/"))


def _raise_for_status(response: requests.Response, method: str, url: str) -> None:
    status = response.status_code
    if 200 <= status < 300:
        return

    body = response.text
    if status == 401:
        logger.error(f"Authentication failed (401) for {method} {url}")
        raise UnauthorizedError(
            "Authentication failed. Access token may be expired or revoked.",
            status_code=status,
            body=body,
        )
    if status == 429:
        logger.warning(
            f"Rate limit exceeded (429), usage: {response.headers.get('X-RateLimit-Usage')}"
        )
        raise RateLimitError(
            "Strava API rate limit exceeded. Please wait before retrying.",
            status_code=status,
            body=body,
        )

    logger.error(f"API error ({status}) for {method} {url}: {body}")
    raise RemoteRequestError(
        f"Strava API error. Status Code: {status}, Response: {body}",
        status_code=status,
        body=body,
    )


def request(
    method: str,
    endpoint: str,
    access_token: str,
    params: Optional[Dict[str, Any]] = None,
    data: Optional[Dict[str, Any]] = None,
    json_data: Optional[Dict[str, Any]] = None,
    files: Optional[Dict[str, Any]] = None,
    expect: str = OBJECT,
    timeout: float = DEFAULT_TIMEOUT,
) -> Any:
    """
    Make one authenticated request to the Strava API.

    Args:
        method: HTTP method (GET, POST, PUT)
        endpoint: API path relative to BASE_URL
        access_token: Bearer token
        params: Query parameters
        data: Form body
        json_data: JSON body
        files: Multipart files (requests format)
        expect: "object", "array", "any" (object or array) or "text"
        timeout: Seconds before the request is abandoned

    Returns:
        Parsed dict (object), list (array) or raw str (text)

    Raises:
        InvalidArgumentError: If access_token is blank
        UnauthorizedError: On 401
        RateLimitError: On 429
        RemoteRequestError: On any other non-2xx status
        EmptyResponseError: If a success response has no body
        MalformedResponseError: If the body is not JSON of the expected shape
        RequestTimeoutError: If the request timed out
        ConnectionFailedError: On other network errors
    """
    require_token(access_token)

    headers = {
        "Authorization": f"Bearer {access_token}",
        "Accept": "application/json",
    }
    url = _get_full_url(endpoint)

    logger.debug(f"{method} {url}")
    if params:
        logger.debug(f"  Params: {params}")

    try:
        response = requests.request(
            method,
            url,
            headers=headers,
            params=params,
            data=data,
            json=json_data,
            files=files,
            timeout=timeout,
        )
    except requests.Timeout as e:
        logger.warning(f"Request timeout for {method} {url}")
        raise RequestTimeoutError(f"Request to Strava timed out after {timeout}s") from e
    except requests.RequestException as e:
        logger.error(f"Network error for {method} {url}: {e}")
        raise ConnectionFailedError(f"Network error: {e}") from e

    _raise_for_status(response, method, url)
    logger.debug(f"Response: {response.status_code}")

    body = response.text
    if not body or not body.strip():
        raise EmptyResponseError(f"Empty response from {method} {endpoint}")

    if expect == TEXT:
        return body

    try:
        payload = response.json()
    except ValueError as e:
        raise MalformedResponseError(f"Failed to parse JSON from {endpoint}: {e}") from e

    if expect == OBJECT and not isinstance(payload, dict):
        raise MalformedResponseError(f"Expected a JSON object from {endpoint}")
    if expect == ARRAY and not isinstance(payload, list):
        raise MalformedResponseError(f"Expected a JSON array from {endpoint}")
    if expect == ANY and not isinstance(payload, (dict, list)):
        raise MalformedResponseError(f"Expected a JSON object or array from {endpoint}")

    return payload


def get(
    endpoint: str,
    access_token: str,
    params: Optional[Dict[str, Any]] = None,
    expect: str = OBJECT,
) -> Any:
    """Authenticated GET; see request()."""
    return request("GET", endpoint, access_token, params=params, expect=expect)
