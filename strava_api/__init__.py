"""
Strava API binding.

OAuth 2.0 authorization-code flow (strava_api.oauth) plus stateless,
per-resource call wrappers for the Strava v3 REST API (strava_api.api).

Example:
    from strava_api import AuthorizationFlow, TokenStore
    from strava_api.api import activities

    store = TokenStore("123", "secret", "read,activity:read_all")
    flow = AuthorizationFlow(store, "http://localhost:8080/callback",
                             "read,activity:read_all")
    if flow.authorize():
        recent = activities.get_athlete_activities(store.access_token)
"""

from .exceptions import (
    AuthorizationCancelledError,
    AuthorizationError,
    AuthorizationTimeoutError,
    ConnectionFailedError,
    EmptyResponseError,
    InvalidArgumentError,
    InvalidConfigurationError,
    MalformedResponseError,
    MissingAuthorizationCodeError,
    PreconditionFailedError,
    RateLimitError,
    RemoteRequestError,
    RequestTimeoutError,
    StravaAPIError,
    StravaTimeoutError,
    UnauthorizedError,
)
from .oauth import (
    AuthorizationFlow,
    FlowState,
    OAuthCoordinator,
    StravaOAuthConfig,
    TokenResponse,
    TokenStore,
)

__version__ = "0.1.0"

__all__ = [
    # OAuth
    "TokenStore",
    "TokenResponse",
    "AuthorizationFlow",
    "FlowState",
    "StravaOAuthConfig",
    "OAuthCoordinator",
    # Exceptions
    "StravaAPIError",
    "InvalidArgumentError",
    "InvalidConfigurationError",
    "PreconditionFailedError",
    "StravaTimeoutError",
    "AuthorizationTimeoutError",
    "RequestTimeoutError",
    "AuthorizationError",
    "MissingAuthorizationCodeError",
    "AuthorizationCancelledError",
    "ConnectionFailedError",
    "RemoteRequestError",
    "UnauthorizedError",
    "RateLimitError",
    "EmptyResponseError",
    "MalformedResponseError",
]
