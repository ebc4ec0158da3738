"""
OAuth configuration for the Strava API binding.

This module provides configuration management for the OAuth 2.0 flow.
Configuration is supplied programmatically by the embedding application.
"""

from dataclasses import dataclass
from urllib.parse import urlsplit

from ..exceptions import InvalidConfigurationError

AUTHORIZATION_URL = "https://www.strava.com/oauth/authorize"
TOKEN_URL = "https://www.strava.com/oauth/token"


@dataclass
class StravaOAuthConfig:
    """
    Configuration for Strava OAuth 2.0.

    Attributes:
        client_id: Strava application client ID
        client_secret: Strava application client secret
        redirect_uri: Callback URL registered with the Strava application;
            the local callback server binds to its host and port
        scope: Comma-separated scopes to request
        authorization_url: Strava OAuth authorization endpoint
        token_url: Strava OAuth token endpoint
        callback_timeout_seconds: How long to wait for the OAuth callback
        request_timeout_seconds: Timeout for token endpoint requests
        refresh_buffer_seconds: Refresh tokens this many seconds before expiry
    """

    # Required - from https://www.strava.com/settings/api
    client_id: str
    client_secret: str

    # Callback configuration
    redirect_uri: str = "http://localhost:8080/callback"
    scope: str = "read"

    # Strava OAuth endpoints
    authorization_url: str = AUTHORIZATION_URL
    token_url: str = TOKEN_URL

    # Timeouts
    callback_timeout_seconds: int = 300
    request_timeout_seconds: int = 30

    # Token refresh settings
    refresh_buffer_seconds: int = 300  # Refresh 5 min before expiry

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        if not self.client_id or not self.client_id.strip():
            raise InvalidConfigurationError("client_id cannot be empty")

        if not self.client_secret or not self.client_secret.strip():
            raise InvalidConfigurationError("client_secret cannot be empty")

        if not self.scope or not self.scope.strip():
            raise InvalidConfigurationError("scope cannot be empty")

        # The callback server is plain HTTP
        parts = urlsplit(self.redirect_uri or "")
        if parts.scheme != "http" or not parts.hostname:
            raise InvalidConfigurationError(
                f"redirect_uri must be an absolute http URL, got {self.redirect_uri!r}"
            )

        if self.callback_timeout_seconds <= 0:
            raise InvalidConfigurationError("callback_timeout_seconds must be positive")

        if self.request_timeout_seconds <= 0:
            raise InvalidConfigurationError("request_timeout_seconds must be positive")

        if self.refresh_buffer_seconds < 0:
            raise InvalidConfigurationError("refresh_buffer_seconds cannot be negative")

    @property
    def callback_host(self) -> str:
        """Host the local callback server binds to."""
        return urlsplit(self.redirect_uri).hostname

    @property
    def callback_port(self) -> int:
        """Port the local callback server binds to (80 if absent)."""
        return urlsplit(self.redirect_uri).port or 80

    @property
    def callback_path(self) -> str:
        """URL path the callback server answers on."""
        return urlsplit(self.redirect_uri).path or "/"
