"""
Credential record for Strava OAuth.

This module holds the application identity (client id/secret), the requested
scope and the current access/refresh token pair with its expiry time.
TokenStore has no behavior beyond validated construction and small
bookkeeping helpers; AuthorizationFlow is the only writer.
"""

import threading
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from ..exceptions import InvalidArgumentError

# "Already expired" until the first exchange/refresh
NEVER = datetime.min.replace(tzinfo=timezone.utc)


def _require_text(value: Optional[str], parameter: str, label: str) -> str:
    if value is None or not str(value).strip():
        raise InvalidArgumentError(parameter, f"{label} cannot be empty or whitespace")
    return value


@dataclass(frozen=True)
class TokenResponse:
    """
    Parsed result of a successful token endpoint call.

    Returned by AuthorizationFlow.request_token() so callers can decide
    where the new credentials go. TokenStore.apply() writes one into a store.

    Attributes:
        access_token: Bearer token for API calls
        refresh_token: Token used to mint new access tokens
        expires_at: Absolute expiry of the access token (UTC)
        expires_in: Lifetime in seconds as reported by Strava, if present
        token_type: Token type (typically "Bearer")
        athlete: Summary athlete returned with the first exchange, if present
    """

    access_token: str
    refresh_token: str
    expires_at: datetime
    expires_in: Optional[int] = None
    token_type: str = "Bearer"
    athlete: Optional[Dict[str, Any]] = None


class TokenStore:
    """
    Strava application identity plus the current token pair.

    The access and refresh tokens are either both empty (unauthenticated) or
    both populated (authenticated). Writers in this package go through
    apply() and clear(), which hold ``lock`` for the whole update; readers
    that need a consistent view of several fields should hold it too.

    Example:
        store = TokenStore("123", "secret", "read,activity:read_all")
        with store.lock:
            token = store.access_token
    """

    def __init__(self, client_id: str, client_secret: str, scope: str = "read"):
        """
        Initialize the token store.

        Args:
            client_id: Strava application client id
            client_secret: Strava application client secret
            scope: Comma-separated scopes to request (default: "read")

        Raises:
            InvalidArgumentError: If any argument is None, empty or whitespace
        """
        self._client_id = _require_text(client_id, "client_id", "Client ID")
        self._client_secret = _require_text(
            client_secret, "client_secret", "Client secret"
        )
        self.scope = _require_text(scope, "scope", "Scope")

        self.access_token = ""
        self.refresh_token = ""
        self.token_expiration = NEVER
        self.lock = threading.RLock()

    @property
    def client_id(self) -> str:
        return self._client_id

    @property
    def client_secret(self) -> str:
        return self._client_secret

    @property
    def is_authenticated(self) -> bool:
        """True when both access and refresh tokens are populated."""
        with self.lock:
            return bool(self.access_token) and bool(self.refresh_token)

    @property
    def is_expired(self) -> bool:
        """True if the access token has expired (or was never issued)."""
        return self.expires_within(0)

    def expires_within(self, seconds: int) -> bool:
        """
        Check if the access token expires within the given number of seconds.

        Used for proactive refresh (e.g. refresh if expiring within 5 minutes).
        """
        with self.lock:
            expiration = self.token_expiration
        if expiration == NEVER:
            return True
        return datetime.now(timezone.utc) + timedelta(seconds=seconds) >= expiration

    def apply(self, response: TokenResponse) -> None:
        """Write a token response into the store as one locked update."""
        with self.lock:
            self.access_token = response.access_token
            self.refresh_token = response.refresh_token
            self.token_expiration = response.expires_at

    def clear(self) -> None:
        """Return to the unauthenticated state."""
        with self.lock:
            self.access_token = ""
            self.refresh_token = ""
            self.token_expiration = NEVER

    def __repr__(self) -> str:
        return (
            f"TokenStore(client_id={self._client_id!r}, scope={self.scope!r}, "
            f"authenticated={self.is_authenticated}, "
            f"expires={self.token_expiration.isoformat()})"
        )
