"""
OAuth coordinator for high-level OAuth operations.

This module is the caller-side glue that applications use: it owns one
TokenStore and AuthorizationFlow, hands new tokens to an optional
caller-supplied callback, refreshes proactively before expiry and retries a
resource call once after a 401.
"""

import logging
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, TypeVar

from ..exceptions import MalformedResponseError, PreconditionFailedError, UnauthorizedError
from .config import StravaOAuthConfig
from .flow import AuthorizationFlow
from .token_store import TokenResponse, TokenStore

logger = logging.getLogger(__name__)

T = TypeVar("T")

TokenCallback = Callable[[Optional[TokenResponse]], None]


class OAuthCoordinator:
    """
    High-level coordinator for OAuth operations.

    Token reads and writes go through ``store.lock``, so concurrent callers
    share one refresh instead of racing each other. Authorization attempts
    are serialized on a separate lock that readers never take, so status and
    token reads stay responsive while a flow waits for the browser.

    Persistence is left to the embedding application: pass previously saved
    tokens as ``tokens`` and receive every change through ``on_tokens_changed``
    (called with None after revoke()).

    Example:
        config = StravaOAuthConfig(client_id="123", client_secret="secret")
        coordinator = OAuthCoordinator(config, on_tokens_changed=save_tokens)
        if coordinator.ensure_authorized():
            athlete = coordinator.call(athletes.get_authenticated_athlete)
    """

    def __init__(
        self,
        config: StravaOAuthConfig,
        browser_launcher: Optional[Callable[[str], object]] = None,
        tokens: Optional[TokenResponse] = None,
        on_tokens_changed: Optional[TokenCallback] = None,
    ):
        """
        Initialize OAuth coordinator.

        Args:
            config: OAuth configuration
            browser_launcher: Callable that opens a URL (default: webbrowser.open)
            tokens: Previously issued tokens to start from, if any
            on_tokens_changed: Called with the new tokens after every
                successful authorization or refresh, and with None after revoke()
        """
        self.config = config
        self.on_tokens_changed = on_tokens_changed
        self.store = TokenStore(
            self.config.client_id, self.config.client_secret, self.config.scope
        )
        if tokens is not None:
            self.store.apply(tokens)
            logger.debug("Starting from previously issued tokens")

        self.flow = AuthorizationFlow(
            self.store,
            self.config.redirect_uri,
            self.config.scope,
            authorization_url=self.config.authorization_url,
            token_url=self.config.token_url,
            request_timeout=self.config.request_timeout_seconds,
            callback_timeout=self.config.callback_timeout_seconds,
            browser_launcher=browser_launcher,
        )
        self._flow_lock = threading.Lock()

    def ensure_authorized(self, open_browser: bool = True) -> bool:
        """
        Ensure we have tokens, running the authorization flow if needed.

        Concurrent callers wait for a flow already in progress instead of
        starting a second one.

        Args:
            open_browser: Whether to auto-open the browser for authorization

        Returns:
            True if authorized (or authorization succeeded), False if Strava
            answered with an incomplete token response
        """
        if self.store.is_authenticated:
            logger.info("Already authorized")
            return True

        with self._flow_lock:
            if self.store.is_authenticated:
                logger.info("Authorized by a concurrent flow")
                return True

            logger.info("No tokens found, starting authorization flow")
            return self._authorize(open_browser)

    def run_authorization_flow(self, open_browser: bool = True) -> bool:
        """
        Run the complete OAuth authorization flow, even if tokens exist.

        Args:
            open_browser: Whether to automatically open the browser

        Returns:
            True if the store now holds tokens
        """
        with self._flow_lock:
            return self._authorize(open_browser)

    def get_access_token(self) -> str:
        """
        Get a valid access token, refreshing it if it expires soon.

        Returns:
            Access token valid for at least refresh_buffer_seconds

        Raises:
            PreconditionFailedError: If not authorized (run the flow first)
            MalformedResponseError: If the refresh answer lacked token fields
        """
        with self.store.lock:
            if not self.store.is_authenticated:
                raise PreconditionFailedError(
                    "No tokens available. Run the authorization flow first."
                )

            if self.store.expires_within(self.config.refresh_buffer_seconds):
                logger.info(
                    f"Token expires soon "
                    f"(within {self.config.refresh_buffer_seconds}s), refreshing..."
                )
                self._refresh()

            return self.store.access_token

    def get_authorization_header(self) -> Dict[str, str]:
        """Authorization header dict for API requests."""
        return {"Authorization": f"Bearer {self.get_access_token()}"}

    def call(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """
        Call a resource function with a fresh access token.

        On a 401 the token is refreshed once and the call retried once; a
        second 401 propagates.

        Args:
            func: Resource function taking the access token as first argument
            *args: Remaining positional arguments for func
            **kwargs: Keyword arguments for func

        Returns:
            Whatever func returns
        """
        token = self.get_access_token()
        try:
            return func(token, *args, **kwargs)
        except UnauthorizedError:
            logger.warning("Access token rejected (401), refreshing and retrying once")

        with self.store.lock:
            # Another caller may have refreshed already
            if self.store.access_token == token:
                self._refresh()
            token = self.store.access_token

        return func(token, *args, **kwargs)

    def is_authorized(self) -> bool:
        return self.store.is_authenticated

    def get_status(self) -> Dict[str, Any]:
        """
        Get current authorization status for diagnostics.

        Returns:
            Dictionary with:
            - authorized: bool
            - expired: bool (if authorized)
            - expires_at: ISO timestamp (if authorized)
            - expires_in_seconds: float (if authorized)
            - scope: str
            - state: flow state name
            - message: str (if not authorized)
        """
        with self.store.lock:
            if not self.store.is_authenticated:
                return {
                    "authorized": False,
                    "scope": self.store.scope,
                    "state": self.flow.state.value,
                    "message": "No tokens stored",
                }

            expiration = self.store.token_expiration
            expires_in = (expiration - datetime.now(timezone.utc)).total_seconds()
            return {
                "authorized": True,
                "expired": self.store.is_expired,
                "expires_at": expiration.isoformat(),
                "expires_in_seconds": max(0, expires_in),
                "scope": self.store.scope,
                "state": self.flow.state.value,
            }

    def revoke(self) -> None:
        """
        Forget the current tokens (local revocation).

        Clears the store and reports None to on_tokens_changed. Access is not
        revoked on Strava's side.
        """
        with self.store.lock:
            self.store.clear()
            if self.on_tokens_changed is not None:
                self.on_tokens_changed(None)
        logger.info("Authorization revoked locally. Re-authorization required.")

    def _authorize(self, open_browser: bool) -> bool:
        # store.lock stays free while the flow waits for the callback
        if not open_browser:
            logger.info(
                "Please authorize the application by visiting: "
                f"{self.flow.build_authorization_url()}"
            )
        if not self.flow.authorize(open_browser=open_browser):
            logger.error("Authorization failed: incomplete token response")
            return False
        self._persist()

        logger.info("Authorization complete")
        return True

    def _refresh(self) -> None:
        if not self.flow.refresh_access_token():
            raise MalformedResponseError(
                "Token refresh response is missing access_token, refresh_token or expires_at"
            )
        self._persist()

    def _persist(self) -> None:
        if self.on_tokens_changed is None:
            return
        with self.store.lock:
            self.on_tokens_changed(
                TokenResponse(
                    access_token=self.store.access_token,
                    refresh_token=self.store.refresh_token,
                    expires_at=self.store.token_expiration,
                )
            )
