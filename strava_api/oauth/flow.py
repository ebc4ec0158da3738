"""
OAuth 2.0 authorization-code flow for Strava.

This module drives the token lifecycle:
- Authorization URL construction and browser launch
- Capture of the redirect on a local callback server
- Authorization code exchange (code -> access/refresh tokens)
- Token refresh (refresh token -> new access token)

Token freshness is the caller's job (see OAuthCoordinator); this module never
refreshes on its own and never retries.
"""

import logging
import threading
import webbrowser
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional
from urllib.parse import quote, urlencode

import requests

from ..exceptions import (
    ConnectionFailedError,
    InvalidArgumentError,
    InvalidConfigurationError,
    MalformedResponseError,
    MissingAuthorizationCodeError,
    PreconditionFailedError,
    RemoteRequestError,
    RequestTimeoutError,
)
from .auth_server import OAuthCallbackServer
from .config import AUTHORIZATION_URL, TOKEN_URL
from .token_store import TokenResponse, TokenStore

logger = logging.getLogger(__name__)

REQUIRED_TOKEN_FIELDS = ("access_token", "refresh_token", "expires_at")


class FlowState(Enum):
    """Where an AuthorizationFlow is in the authorization-code grant."""

    UNAUTHENTICATED = "unauthenticated"
    AWAITING_USER_APPROVAL = "awaiting_user_approval"
    AWAITING_CALLBACK = "awaiting_callback"
    AUTHENTICATED = "authenticated"
    REFRESHING = "refreshing"
    FAILED = "failed"


class AuthorizationFlow:
    """
    Drives the OAuth 2.0 authorization-code grant and keeps a TokenStore current.

    One authorization attempt per instance at a time. Calls that mutate the
    store hold ``store.lock`` while writing, so a reader holding the same lock
    always sees a consistent token pair.

    Example:
        store = TokenStore("123", "secret", "read,activity:read_all")
        flow = AuthorizationFlow(store, "http://localhost:8080/callback",
                                 "read,activity:read_all")
        flow.start_authorization()
        code = flow.wait_for_authorization_code()
        if flow.exchange_code_for_token(code):
            token = store.access_token
    """

    def __init__(
        self,
        store: TokenStore,
        redirect_uri: Optional[str],
        scope: Optional[str] = None,
        authorization_url: str = AUTHORIZATION_URL,
        token_url: str = TOKEN_URL,
        request_timeout: float = 30,
        callback_timeout: float = 300,
        browser_launcher: Optional[Callable[[str], object]] = None,
    ):
        """
        Initialize the flow.

        Args:
            store: Token store to read credentials from and write tokens to
            redirect_uri: Redirect URI registered with Strava; may be None if
                the code is obtained some other way
            scope: Comma-separated scopes (defaults to the store's scope)
            authorization_url: Strava OAuth authorization endpoint
            token_url: Strava OAuth token endpoint
            request_timeout: Seconds before a token request is abandoned
            callback_timeout: Default seconds to wait for the OAuth callback
            browser_launcher: Callable that opens a URL (default: webbrowser.open)

        Raises:
            InvalidArgumentError: If store is None or scope is blank
        """
        if store is None:
            raise InvalidArgumentError("store", "Token store cannot be None")
        if scope is not None and not scope.strip():
            raise InvalidArgumentError("scope", "Scope cannot be empty or whitespace")

        self.store = store
        self.redirect_uri = redirect_uri
        self.scope = scope if scope is not None else store.scope
        self.authorization_url = authorization_url
        self.token_url = token_url
        self.request_timeout = request_timeout
        self.callback_timeout = callback_timeout
        self.browser_launcher = browser_launcher or webbrowser.open

        self.state = (
            FlowState.AUTHENTICATED if store.is_authenticated else FlowState.UNAUTHENTICATED
        )

    def build_authorization_url(self) -> str:
        """
        Build the Strava authorization URL.

        approval_prompt=force shows the consent screen even when access was
        granted before, so scope changes are always visible to the user.

        Returns:
            Complete authorization URL with query parameters
        """
        params = {
            "client_id": self.store.client_id,
            "redirect_uri": self.redirect_uri or "",
            "response_type": "code",
            "scope": self.scope,
            "approval_prompt": "force",
        }
        return f"{self.authorization_url}?{urlencode(params, quote_via=quote)}"

    def start_authorization(self) -> None:
        """
        Open the authorization URL in the user's browser.

        The launch is fire-and-forget; launcher errors propagate.
        """
        url = self.build_authorization_url()
        logger.info("Opening Strava authorization page in browser")
        try:
            self.browser_launcher(url)
        except Exception:
            self.state = FlowState.FAILED
            raise
        self.state = FlowState.AWAITING_USER_APPROVAL

    def wait_for_authorization_code(
        self,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> str:
        """
        Listen on the redirect URI for the OAuth callback and return its code.

        The listener is shut down in every outcome.

        Args:
            timeout: Seconds to wait (default: the flow's callback_timeout)
            cancel_event: Event the caller sets to abandon the wait

        Returns:
            Authorization code from the callback

        Raises:
            InvalidConfigurationError: If no redirect URI was supplied
            AuthorizationTimeoutError: If no callback arrived in time
            AuthorizationCancelledError: If cancel_event was set
            MissingAuthorizationCodeError: If the callback carried no code
        """
        if not self.redirect_uri or not self.redirect_uri.strip():
            self.state = FlowState.FAILED
            raise InvalidConfigurationError("Redirect URI is not set")

        if timeout is None:
            timeout = self.callback_timeout

        server = None
        try:
            server = OAuthCallbackServer(self.redirect_uri)
            self.state = FlowState.AWAITING_CALLBACK
            server.start()
            result = server.wait_for_callback(timeout=timeout, cancel_event=cancel_event)
        except Exception:
            self.state = FlowState.FAILED
            raise
        finally:
            if server is not None:
                server.stop()

        if not result.success:
            self.state = FlowState.FAILED
            raise MissingAuthorizationCodeError(
                "Authorization code not found in the callback request",
                error=result.error,
                error_description=result.error_description,
            )

        return result.authorization_code

    def exchange_code_for_token(self, code: str) -> bool:
        """
        Exchange an authorization code for access and refresh tokens.

        Args:
            code: Code received on the OAuth callback

        Returns:
            True if the store was updated; False if Strava answered with JSON
            that lacks access_token, refresh_token or expires_at

        Raises:
            InvalidArgumentError: If code is empty
            RemoteRequestError: If Strava answered with a non-2xx status
            MalformedResponseError: If the body is not a JSON object
            RequestTimeoutError: If the request timed out
            ConnectionFailedError: On other network errors
        """
        if code is None or not code.strip():
            raise InvalidArgumentError("code", "Authorization code cannot be empty")

        logger.info("Exchanging authorization code for tokens")
        return self._request_and_apply(
            "authorization_code", code=code, success_state=FlowState.AUTHENTICATED
        )

    def refresh_access_token(self) -> bool:
        """
        Mint a new access token from the stored refresh token.

        Returns:
            True if the store was updated; False if the response lacks one of
            the expected fields

        Raises:
            PreconditionFailedError: If the store has no refresh token
            RemoteRequestError: If Strava answered with a non-2xx status
            MalformedResponseError: If the body is not a JSON object
            RequestTimeoutError: If the request timed out
            ConnectionFailedError: On other network errors
        """
        with self.store.lock:
            refresh_token = self.store.refresh_token

        if not refresh_token or not refresh_token.strip():
            raise PreconditionFailedError(
                "No refresh token available. Run the authorization flow first."
            )

        logger.info("Refreshing access token")
        self.state = FlowState.REFRESHING
        return self._request_and_apply(
            "refresh_token",
            refresh_token=refresh_token,
            success_state=FlowState.AUTHENTICATED,
        )

    def authorize(
        self,
        open_browser: bool = True,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> bool:
        """
        Run the complete flow: open browser, capture the code, exchange it.

        Args:
            open_browser: Launch the browser (False: caller shows the URL)
            timeout: Seconds to wait for the callback
            cancel_event: Event the caller sets to abandon the wait

        Returns:
            Result of exchange_code_for_token()
        """
        if open_browser:
            self.start_authorization()
        else:
            logger.info("Waiting for the user to open the authorization URL")
            self.state = FlowState.AWAITING_USER_APPROVAL

        code = self.wait_for_authorization_code(timeout=timeout, cancel_event=cancel_event)
        return self.exchange_code_for_token(code)

    def request_token(self, grant_type: str, **fields: str) -> Optional[TokenResponse]:
        """
        POST to the token endpoint and parse the answer without touching the store.

        Args:
            grant_type: "authorization_code" or "refresh_token"
            **fields: Grant-specific form fields (code or refresh_token)

        Returns:
            TokenResponse, or None if a field the store needs is absent

        Raises:
            RemoteRequestError: If Strava answered with a non-2xx status
            MalformedResponseError: If the body is not a JSON object
            RequestTimeoutError: If the request timed out
            ConnectionFailedError: On other network errors
        """
        payload = {
            "client_id": self.store.client_id,
            "client_secret": self.store.client_secret,
            **fields,
            "grant_type": grant_type,
        }

        try:
            response = requests.post(
                self.token_url, data=payload, timeout=self.request_timeout
            )
        except requests.Timeout as e:
            logger.warning(f"Token request ({grant_type}) timed out")
            raise RequestTimeoutError(
                f"Token request timed out after {self.request_timeout}s"
            ) from e
        except requests.RequestException as e:
            logger.error(f"Network error during token request ({grant_type}): {e}")
            raise ConnectionFailedError(f"Network error during token request: {e}") from e

        if not 200 <= response.status_code < 300:
            logger.error(
                f"Token request ({grant_type}) failed: "
                f"{response.status_code} - {response.text}"
            )
            raise RemoteRequestError(
                f"Token exchange failed. Status: {response.status_code}, "
                f"Response: {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError(f"Failed to parse token response JSON: {e}") from e

        if not isinstance(data, dict):
            raise MalformedResponseError("Token response JSON is not an object")

        # null or empty counts as absent so the token pair is never half-set
        missing = [name for name in REQUIRED_TOKEN_FIELDS if data.get(name) in (None, "")]
        if missing:
            logger.warning(f"Token response is missing fields: {', '.join(missing)}")
            return None

        try:
            expires_at = datetime.fromtimestamp(int(data["expires_at"]), tz=timezone.utc)
        except (TypeError, ValueError, OverflowError, OSError) as e:
            raise MalformedResponseError(
                f"Invalid expires_at in token response: {data['expires_at']!r}"
            ) from e

        expires_in = data.get("expires_in")
        return TokenResponse(
            access_token=str(data["access_token"]),
            refresh_token=str(data["refresh_token"]),
            expires_at=expires_at,
            expires_in=int(expires_in) if isinstance(expires_in, (int, float)) else None,
            token_type=data.get("token_type", "Bearer"),
            athlete=data.get("athlete"),
        )

    def _request_and_apply(
        self, grant_type: str, success_state: FlowState, **fields: str
    ) -> bool:
        try:
            token_response = self.request_token(grant_type, **fields)
        except Exception:
            self.state = FlowState.FAILED
            raise

        if token_response is None:
            self.state = FlowState.FAILED
            return False

        self.store.apply(token_response)
        self.state = success_state
        logger.info(
            f"Tokens updated, access token valid until "
            f"{token_response.expires_at.isoformat()}"
        )
        return True
