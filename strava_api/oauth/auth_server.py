"""
OAuth callback server for the Strava API binding.

This module provides a short-lived local HTTP server that captures the
OAuth redirect during the authorization flow. It binds to the host and port
of the configured redirect URI, answers exactly one request on the redirect
path, and is shut down by its owner afterwards.
"""

import html
import logging
import threading
import time
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit

from flask import Flask, Response, request
from werkzeug.serving import make_server

from ..exceptions import (
    AuthorizationCancelledError,
    AuthorizationTimeoutError,
    InvalidConfigurationError,
)

logger = logging.getLogger(__name__)

SUCCESS_PAGE = """<html>
<head><title>Authorization Successful</title></head>
<body style="font-family: Arial, sans-serif; max-width: 600px; margin: 50px auto; padding: 20px;">
    <h1 style="color: #fc4c02;">Authorization successful.</h1>
    <p>You can close this window and return to the application.</p>
</body>
</html>"""

FAILURE_PAGE = """<html>
<head><title>Authorization Failed</title></head>
<body style="font-family: Arial, sans-serif; max-width: 600px; margin: 50px auto; padding: 20px;">
    <h1 style="color: #d32f2f;">Authorization failed.</h1>
    <p><strong>Error:</strong> {error}</p>
    <p><strong>Description:</strong> {description}</p>
    <p style="margin-top: 30px; color: #666;">You can close this window.</p>
</body>
</html>"""

# Granularity for checking the caller's cancel event
_POLL_INTERVAL = 0.1


@dataclass
class AuthorizationResult:
    """
    Outcome of a received OAuth callback.

    Attributes:
        success: Whether the callback carried an authorization code
        authorization_code: Authorization code (if successful)
        error: Error code sent by Strava or "missing_code" (if failed)
        error_description: Human-readable error description (if failed)
    """

    success: bool
    authorization_code: Optional[str] = None
    error: Optional[str] = None
    error_description: Optional[str] = None


class OAuthCallbackServer:
    """
    One-shot local HTTP listener for the OAuth redirect.

    The server:
    1. Binds to the redirect URI's host/port
    2. Serves the redirect path in a background thread
    3. Records the first callback (code or error) and signals the waiter
    4. Is stopped by its owner once the wait is over

    Requests to other paths (e.g. /favicon.ico) get a 404 and are ignored.
    """

    def __init__(self, redirect_uri: str):
        """
        Initialize callback server.

        Args:
            redirect_uri: Redirect URI registered with Strava

        Raises:
            InvalidConfigurationError: If the redirect URI is missing or not a
                plain http URL (the listener does not serve TLS)
        """
        if not redirect_uri or not redirect_uri.strip():
            raise InvalidConfigurationError("Redirect URI is not set")

        parts = urlsplit(redirect_uri)
        if parts.scheme != "http" or not parts.hostname:
            raise InvalidConfigurationError(
                f"Redirect URI must be an absolute http URL, got {redirect_uri!r}; "
                "the local callback server does not serve TLS"
            )

        self.redirect_uri = redirect_uri
        self.host = parts.hostname
        self.port = parts.port if parts.port is not None else 80
        self.path = parts.path or "/"

        self.app = Flask(__name__)
        self.app.logger.setLevel(logging.WARNING)  # Suppress Flask logs
        self.result: Optional[AuthorizationResult] = None
        self._received = threading.Event()
        self._lock = threading.Lock()
        self._server = None
        self._thread: Optional[threading.Thread] = None

        self.app.add_url_rule(
            self.path, "oauth_callback", self._handle_callback, methods=["GET"]
        )

    def _handle_callback(self) -> Response:
        """Handle the OAuth redirect from Strava."""
        with self._lock:
            if self._received.is_set():
                logger.debug("Ignoring repeated OAuth callback")
                return Response(SUCCESS_PAGE, status=200, content_type="text/html")

            logger.info("Received OAuth callback")
            code = request.args.get("code")
            error = request.args.get("error")

            if code:
                self.result = AuthorizationResult(success=True, authorization_code=code)
            else:
                self.result = AuthorizationResult(
                    success=False,
                    error=error or "missing_code",
                    error_description=request.args.get(
                        "error_description", "No authorization code received"
                    ),
                )
            self._received.set()

        if self.result.success:
            logger.info("Authorization code received")
            return Response(SUCCESS_PAGE, status=200, content_type="text/html")

        logger.error(f"OAuth callback without code: {self.result.error}")
        page = FAILURE_PAGE.format(
            error=html.escape(self.result.error),
            description=html.escape(self.result.error_description or ""),
        )
        return Response(page, status=400, content_type="text/html")

    @property
    def callback_url(self) -> str:
        """Local URL the server answers on (reflects the bound port once started)."""
        return f"http://{self.host}:{self.port}{self.path}"

    @property
    def running(self) -> bool:
        return self._server is not None

    def start(self) -> None:
        """
        Bind the listener and serve it from a daemon thread.

        Raises:
            OSError: If the port cannot be bound
        """
        self._server = make_server(self.host, self.port, self.app, threaded=False)
        # Port 0 binds an ephemeral port
        self.port = self._server.server_port

        self._thread = threading.Thread(
            target=self._server.serve_forever,
            name="strava-oauth-callback",
            daemon=True,
        )
        self._thread.start()
        logger.info(f"OAuth callback server listening on {self.host}:{self.port}")

    def wait_for_callback(
        self,
        timeout: float = 300,
        cancel_event: Optional[threading.Event] = None,
    ) -> AuthorizationResult:
        """
        Block until the callback arrives.

        Args:
            timeout: Maximum seconds to wait (default: 300 = 5 minutes)
            cancel_event: Event the caller sets to abandon the wait

        Returns:
            AuthorizationResult with the code or the error Strava sent

        Raises:
            AuthorizationTimeoutError: If nothing arrived within timeout
            AuthorizationCancelledError: If cancel_event was set
        """
        logger.info(f"Waiting for OAuth callback (timeout: {timeout}s)")
        deadline = time.monotonic() + timeout

        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                logger.warning(f"Timeout waiting for callback after {timeout}s")
                raise AuthorizationTimeoutError(
                    f"No callback received within {timeout} seconds. "
                    f"Please ensure you completed the authorization in your browser."
                )
            if self._received.wait(min(remaining, _POLL_INTERVAL)):
                return self.result
            if cancel_event is not None and cancel_event.is_set():
                logger.info("Waiting for OAuth callback cancelled")
                raise AuthorizationCancelledError("Authorization was cancelled")

    def stop(self) -> None:
        """Shut the listener down and release the port."""
        if self._server is None:
            return
        logger.info("OAuth callback server shutting down")
        self._server.shutdown()
        self._server.server_close()
        if self._thread is not None:
            self._thread.join(timeout=5)
        self._server = None
        self._thread = None
