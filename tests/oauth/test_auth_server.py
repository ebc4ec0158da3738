"""Tests for OAuth callback server module."""

import threading

import pytest
import requests

from strava_api.exceptions import (
    AuthorizationCancelledError,
    AuthorizationTimeoutError,
    InvalidConfigurationError,
)
from strava_api.oauth.auth_server import AuthorizationResult, OAuthCallbackServer


class TestAuthorizationResult:
    """Tests for AuthorizationResult dataclass."""

    def test_authorization_result_success(self):
        """AuthorizationResult can represent success."""
        result = AuthorizationResult(success=True, authorization_code="code_123")

        assert result.success is True
        assert result.authorization_code == "code_123"
        assert result.error is None

    def test_authorization_result_failure(self):
        """AuthorizationResult can represent failure."""
        result = AuthorizationResult(
            success=False, error="access_denied", error_description="User denied access"
        )

        assert result.success is False
        assert result.authorization_code is None
        assert result.error == "access_denied"


class TestOAuthCallbackServer:
    """Tests for OAuthCallbackServer request handling."""

    @pytest.fixture
    def server(self):
        return OAuthCallbackServer("http://localhost:8080/callback")

    def test_server_initialization(self, server):
        """Host, port and path come from the redirect URI."""
        assert server.host == "localhost"
        assert server.port == 8080
        assert server.path == "/callback"
        assert server.result is None
        assert server.running is False
        assert server.callback_url == "http://localhost:8080/callback"

    @pytest.mark.parametrize("redirect_uri", [None, "", "   ", "localhost:8080", "ftp://host/cb"])
    def test_invalid_redirect_uri(self, redirect_uri):
        """Missing or non-http redirect URIs are rejected."""
        with pytest.raises(InvalidConfigurationError):
            OAuthCallbackServer(redirect_uri)

    def test_default_port(self):
        """Without a port, the http default is used."""
        assert OAuthCallbackServer("http://localhost/cb").port == 80

    @pytest.mark.parametrize(
        "redirect_uri", ["https://localhost/cb", "https://127.0.0.1:8443/callback"]
    )
    def test_https_redirect_rejected(self, redirect_uri):
        """The listener serves plain HTTP, so https redirects are refused up front."""
        with pytest.raises(InvalidConfigurationError, match="does not serve TLS"):
            OAuthCallbackServer(redirect_uri)

    def test_handle_callback_success(self, server):
        """A callback with a code records it and answers 200."""
        with server.app.test_request_context("/callback?code=auth_code_123&scope=read"):
            response = server._handle_callback()

        assert response.status_code == 200
        assert b"Authorization successful." in response.data
        assert server.result.success is True
        assert server.result.authorization_code == "auth_code_123"

    def test_handle_callback_denied(self, server):
        """A callback carrying an error answers 400 with the error."""
        with server.app.test_request_context(
            "/callback?error=access_denied&error_description=User+denied"
        ):
            response = server._handle_callback()

        assert response.status_code == 400
        assert b"access_denied" in response.data
        assert server.result.success is False
        assert server.result.error == "access_denied"
        assert server.result.error_description == "User denied"

    def test_handle_callback_without_code(self, server):
        """A callback without code or error is a missing_code failure."""
        with server.app.test_request_context("/callback"):
            response = server._handle_callback()

        assert response.status_code == 400
        assert server.result.error == "missing_code"

    def test_handle_callback_escapes_error(self, server):
        """Error text is HTML-escaped in the failure page."""
        with server.app.test_request_context("/callback?error=%3Cscript%3E"):
            response = server._handle_callback()

        assert b"<script>" not in response.data
        assert b"&lt;script&gt;" in response.data

    def test_only_first_callback_counts(self, server):
        """Repeated callbacks do not overwrite the first result."""
        with server.app.test_request_context("/callback?code=first"):
            server._handle_callback()
        with server.app.test_request_context("/callback?code=second"):
            server._handle_callback()

        assert server.result.authorization_code == "first"

    def test_other_paths_not_found(self, server):
        """Only the redirect path is served."""
        client = server.app.test_client()

        assert client.get("/favicon.ico").status_code == 404
        assert client.post("/callback?code=abc").status_code == 405
        assert server.result is None

    def test_wait_returns_received_result(self, server):
        """wait_for_callback() returns immediately once a callback was handled."""
        with server.app.test_request_context("/callback?code=abc"):
            server._handle_callback()

        result = server.wait_for_callback(timeout=1)

        assert result.authorization_code == "abc"

    def test_wait_times_out(self, server):
        """wait_for_callback() raises after the timeout."""
        with pytest.raises(AuthorizationTimeoutError, match="No callback received"):
            server.wait_for_callback(timeout=0.2)

    def test_wait_cancelled(self, server):
        """Setting the cancel event abandons the wait."""
        cancel = threading.Event()
        cancel.set()

        with pytest.raises(AuthorizationCancelledError):
            server.wait_for_callback(timeout=5, cancel_event=cancel)

    def test_stop_without_start(self, server):
        """stop() on a server that never started is a no-op."""
        server.stop()

        assert server.running is False


class TestOAuthCallbackServerLive:
    """Tests against a real listener on an ephemeral port."""

    def test_round_trip(self):
        """A browser-style GET on the redirect URI delivers the code."""
        server = OAuthCallbackServer("http://127.0.0.1:0/callback")
        server.start()
        try:
            assert server.running is True
            assert server.port != 0

            response = requests.get(
                f"{server.callback_url}?code=live_code&scope=read", timeout=5
            )
            result = server.wait_for_callback(timeout=5)
        finally:
            server.stop()

        assert response.status_code == 200
        assert "Authorization successful." in response.text
        assert result.success is True
        assert result.authorization_code == "live_code"
        assert server.running is False

    def test_stop_releases_port(self):
        """After stop() the port can be bound again."""
        first = OAuthCallbackServer("http://127.0.0.1:0/callback")
        first.start()
        port = first.port
        first.stop()

        second = OAuthCallbackServer(f"http://127.0.0.1:{port}/callback")
        second.start()
        try:
            assert second.port == port
        finally:
            second.stop()
