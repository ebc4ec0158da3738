"""
Exception classes for the Strava API binding.

This module defines the exception hierarchy shared by the OAuth flow and the
resource functions. Every error raised by this package derives from
StravaAPIError, so callers can catch the whole family at once.
"""

from typing import Optional


class StravaAPIError(Exception):
    """Base exception for all Strava API binding errors."""

    pass


class InvalidArgumentError(StravaAPIError, ValueError):
    """
    A required input is missing, blank or out of range.

    Always caller-fixable before retrying.

    Attributes:
        parameter: Name of the offending parameter
    """

    def __init__(self, parameter: str, message: str):
        super().__init__(f"{message} (parameter: {parameter})")
        self.parameter = parameter


class InvalidConfigurationError(StravaAPIError):
    """OAuth configuration is missing or invalid."""

    pass


class PreconditionFailedError(StravaAPIError):
    """
    Operation invoked while required prior state is missing.

    Typically a refresh without a refresh token. The authorization flow
    has to be run again.
    """

    pass


class StravaTimeoutError(StravaAPIError, TimeoutError):
    """A bounded wait elapsed."""

    pass


class AuthorizationTimeoutError(StravaTimeoutError):
    """No OAuth callback arrived within the configured bound."""

    pass


class RequestTimeoutError(StravaTimeoutError):
    """An HTTP request to Strava did not complete in time."""

    pass


class AuthorizationError(StravaAPIError):
    """OAuth authorization flow error."""

    pass


class MissingAuthorizationCodeError(AuthorizationError):
    """
    The OAuth callback arrived without a code parameter.

    Strava sends an error parameter instead of a code when the user
    denies consent.

    Attributes:
        error: Error code from the callback, if any
        error_description: Human-readable description, if any
    """

    def __init__(
        self,
        message: str,
        error: Optional[str] = None,
        error_description: Optional[str] = None,
    ):
        super().__init__(message)
        self.error = error
        self.error_description = error_description


class AuthorizationCancelledError(AuthorizationError):
    """Waiting for the OAuth callback was cancelled by the caller."""

    pass


class ConnectionFailedError(StravaAPIError):
    """The request never got a response (DNS, refused connection, TLS, ...)."""

    pass


class RemoteRequestError(StravaAPIError):
    """
    Strava responded with a non-2xx status.

    Attributes:
        status_code: HTTP status code of the response
        body: Raw response body, for diagnosis
    """

    def __init__(self, message: str, status_code: int, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class UnauthorizedError(RemoteRequestError):
    """
    Access token invalid or expired (401).

    Callers should refresh the token once and retry before surfacing it.
    """

    pass


class RateLimitError(RemoteRequestError):
    """Strava rate limit exceeded (429). Callers should back off."""

    pass


class EmptyResponseError(StravaAPIError):
    """Strava returned a success status with an empty body."""

    pass


class MalformedResponseError(StravaAPIError):
    """Strava returned a body that is not the expected JSON."""

    pass

