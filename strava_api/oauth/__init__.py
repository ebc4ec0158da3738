"""
OAuth 2.0 module for the Strava API binding.

This module provides the OAuth 2.0 authorization-code flow for Strava:
authorization URL construction, browser launch, local redirect capture,
code exchange and token refresh.

Public API:
    TokenStore: Application identity and current token pair
    TokenResponse: Parsed token endpoint answer
    AuthorizationFlow: Authorization-code grant state machine
    FlowState: States of an AuthorizationFlow
    OAuthCallbackServer: One-shot local redirect listener
    StravaOAuthConfig: OAuth configuration management
    OAuthCoordinator: High-level OAuth interface
"""

from .auth_server import AuthorizationResult, OAuthCallbackServer
from .config import StravaOAuthConfig
from .coordinator import OAuthCoordinator
from .flow import AuthorizationFlow, FlowState
from .token_store import TokenResponse, TokenStore

__all__ = [
    # Credentials
    "TokenStore",
    "TokenResponse",
    # Flow
    "AuthorizationFlow",
    "FlowState",
    # Authorization Server
    "OAuthCallbackServer",
    "AuthorizationResult",
    # Configuration
    "StravaOAuthConfig",
    # Coordinator
    "OAuthCoordinator",
]
