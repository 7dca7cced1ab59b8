"""
OAuth 2.0 setup for Atlassian Cloud.
"""

__version__ = "0.1.0"

from .errors import OAuthSetupError, OAuthStateMismatchError, OAuthTimeoutError
from .oauth import (
    OAuthConfig,
    OAuthTokens,
    exchange_code_for_tokens,
    format_env_summary,
    generate_auth_url,
    generate_oauth_state,
    get_accessible_resources,
    get_cloud_id,
    mask_secret,
)
from .callback_server import CallbackServer

__all__ = [
    "OAuthSetupError",
    "OAuthStateMismatchError",
    "OAuthTimeoutError",
    "OAuthConfig",
    "OAuthTokens",
    "exchange_code_for_tokens",
    "format_env_summary",
    "generate_auth_url",
    "generate_oauth_state",
    "get_accessible_resources",
    "get_cloud_id",
    "mask_secret",
    "CallbackServer",
]
