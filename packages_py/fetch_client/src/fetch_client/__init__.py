"""
Fetch Client - async HTTP client over httpx
"""

__version__ = "0.1.0"

from .config import ClientConfig, AuthConfig, TimeoutConfig
from .types import AuthType, FetchResponse, RequestOptions
from .client import FetchClient
from .core.request import RequestBuilder
from .auth.auth_handler import AuthHandler, create_auth_handler
from .factory import create_client_with_dispatcher

__all__ = [
    "ClientConfig", "AuthConfig", "TimeoutConfig",
    "AuthType", "FetchResponse", "RequestOptions",
    "FetchClient",
    "RequestBuilder",
    "AuthHandler", "create_auth_handler",
    "create_client_with_dispatcher",
]
