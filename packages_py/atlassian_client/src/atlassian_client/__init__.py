"""
Jira and Confluence REST clients behind the proxy-aware fetch client.
"""

__version__ = "0.1.0"

from .errors import (
    AtlassianApiError,
    AtlassianClientError,
    InvalidKeyError,
    MissingConfigError,
    MissingCredentialError,
    ReadOnlyModeError,
)
from .config import ServiceSettings
from .logger import configure_logging
from .base import AtlassianClient, sanitize_error, validate_key
from .jira import JiraClient
from .confluence import ConfluenceClient

__all__ = [
    "AtlassianApiError",
    "AtlassianClientError",
    "InvalidKeyError",
    "MissingConfigError",
    "MissingCredentialError",
    "ReadOnlyModeError",
    "ServiceSettings",
    "configure_logging",
    "AtlassianClient",
    "sanitize_error",
    "validate_key",
    "JiraClient",
    "ConfluenceClient",
]
