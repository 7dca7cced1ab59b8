"""
Auth handler utilities for fetch_client.
"""
import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional

from ..types import RequestContext
from ..config import AuthConfig

logger = logging.getLogger(__name__)


def _mask_value(val: Optional[str]) -> str:
    """Mask sensitive value for logging, showing first 6 chars."""
    if not val:
        return "<empty>"
    if len(val) <= 6:
        return "*" * len(val)
    return val[:6] + "*" * (len(val) - 6)


class AuthHandler(ABC):
    """Auth handler interface."""

    @abstractmethod
    def get_header(self, context: RequestContext) -> Optional[Dict[str, str]]:
        """Get auth header for request."""
        ...


class BearerAuthHandler(AuthHandler):
    """Bearer token auth handler."""

    def __init__(self, api_key: Optional[str] = None):
        self._api_key = api_key

    def get_header(self, context: RequestContext) -> Optional[Dict[str, str]]:
        if not self._api_key:
            return None
        return {"Authorization": f"Bearer {self._api_key}"}


class CustomAuthHandler(AuthHandler):
    """Custom header auth handler."""

    def __init__(self, header_name: str, api_key: Optional[str] = None):
        self._header_name = header_name
        self._api_key = api_key

    def get_header(self, context: RequestContext) -> Optional[Dict[str, str]]:
        if not self._api_key:
            return None
        return {self._header_name: self._api_key}


def create_auth_handler(config: AuthConfig) -> AuthHandler:
    """Create auth handler from config."""
    computed_key = config.api_key
    logger.debug(
        f"create_auth_handler: type={config.type}, key={_mask_value(computed_key)}, "
        f"username={config.username or config.email or '<none>'}"
    )

    t = config.type

    # Basic family: header value is pre-computed base64 credentials
    if t in ("basic", "basic_email_token"):
        return CustomAuthHandler(header_name="Authorization", api_key="Basic " + computed_key)

    if t == "bearer":
        return BearerAuthHandler(computed_key)

    if t == "custom":
        return CustomAuthHandler(config.header_name or "Authorization", computed_key)

    raise ValueError(f"Unsupported auth type '{t}'")
