"""OAuth 2.0 (3LO) authorization-code flow for Atlassian Cloud.

Builds the consent URL, exchanges the returned code for tokens and looks up
the cloud id of the authorized site. Outbound calls go through the proxy
dispatcher under the service name 'atlassian', so ATLASSIAN_HTTPS_PROXY,
ATLASSIAN_NO_PROXY and ATLASSIAN_SSL_VERIFY apply.
"""
import logging
import secrets
import urllib.parse
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

import httpx
from pydantic import BaseModel, SecretStr

from proxy_dispatcher import FactoryConfig, ProxyDispatcherFactory

from .errors import OAuthSetupError

logger = logging.getLogger(__name__)

AUTHORIZE_URL = "https://auth.atlassian.com/authorize"
TOKEN_URL = "https://auth.atlassian.com/oauth/token"
ACCESSIBLE_RESOURCES_URL = "https://api.atlassian.com/oauth/token/accessible-resources"
OAUTH_SERVICE = "atlassian"

DEFAULT_REDIRECT_URI = "http://localhost:8080/callback"
DEFAULT_SCOPE = (
    "read:jira-work write:jira-work read:confluence-content.all "
    "write:confluence-content offline_access"
)


class OAuthConfig(BaseModel):
    """OAuth app registration details collected by the setup wizard."""
    client_id: str
    client_secret: SecretStr
    redirect_uri: str = DEFAULT_REDIRECT_URI
    scope: str = DEFAULT_SCOPE
    cloud_id: Optional[str] = None


@dataclass
class OAuthTokens:
    """Token endpoint response."""
    access_token: str
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = None
    scope: Optional[str] = None
    token_type: str = "Bearer"
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "OAuthTokens":
        if not data.get("access_token"):
            raise OAuthSetupError("Token response did not contain an access_token")
        return cls(
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token"),
            expires_in=data.get("expires_in"),
            scope=data.get("scope"),
            token_type=data.get("token_type") or "Bearer",
            raw=data,
        )


def generate_oauth_state() -> str:
    """Random CSRF state: 32 bytes as 64 hex characters."""
    return secrets.token_hex(32)


def generate_auth_url(config: OAuthConfig, state: str) -> str:
    params = {
        "audience": "api.atlassian.com",
        "client_id": config.client_id,
        "scope": config.scope,
        "redirect_uri": config.redirect_uri,
        "state": state,
        "response_type": "code",
        "prompt": "consent",
    }
    return f"{AUTHORIZE_URL}?{urllib.parse.urlencode(params)}"


def mask_secret(value: Optional[str]) -> str:
    """Keep only the last 4 characters."""
    if not value or len(value) <= 4:
        return "****"
    return "****" + value[-4:]


def _error_message(response: httpx.Response, *keys: str) -> str:
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        for key in keys:
            if data.get(key):
                return str(data[key])
    return f"HTTP {response.status_code} {response.reason_phrase}"


def _oauth_client(url: str, environ: Optional[Mapping[str, str]]) -> httpx.AsyncClient:
    factory = ProxyDispatcherFactory(config=FactoryConfig(environ=environ))
    return factory.get_proxy_dispatcher(OAUTH_SERVICE, url, async_client=True).client


async def exchange_code_for_tokens(
    config: OAuthConfig,
    code: str,
    environ: Optional[Mapping[str, str]] = None,
) -> OAuthTokens:
    """Trade the authorization code for access/refresh tokens."""
    payload = {
        "grant_type": "authorization_code",
        "client_id": config.client_id,
        "client_secret": config.client_secret.get_secret_value(),
        "code": code,
        "redirect_uri": config.redirect_uri,
    }

    async with _oauth_client(TOKEN_URL, environ) as client:
        try:
            response = await client.post(TOKEN_URL, json=payload)
        except httpx.HTTPError as e:
            raise OAuthSetupError(f"Failed to exchange code for tokens: {type(e).__name__}: {e}") from e

    if not response.is_success:
        detail = _error_message(response, "error_description", "error")
        raise OAuthSetupError(f"Failed to exchange code for tokens: {detail}")

    tokens = OAuthTokens.from_dict(response.json())
    logger.debug(f"Received access token {mask_secret(tokens.access_token)} (expires_in={tokens.expires_in})")
    return tokens


async def get_accessible_resources(
    access_token: str,
    environ: Optional[Mapping[str, str]] = None,
) -> List[Dict[str, Any]]:
    headers = {"Authorization": f"Bearer {access_token}", "Accept": "application/json"}

    async with _oauth_client(ACCESSIBLE_RESOURCES_URL, environ) as client:
        try:
            response = await client.get(ACCESSIBLE_RESOURCES_URL, headers=headers)
        except httpx.HTTPError as e:
            raise OAuthSetupError(f"Failed to get Cloud ID: {type(e).__name__}: {e}") from e

    if not response.is_success:
        raise OAuthSetupError(f"Failed to get Cloud ID: {_error_message(response, 'message')}")
    return response.json()


async def get_cloud_id(access_token: str, environ: Optional[Mapping[str, str]] = None) -> str:
    """Cloud id of the first site the token can access."""
    resources = await get_accessible_resources(access_token, environ)
    if not resources:
        raise OAuthSetupError("Failed to get Cloud ID: No accessible Atlassian resources found")

    first = resources[0]
    if len(resources) == 1:
        logger.info(f"Auto-detected Cloud ID: {first['id']} ({first.get('name')})")
        return first["id"]

    logger.info("Multiple Atlassian resources found:")
    for index, resource in enumerate(resources, start=1):
        logger.info(f"{index}. {resource.get('name')} ({resource.get('id')})")
    logger.info(f"Using first resource: {first.get('name')} ({first['id']})")
    return first["id"]


def format_env_summary(config: OAuthConfig, tokens: OAuthTokens) -> List[str]:
    """.env lines for the configured app; secrets and tokens are masked."""
    lines = [
        "# OAuth 2.0 Configuration",
        f"ATLASSIAN_OAUTH_CLIENT_ID={config.client_id}",
        f"ATLASSIAN_OAUTH_CLIENT_SECRET={mask_secret(config.client_secret.get_secret_value())}",
        f"ATLASSIAN_OAUTH_REDIRECT_URI={config.redirect_uri}",
        f"ATLASSIAN_OAUTH_SCOPE={config.scope}",
    ]
    if config.cloud_id:
        lines.append(f"ATLASSIAN_OAUTH_CLOUD_ID={config.cloud_id}")
    lines.append(f"ATLASSIAN_OAUTH_ACCESS_TOKEN={mask_secret(tokens.access_token)}")
    if tokens.refresh_token:
        lines.append(f"ATLASSIAN_OAUTH_REFRESH_TOKEN={mask_secret(tokens.refresh_token)}")

    if config.cloud_id:
        lines.extend([
            "",
            "# Atlassian URLs",
            f"JIRA_URL=https://api.atlassian.com/ex/jira/{config.cloud_id}",
            f"CONFLUENCE_URL=https://api.atlassian.com/ex/confluence/{config.cloud_id}/wiki",
        ])
    return lines
