"""
Per-service settings for the Jira and Confluence clients, read from the environment.
"""
import logging
import os
from typing import List, Mapping, Optional
from pydantic import BaseModel, ConfigDict, Field, SecretStr

from fetch_client import AuthConfig
from proxy_config import resolve_env_var_chain, service_prefix
from proxy_config.settings import parse_ssl_verify, ssl_verify_chain

from .errors import MissingConfigError, MissingCredentialError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

# Comma-separated key filters applied to searches
KEY_FILTER_ENV = {
    "jira": "JIRA_PROJECTS_FILTER",
    "confluence": "CONFLUENCE_SPACES_FILTER",
}


def _env_value(name: str, environ: Mapping[str, str]) -> Optional[str]:
    return resolve_env_var_chain([name], environ).value


def parse_key_filter(value: Optional[str]) -> List[str]:
    """Split a comma-separated filter, dropping empty entries."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


class ServiceSettings(BaseModel):
    """Connection settings for one Atlassian service ('jira' or 'confluence')."""
    model_config = ConfigDict(frozen=True)

    service: str
    url: str
    personal_token: Optional[SecretStr] = None
    username: Optional[str] = None
    api_token: Optional[SecretStr] = None
    ssl_verify: bool = True
    timeout: float = DEFAULT_TIMEOUT
    key_filter: List[str] = Field(default_factory=list)
    read_only: bool = False

    @property
    def auth_config(self) -> AuthConfig:
        """Personal access token (Server/Data Center) wins over username + API token (Cloud)."""
        if self.personal_token:
            return AuthConfig(type="bearer", raw_api_key=self.personal_token)
        return AuthConfig(type="basic", username=self.username, password=self.api_token)

    @classmethod
    def from_env(
        cls,
        service: str,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "ServiceSettings":
        """
        Read <SVC>_URL, credentials, <SVC>_SSL_VERIFY, <SVC>_TIMEOUT, the key
        filter and READ_ONLY_MODE.

        Raises:
            MissingConfigError: <SVC>_URL is not set.
            MissingCredentialError: neither a personal token nor username + API token is set.
        """
        env = os.environ if environ is None else environ
        prefix = service_prefix(service)

        # 1. Base URL
        url = _env_value(f"{prefix}URL", env)
        if not url:
            raise MissingConfigError(service, f"{prefix}URL")

        # 2. Credentials
        personal_token = _env_value(f"{prefix}PERSONAL_TOKEN", env)
        username = _env_value(f"{prefix}USERNAME", env)
        api_token = _env_value(f"{prefix}API_TOKEN", env)
        if not personal_token and not (username and api_token):
            raise MissingCredentialError(
                service,
                [f"{prefix}PERSONAL_TOKEN", f"{prefix}USERNAME", f"{prefix}API_TOKEN"],
            )

        # 3. Transport
        ssl_verify = parse_ssl_verify(resolve_env_var_chain(ssl_verify_chain(service), env).value)
        raw_timeout = _env_value(f"{prefix}TIMEOUT", env)
        timeout = DEFAULT_TIMEOUT
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                logger.warning(f"Ignoring invalid {prefix}TIMEOUT={raw_timeout!r}, using {DEFAULT_TIMEOUT}s")

        # 4. Behaviour
        filter_var = KEY_FILTER_ENV.get(service.lower())
        key_filter = parse_key_filter(_env_value(filter_var, env)) if filter_var else []
        read_only = (_env_value("READ_ONLY_MODE", env) or "").lower() == "true"

        logger.debug(
            f"[{service}] settings: url={url}, auth={'bearer' if personal_token else 'basic'}, "
            f"ssl_verify={ssl_verify}, timeout={timeout}, filter={key_filter}, read_only={read_only}"
        )

        return cls(
            service=service,
            url=url,
            personal_token=personal_token,
            username=username,
            api_token=api_token,
            ssl_verify=ssl_verify,
            timeout=timeout,
            key_filter=key_filter,
            read_only=read_only,
        )
