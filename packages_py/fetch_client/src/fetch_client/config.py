"""
Configuration models and validation for fetch-client.
"""
import base64
from typing import Any, Dict, Optional, Union
from pydantic import BaseModel, Field, SecretStr, field_validator, model_validator
from dataclasses import dataclass

from .types import AuthType

# Constants
DEFAULT_TIMEOUT_CONNECT = 5.0
DEFAULT_TIMEOUT_READ = 30.0
DEFAULT_TIMEOUT_WRITE = 10.0


class TimeoutConfig(BaseModel):
    """Timeout configuration."""
    connect: float = DEFAULT_TIMEOUT_CONNECT
    read: float = DEFAULT_TIMEOUT_READ
    write: float = DEFAULT_TIMEOUT_WRITE
    pool: Optional[float] = None


class AuthConfig(BaseModel):
    """Authentication configuration."""
    type: AuthType
    raw_api_key: Optional[SecretStr] = None
    username: Optional[str] = None
    password: Optional[SecretStr] = None
    email: Optional[str] = None
    header_name: Optional[str] = None

    @property
    def api_key(self) -> str:
        """
        Get the computed API key ready for the header.
        - For basic types: Returns the base64 encoded credentials
        - For bearer/custom: Returns the raw key
        """
        t = self.type

        def b64(s: str) -> str:
            return base64.b64encode(s.encode()).decode()

        if t == "basic" and self.username and self.password:
            return b64(f"{self.username}:{self.password.get_secret_value()}")

        if t == "basic_email_token" and self.email and self.raw_api_key:
            return b64(f"{self.email}:{self.raw_api_key.get_secret_value()}")

        if self.raw_api_key:
            return self.raw_api_key.get_secret_value()

        return ""

    @model_validator(mode='after')
    def validate_auth_config(self) -> 'AuthConfig':
        """Validate that required fields are present for the selected auth type."""
        t = self.type
        has_key = bool(self.raw_api_key)

        if t == "basic" and not (self.username and self.password):
            raise ValueError("Basic auth requires 'username' and 'password'")

        if t == "basic_email_token" and not (self.email and has_key):
            raise ValueError("basic_email_token requires 'email' and 'raw_api_key'")

        if t == "bearer" and not has_key:
            raise ValueError("bearer requires 'raw_api_key'")

        if t == "custom" and not (self.header_name and has_key):
            raise ValueError("custom requires 'header_name' and 'raw_api_key'")

        return self


class ClientConfig(BaseModel):
    """Client configuration."""
    model_config = {"arbitrary_types_allowed": True}

    base_url: str
    auth: Optional[AuthConfig] = None
    timeout: Optional[Union[float, TimeoutConfig]] = None
    headers: Dict[str, str] = Field(default_factory=dict)

    # Extra httpx.AsyncClient kwargs (mounts, verify, trust_env) from proxy_dispatcher
    client_kwargs: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("base_url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v.rstrip("/")


def normalize_timeout(timeout: Optional[Union[float, TimeoutConfig]]) -> TimeoutConfig:
    """Normalize timeout to TimeoutConfig object."""
    if timeout is None:
        return TimeoutConfig()
    if isinstance(timeout, (int, float)):
        return TimeoutConfig(connect=float(timeout), read=float(timeout), write=float(timeout))
    return timeout


@dataclass
class ResolvedConfig:
    """Fully resolved configuration ready for usage."""
    base_url: str
    auth: Optional[AuthConfig]
    timeout: TimeoutConfig
    headers: Dict[str, str]
    client_kwargs: Dict[str, Any]


def resolve_config(config: ClientConfig) -> ResolvedConfig:
    """Apply defaults and return resolved config."""
    return ResolvedConfig(
        base_url=config.base_url,
        auth=config.auth,
        timeout=normalize_timeout(config.timeout),
        headers=config.headers,
        client_kwargs=config.client_kwargs,
    )
