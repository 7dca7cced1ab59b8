"""
Data models for proxy configuration.
"""
from enum import Enum
from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict, Field


class ProxyScheme(str, Enum):
    """Proxy endpoint families read from the environment."""
    HTTP = "http"
    HTTPS = "https"
    SOCKS = "socks"


class ProxyStrategy(str, Enum):
    """Outbound connection path chosen by the resolver."""
    DEFAULT = "default"
    BYPASSED = "bypassed"
    SOCKS = "socks"
    HTTP = "http"


class AgentKind(str, Enum):
    SOCKS = "socks"
    HTTP_PROXY = "http_proxy"
    HTTPS_PROXY = "https_proxy"
    DIRECT = "direct"


class ProxySpec(BaseModel):
    """A validated proxy endpoint."""
    model_config = ConfigDict(frozen=True)

    scheme: ProxyScheme = Field(description="Endpoint family the value was read for")
    url: str = Field(description="Normalised proxy URL, e.g. socks5://proxy:1080")


class ProxyAgent(BaseModel):
    """Description of one connection agent.

    HTTP library adapters turn this into a concrete transport. A ``direct``
    agent has no proxy URL and only carries a TLS override.
    """
    model_config = ConfigDict(frozen=True)

    kind: AgentKind
    proxy_url: Optional[str] = Field(default=None, description="Proxy endpoint, None for direct agents")
    verify_ssl: bool = Field(default=True, description="Verify the target's TLS certificate")


class ProxyEnvSettings(BaseModel):
    """Snapshot of the proxy-related environment for one service.

    ``sources`` maps each setting name to the environment variable it was
    read from, so the precedence decision can be audited after the fact.
    """
    model_config = ConfigDict(frozen=True)

    service: str
    ssl_verify: bool = True
    socks_proxy: Optional[str] = None
    https_proxy: Optional[str] = None
    http_proxy: Optional[str] = None
    no_proxy: Optional[str] = None
    sources: Dict[str, Optional[str]] = Field(default_factory=dict)


class NetworkConfig(BaseModel):
    """Resolved outbound connection configuration for one client.

    Only one of {socks agent, http/https proxy agents, nothing} is ever
    populated. For SOCKS the same agent serves both schemes.
    """
    model_config = ConfigDict(frozen=True)

    strategy: ProxyStrategy = ProxyStrategy.DEFAULT
    http_agent: Optional[ProxyAgent] = None
    https_agent: Optional[ProxyAgent] = None
    disable_native_proxy: bool = Field(default=False, description="Explicit proxy agents are installed")
    verify_ssl: bool = True
    bypassed: bool = False
    target_host: Optional[str] = None
    proxy_url: Optional[str] = Field(default=None, description="Proxy used for the target's scheme")

    @property
    def is_empty(self) -> bool:
        """True when the default connection behaviour applies unchanged."""
        return self.http_agent is None and self.https_agent is None

    @property
    def uses_proxy(self) -> bool:
        return self.strategy in (ProxyStrategy.SOCKS, ProxyStrategy.HTTP)
