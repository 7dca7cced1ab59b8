"""
Data models for proxy dispatcher.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional
from proxy_config import NetworkConfig

DEFAULT_TIMEOUT = 30.0


@dataclass
class ClientOptions:
    """Per-client settings passed to an adapter alongside the NetworkConfig."""
    timeout: float = DEFAULT_TIMEOUT
    follow_redirects: bool = True
    headers: Dict[str, str] = field(default_factory=dict)
    base_url: Optional[str] = None


@dataclass
class FactoryConfig:
    """Configuration for ProxyDispatcherFactory."""
    timeout: float = DEFAULT_TIMEOUT
    follow_redirects: bool = True
    # Explicit TLS verification, None defers to <SVC>_SSL_VERIFY / SSL_VERIFY
    verify_ssl: Optional[bool] = None
    # Environment to resolve from, None reads os.environ
    environ: Optional[Mapping[str, str]] = None


@dataclass
class DispatcherResult:
    """Result wrapper with client, resolved network config, and client kwargs."""
    client: Any  # Union[httpx.Client, httpx.AsyncClient]
    network: NetworkConfig
    client_kwargs: Dict[str, Any]
