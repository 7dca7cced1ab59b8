"""
Proxy configuration and resolution package.
"""
from .types import (
    AgentKind,
    NetworkConfig,
    ProxyAgent,
    ProxyEnvSettings,
    ProxyScheme,
    ProxySpec,
    ProxyStrategy,
)
from .env_chain import EnvVarResolveResult, resolve_env_var_chain, service_env_chain, service_prefix
from .no_proxy import should_bypass_proxy
from .settings import read_proxy_env_settings
from .resolver import (
    build_network_config,
    mask_proxy_url,
    parse_proxy_endpoint,
    resolve_network_config,
)

__all__ = [
    "AgentKind",
    "NetworkConfig",
    "ProxyAgent",
    "ProxyEnvSettings",
    "ProxyScheme",
    "ProxySpec",
    "ProxyStrategy",
    "EnvVarResolveResult",
    "resolve_env_var_chain",
    "service_env_chain",
    "service_prefix",
    "should_bypass_proxy",
    "read_proxy_env_settings",
    "build_network_config",
    "mask_proxy_url",
    "parse_proxy_endpoint",
    "resolve_network_config",
]
