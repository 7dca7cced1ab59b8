"""
Snapshot of the proxy-related environment for a service.
"""
import logging
from typing import Mapping, Optional
from .env_chain import (
    ECOSYSTEM_PROXY_FALLBACKS,
    resolve_env_var_chain,
    service_prefix,
)
from .types import ProxyEnvSettings

logger = logging.getLogger(__name__)


def ssl_verify_chain(service: str) -> list:
    return [f"{service_prefix(service)}SSL_VERIFY", "SSL_VERIFY"]


def proxy_env_chains(service: str) -> dict:
    """Candidate env var names per setting, highest precedence first."""
    prefix = service_prefix(service)
    return {
        "socks_proxy": [f"{prefix}SOCKS_PROXY", "SOCKS_PROXY", "socks_proxy"],
        "https_proxy": [f"{prefix}HTTPS_PROXY", "HTTPS_PROXY", "https_proxy", *ECOSYSTEM_PROXY_FALLBACKS],
        "http_proxy": [f"{prefix}HTTP_PROXY", "HTTP_PROXY", "http_proxy", *ECOSYSTEM_PROXY_FALLBACKS],
        "no_proxy": [f"{prefix}NO_PROXY", "NO_PROXY", "no_proxy"],
    }


def parse_ssl_verify(value: Optional[str]) -> bool:
    """Only an explicit 'false' disables verification."""
    if value is None:
        return True
    return value.strip().lower() != "false"


def read_proxy_env_settings(
    service: str,
    environ: Optional[Mapping[str, str]] = None,
) -> ProxyEnvSettings:
    """Read every proxy setting for ``service`` in one pass."""
    sources = {}
    values = {}

    ssl_result = resolve_env_var_chain(ssl_verify_chain(service), environ)
    sources["ssl_verify"] = ssl_result.source

    for name, chain in proxy_env_chains(service).items():
        result = resolve_env_var_chain(chain, environ)
        values[name] = result.value
        sources[name] = result.source
        logger.debug(f"[{service}] {name}: source={result.source}, tried={result.tried}")

    return ProxyEnvSettings(
        service=service,
        ssl_verify=parse_ssl_verify(ssl_result.value),
        sources=sources,
        **values,
    )
