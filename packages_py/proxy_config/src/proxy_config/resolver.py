"""
Network configuration resolution.
"""
import logging
from typing import Mapping, Optional
from urllib.parse import urlsplit, urlunsplit
from .no_proxy import get_hostname, should_bypass_proxy
from .settings import read_proxy_env_settings
from .types import (
    AgentKind,
    NetworkConfig,
    ProxyAgent,
    ProxyEnvSettings,
    ProxyScheme,
    ProxySpec,
    ProxyStrategy,
)

logger = logging.getLogger(__name__)

# Accepted URL schemes per endpoint family, mapped to what httpx understands
SOCKS_URL_SCHEMES = {"socks": "socks5", "socks5": "socks5", "socks5h": "socks5h"}
HTTP_URL_SCHEMES = {"http": "http", "https": "https"}


def mask_proxy_url(url: Optional[str]) -> Optional[str]:
    """Replace the password of a proxy URL with '****'."""
    if not url:
        return url
    try:
        parsed = urlsplit(url)
        if not parsed.password:
            return url
        netloc = f"{parsed.username}:****@{parsed.netloc.rsplit('@', 1)[1]}"
        return urlunsplit(parsed._replace(netloc=netloc))
    except ValueError:
        return "<unparseable proxy url>"


def parse_proxy_endpoint(scheme: ProxyScheme, raw: Optional[str]) -> Optional[ProxySpec]:
    """Validate a proxy value read from the environment.

    Returns None for empty, unparseable or unsupported values so that no
    agent gets built for them.
    """
    if not raw or not raw.strip():
        return None

    allowed = SOCKS_URL_SCHEMES if scheme is ProxyScheme.SOCKS else HTTP_URL_SCHEMES
    value = raw.strip()
    if "://" not in value:
        default_scheme = "socks5" if scheme is ProxyScheme.SOCKS else "http"
        value = f"{default_scheme}://{value}"

    try:
        parsed = urlsplit(value)
        # Accessing .port validates it
        parsed.port
    except ValueError as e:
        logger.warning(f"Ignoring {scheme.value} proxy {mask_proxy_url(value)}: {e}")
        return None

    url_scheme = parsed.scheme.lower()
    if url_scheme not in allowed:
        logger.warning(
            f"Ignoring {scheme.value} proxy {mask_proxy_url(value)}: "
            f"unsupported scheme '{url_scheme}' (expected one of {sorted(allowed)})"
        )
        return None

    if not parsed.hostname or any(c.isspace() for c in parsed.hostname):
        logger.warning(f"Ignoring {scheme.value} proxy {mask_proxy_url(value)}: missing or invalid host")
        return None

    return ProxySpec(scheme=scheme, url=f"{allowed[url_scheme]}://{parsed.netloc}")


def _target_scheme(target_url: str) -> str:
    try:
        scheme = urlsplit(target_url).scheme.lower()
    except ValueError:
        scheme = ""
    return "http" if scheme == "http" else "https"


def _direct_agent(verify_ssl: bool) -> Optional[ProxyAgent]:
    if verify_ssl:
        return None
    return ProxyAgent(kind=AgentKind.DIRECT, verify_ssl=False)


def build_network_config(
    settings: ProxyEnvSettings,
    target_url: str,
    verify_ssl: Optional[bool] = None,
) -> NetworkConfig:
    """Select the outbound connection path for ``target_url``.

    Precedence:
    1. NO_PROXY match -> direct connection (TLS override still applies)
    2. SOCKS proxy -> one agent for both schemes
    3. HTTPS / HTTP proxies -> per-scheme agents, each falling back to the other
    4. Nothing configured -> defaults (TLS override still applies)

    ``verify_ssl`` overrides the environment's TLS setting when not None.
    """
    service = settings.service
    verify = settings.ssl_verify if verify_ssl is None else verify_ssl
    hostname = get_hostname(target_url) or ""
    tls_note = "" if verify else ", TLS verification disabled"

    # 1. Bypass
    if should_bypass_proxy(target_url, settings.no_proxy):
        logger.info(f"[{service}] {hostname} matches NO_PROXY, connecting directly{tls_note}")
        return NetworkConfig(
            strategy=ProxyStrategy.BYPASSED,
            https_agent=_direct_agent(verify),
            verify_ssl=verify,
            bypassed=True,
            target_host=hostname,
        )

    # 2. SOCKS wins over HTTP(S)
    socks = parse_proxy_endpoint(ProxyScheme.SOCKS, settings.socks_proxy)
    if socks:
        agent = ProxyAgent(kind=AgentKind.SOCKS, proxy_url=socks.url, verify_ssl=verify)
        logger.info(f"[{service}] Using SOCKS proxy {mask_proxy_url(socks.url)} for {hostname}{tls_note}")
        return NetworkConfig(
            strategy=ProxyStrategy.SOCKS,
            http_agent=agent,
            https_agent=agent,
            disable_native_proxy=True,
            verify_ssl=verify,
            target_host=hostname,
            proxy_url=socks.url,
        )

    # 3. HTTP(S) proxies
    https_spec = parse_proxy_endpoint(ProxyScheme.HTTPS, settings.https_proxy)
    http_spec = parse_proxy_endpoint(ProxyScheme.HTTP, settings.http_proxy)
    if https_spec or http_spec:
        for_https = https_spec or http_spec
        for_http = http_spec or https_spec
        active = for_http if _target_scheme(target_url) == "http" else for_https
        logger.info(
            f"[{service}] Using {active.scheme.value.upper()} proxy {mask_proxy_url(active.url)} "
            f"for {hostname}{tls_note}"
        )
        return NetworkConfig(
            strategy=ProxyStrategy.HTTP,
            http_agent=ProxyAgent(kind=AgentKind.HTTP_PROXY, proxy_url=for_http.url, verify_ssl=verify),
            https_agent=ProxyAgent(kind=AgentKind.HTTPS_PROXY, proxy_url=for_https.url, verify_ssl=verify),
            disable_native_proxy=True,
            verify_ssl=verify,
            target_host=hostname,
            proxy_url=active.url,
        )

    # 4. No proxy
    if verify:
        logger.info(f"[{service}] No proxy configured for {hostname}, using default connection")
    else:
        logger.info(f"[{service}] No proxy configured for {hostname}{tls_note}")
    return NetworkConfig(
        strategy=ProxyStrategy.DEFAULT,
        https_agent=_direct_agent(verify),
        verify_ssl=verify,
        target_host=hostname,
    )


def resolve_network_config(
    service: str,
    target_url: str,
    verify_ssl: Optional[bool] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> NetworkConfig:
    """Resolve the network configuration for a service client.

    Reads the environment once (service-scoped > global upper-case >
    global lower-case > ecosystem fallback) and selects the connection path
    for ``target_url``. Never raises for misconfiguration.
    """
    logger.debug(f"Resolving network config for service '{service}', target {target_url}")
    settings = read_proxy_env_settings(service, environ)
    return build_network_config(settings, target_url, verify_ssl=verify_ssl)
