"""
Build FetchClients wired to the proxy dispatcher.
"""
import logging
from typing import Dict, Mapping, Optional

from proxy_dispatcher import FactoryConfig, ProxyDispatcherFactory

from .client import FetchClient
from .config import AuthConfig, ClientConfig

logger = logging.getLogger(__name__)


def create_client_with_dispatcher(
    service: str,
    base_url: str,
    auth: Optional[AuthConfig] = None,
    default_headers: Optional[Dict[str, str]] = None,
    verify_ssl: Optional[bool] = None,
    timeout: float = 30.0,
    environ: Optional[Mapping[str, str]] = None,
) -> FetchClient:
    """Create a FetchClient whose transports follow the service's proxy settings.

    The network configuration is resolved once, here; the returned client
    owns the resulting transports and closes them on ``close()``.
    """
    factory = ProxyDispatcherFactory(config=FactoryConfig(timeout=timeout, environ=environ))
    client_kwargs = factory.get_client_kwargs(service, base_url, verify_ssl=verify_ssl, async_client=True)
    client_kwargs.pop("timeout", None)

    config = ClientConfig(
        base_url=base_url,
        auth=auth,
        timeout=timeout,
        headers=default_headers or {},
        client_kwargs=client_kwargs,
    )
    logger.debug(f"Creating FetchClient for service '{service}' at {config.base_url}")
    return FetchClient.create(config)
