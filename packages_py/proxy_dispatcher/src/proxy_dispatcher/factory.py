"""
Factory for creating proxy-configured HTTP clients.
"""
import logging
from typing import Any, Dict, Optional
from proxy_config import NetworkConfig, resolve_network_config
from .models import ClientOptions, DispatcherResult, FactoryConfig
from .adapters import get_adapter, BaseAdapter

logger = logging.getLogger(__name__)


class ProxyDispatcherFactory:
    """Factory for creating proxy-configured HTTP clients.

    Each call resolves a fresh NetworkConfig for the given service and target
    URL, so clients never share transports.
    """

    def __init__(
        self,
        config: Optional[FactoryConfig] = None,
        adapter: str = "httpx"
    ):
        self.config = config or FactoryConfig()
        self.adapter: BaseAdapter = get_adapter(adapter)
        logger.debug(f"ProxyDispatcherFactory initialized with adapter '{adapter}'")

    def resolve_network(
        self,
        service: str,
        target_url: str,
        verify_ssl: Optional[bool] = None,
    ) -> NetworkConfig:
        """Resolve the NetworkConfig for a service.

        Precedence for TLS verification: verify_ssl param > config.verify_ssl
        > <SVC>_SSL_VERIFY / SSL_VERIFY environment.
        """
        if verify_ssl is None:
            verify_ssl = self.config.verify_ssl
        return resolve_network_config(
            service,
            target_url,
            verify_ssl=verify_ssl,
            environ=self.config.environ,
        )

    def _client_options(
        self,
        target_url: str,
        timeout: Optional[float],
        headers: Optional[Dict[str, str]],
        use_base_url: bool,
    ) -> ClientOptions:
        return ClientOptions(
            timeout=self.config.timeout if timeout is None else timeout,
            follow_redirects=self.config.follow_redirects,
            headers=headers or {},
            base_url=target_url if use_base_url else None,
        )

    def get_proxy_dispatcher(
        self,
        service: str,
        target_url: str,
        verify_ssl: Optional[bool] = None,
        timeout: Optional[float] = None,
        headers: Optional[Dict[str, str]] = None,
        async_client: bool = True,
        use_base_url: bool = False,
    ) -> DispatcherResult:
        """Get a configured HTTP client for ``service`` talking to ``target_url``."""
        network = self.resolve_network(service, target_url, verify_ssl)
        options = self._client_options(target_url, timeout, headers, use_base_url)

        if async_client:
            if not self.adapter.supports_async():
                raise NotImplementedError(f"Adapter '{self.adapter.name}' does not support async")
            return self.adapter.create_async_client(network, options)

        if not self.adapter.supports_sync():
            raise NotImplementedError(f"Adapter '{self.adapter.name}' does not support sync")
        return self.adapter.create_sync_client(network, options)

    def get_client_kwargs(
        self,
        service: str,
        target_url: str,
        verify_ssl: Optional[bool] = None,
        timeout: Optional[float] = None,
        async_client: bool = True,
    ) -> Dict[str, Any]:
        """Get kwargs for constructing a client yourself (e.g. httpx.AsyncClient(**kwargs))."""
        network = self.resolve_network(service, target_url, verify_ssl)
        options = self._client_options(target_url, timeout, None, False)
        return self.adapter.get_client_kwargs(network, options, async_client=async_client)
