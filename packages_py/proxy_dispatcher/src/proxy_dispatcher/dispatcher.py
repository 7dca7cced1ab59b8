"""
Convenience functions for proxy dispatcher.
"""
from typing import Any, Dict, Optional
import httpx
from .factory import ProxyDispatcherFactory
from .models import FactoryConfig, DispatcherResult

# Global default factory, reads os.environ on every call
_default_factory = ProxyDispatcherFactory()


def get_proxy_dispatcher(
    service: str,
    target_url: str,
    verify_ssl: Optional[bool] = None,
    timeout: Optional[float] = None,
    async_client: bool = True
) -> DispatcherResult:
    """Get a configured HTTP client using the default factory."""
    return _default_factory.get_proxy_dispatcher(
        service,
        target_url,
        verify_ssl=verify_ssl,
        timeout=timeout,
        async_client=async_client
    )


def get_async_client(
    service: str,
    target_url: str,
    verify_ssl: Optional[bool] = None,
    timeout: Optional[float] = None
) -> httpx.AsyncClient:
    """Get a configured async httpx client."""
    result = get_proxy_dispatcher(service, target_url, verify_ssl=verify_ssl, timeout=timeout, async_client=True)
    return result.client


def get_sync_client(
    service: str,
    target_url: str,
    verify_ssl: Optional[bool] = None,
    timeout: Optional[float] = None
) -> httpx.Client:
    """Get a configured sync httpx client."""
    result = get_proxy_dispatcher(service, target_url, verify_ssl=verify_ssl, timeout=timeout, async_client=False)
    return result.client


def get_client_kwargs(
    service: str,
    target_url: str,
    verify_ssl: Optional[bool] = None,
    timeout: Optional[float] = None,
    async_client: bool = True
) -> Dict[str, Any]:
    """Get kwargs for constructing an httpx client directly."""
    return _default_factory.get_client_kwargs(
        service,
        target_url,
        verify_ssl=verify_ssl,
        timeout=timeout,
        async_client=async_client
    )


def create_proxy_dispatcher_factory(
    config: Optional[FactoryConfig] = None,
    adapter: str = "httpx"
) -> ProxyDispatcherFactory:
    """Create a new ProxyDispatcherFactory instance."""
    return ProxyDispatcherFactory(config=config, adapter=adapter)
