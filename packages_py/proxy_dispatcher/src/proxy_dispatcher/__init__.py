"""
Proxy dispatcher package.
"""
from .models import ClientOptions, FactoryConfig, DispatcherResult
from .factory import ProxyDispatcherFactory
from .dispatcher import (
    get_proxy_dispatcher,
    get_async_client,
    get_sync_client,
    get_client_kwargs,
    create_proxy_dispatcher_factory
)
from .adapters import register_adapter, get_adapter, BaseAdapter, HttpxAdapter

__all__ = [
    "ClientOptions",
    "FactoryConfig",
    "DispatcherResult",
    "ProxyDispatcherFactory",
    "get_proxy_dispatcher",
    "get_async_client",
    "get_sync_client",
    "get_client_kwargs",
    "create_proxy_dispatcher_factory",
    "register_adapter",
    "get_adapter",
    "BaseAdapter",
    "HttpxAdapter"
]
