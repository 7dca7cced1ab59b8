"""
Abstract base adapter for HTTP libraries.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict
from proxy_config import NetworkConfig
from ..models import ClientOptions, DispatcherResult


class BaseAdapter(ABC):
    """Abstract interface for HTTP library adapters."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of the adapter (e.g., 'httpx')."""
        pass

    @abstractmethod
    def supports_sync(self) -> bool:
        """Whether the adapter supports synchronous clients."""
        pass

    @abstractmethod
    def supports_async(self) -> bool:
        """Whether the adapter supports asynchronous clients."""
        pass

    @abstractmethod
    def create_sync_client(self, network: NetworkConfig, options: ClientOptions) -> DispatcherResult:
        """Create a configured synchronous client."""
        pass

    @abstractmethod
    def create_async_client(self, network: NetworkConfig, options: ClientOptions) -> DispatcherResult:
        """Create a configured asynchronous client."""
        pass

    @abstractmethod
    def get_client_kwargs(
        self,
        network: NetworkConfig,
        options: ClientOptions,
        async_client: bool = True,
    ) -> Dict[str, Any]:
        """Get constructor kwargs for the library's client."""
        pass
