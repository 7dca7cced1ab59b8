"""
Adapter for httpx library.
"""
import logging
import httpx
from typing import Any, Dict, Union
from proxy_config import NetworkConfig, ProxyAgent, mask_proxy_url
from .base import BaseAdapter
from ..models import ClientOptions, DispatcherResult

logger = logging.getLogger(__name__)

Transport = Union[httpx.HTTPTransport, httpx.AsyncHTTPTransport]


class HttpxAdapter(BaseAdapter):
    """Adapter for httpx library.

    Proxy agents become transports mounted per URL scheme. The SOCKS agent
    is shared by both schemes, so it is built once and mounted twice.
    """

    @property
    def name(self) -> str:
        return "httpx"

    def supports_sync(self) -> bool:
        return True

    def supports_async(self) -> bool:
        return True

    def build_transport(self, agent: ProxyAgent, async_client: bool = True) -> Transport:
        """Build the httpx transport for one agent."""
        transport_cls = httpx.AsyncHTTPTransport if async_client else httpx.HTTPTransport
        if agent.proxy_url:
            return transport_cls(proxy=agent.proxy_url, verify=agent.verify_ssl)
        return transport_cls(verify=agent.verify_ssl)

    def build_mounts(self, network: NetworkConfig, async_client: bool = True) -> Dict[str, Transport]:
        """Map 'http://' / 'https://' to transports for the populated agents."""
        built: Dict[int, Transport] = {}
        mounts: Dict[str, Transport] = {}

        for pattern, agent in (("http://", network.http_agent), ("https://", network.https_agent)):
            if agent is None:
                continue
            if id(agent) not in built:
                built[id(agent)] = self.build_transport(agent, async_client)
            mounts[pattern] = built[id(agent)]
            logger.debug(
                f"Mounted {agent.kind.value} transport for {pattern} "
                f"(proxy={mask_proxy_url(agent.proxy_url)}, verify={agent.verify_ssl})"
            )

        return mounts

    def get_client_kwargs(
        self,
        network: NetworkConfig,
        options: ClientOptions,
        async_client: bool = True,
    ) -> Dict[str, Any]:
        """Build kwargs for httpx client."""
        kwargs: Dict[str, Any] = {
            "timeout": options.timeout,
            "verify": network.verify_ssl,
            "follow_redirects": options.follow_redirects,
            # Proxies come only from the resolved NetworkConfig, never from
            # httpx reading HTTP_PROXY/NO_PROXY itself.
            "trust_env": False,
        }

        if options.base_url:
            kwargs["base_url"] = options.base_url

        if options.headers:
            kwargs["headers"] = dict(options.headers)

        mounts = self.build_mounts(network, async_client)
        if mounts:
            kwargs["mounts"] = mounts

        return kwargs

    def create_sync_client(self, network: NetworkConfig, options: ClientOptions) -> DispatcherResult:
        """Create httpx.Client."""
        kwargs = self.get_client_kwargs(network, options, async_client=False)
        logger.debug(f"Creating httpx.Client (strategy={network.strategy.value}, mounts={list(kwargs.get('mounts', {}))})")

        client = httpx.Client(**kwargs)

        return DispatcherResult(
            client=client,
            network=network,
            client_kwargs=kwargs
        )

    def create_async_client(self, network: NetworkConfig, options: ClientOptions) -> DispatcherResult:
        """Create httpx.AsyncClient."""
        kwargs = self.get_client_kwargs(network, options, async_client=True)
        logger.debug(f"Creating httpx.AsyncClient (strategy={network.strategy.value}, mounts={list(kwargs.get('mounts', {}))})")

        client = httpx.AsyncClient(**kwargs)

        return DispatcherResult(
            client=client,
            network=network,
            client_kwargs=kwargs
        )
