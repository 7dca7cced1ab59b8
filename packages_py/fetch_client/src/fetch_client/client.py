"""
High-level FetchClient implementation.
"""
from typing import Any, Dict, Optional

from .config import ClientConfig
from .core.base_client import BaseClient
from .core.request import RequestBuilder
from .types import FetchResponse, HttpMethod


class FetchClient(BaseClient):
    """
    High-level HTTP client with convenience methods.
    """

    @classmethod
    def create(cls, config: ClientConfig) -> "FetchClient":
        """Factory method to create a client."""
        return cls(config)

    async def _send(
        self,
        method: HttpMethod,
        url: str,
        data: Any = None,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None
    ) -> FetchResponse:
        opts = (
            RequestBuilder(url, method)
            .params(params)
            .headers(headers)
            .json(json)
            .data(data)
            .timeout(timeout)
        )
        return await self.request(opts.build())

    async def get(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None
    ) -> FetchResponse:
        """Execute GET request."""
        return await self._send("GET", url, params=params, headers=headers, timeout=timeout)

    async def post(
        self,
        url: str,
        data: Any = None,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None
    ) -> FetchResponse:
        """Execute POST request."""
        return await self._send("POST", url, data=data, json=json, params=params, headers=headers, timeout=timeout)

    async def put(
        self,
        url: str,
        data: Any = None,
        json: Any = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None
    ) -> FetchResponse:
        """Execute PUT request."""
        return await self._send("PUT", url, data=data, json=json, params=params, headers=headers, timeout=timeout)

    async def delete(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        timeout: Optional[float] = None
    ) -> FetchResponse:
        """Execute DELETE request."""
        return await self._send("DELETE", url, params=params, headers=headers, timeout=timeout)
