"""
Request builder helper.
"""
from typing import Any, Dict, Optional
from ..types import HttpMethod, RequestOptions


class RequestBuilder:
    """Fluent builder for RequestOptions.

    Query parameters whose value is None are dropped, so optional API
    arguments can be passed straight through.
    """

    def __init__(self, url: str = "", method: HttpMethod = "GET"):
        self._options: RequestOptions = {
            "url": url,
            "method": method,
            "headers": {},
            "params": {}
        }

    def header(self, key: str, value: str) -> "RequestBuilder":
        self._options["headers"][key] = value
        return self

    def headers(self, headers: Optional[Dict[str, str]]) -> "RequestBuilder":
        self._options["headers"].update(headers or {})
        return self

    def param(self, key: str, value: Any) -> "RequestBuilder":
        if value is not None:
            self._options["params"][key] = value
        return self

    def params(self, params: Optional[Dict[str, Any]]) -> "RequestBuilder":
        for key, value in (params or {}).items():
            self.param(key, value)
        return self

    def json(self, data: Any) -> "RequestBuilder":
        if data is not None:
            self._options["json"] = data
        return self

    def data(self, data: Any) -> "RequestBuilder":
        if data is not None:
            self._options["data"] = data
        return self

    def timeout(self, timeout: Optional[float]) -> "RequestBuilder":
        if timeout is not None:
            self._options["timeout"] = timeout
        return self

    def build(self) -> RequestOptions:
        """Get the constructed options."""
        return self._options
