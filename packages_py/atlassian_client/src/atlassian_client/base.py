"""
Shared plumbing for the Jira and Confluence REST clients.
"""
import logging
import re
from typing import Any, Dict, Mapping, Optional

import httpx

from fetch_client import FetchClient, FetchResponse, create_client_with_dispatcher

from .config import ServiceSettings
from .errors import AtlassianApiError, InvalidKeyError, ReadOnlyModeError

logger = logging.getLogger(__name__)

VALID_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


def validate_key(key: str, label: str) -> str:
    """Reject project/space keys that could break out of a JQL/CQL string literal."""
    if not VALID_KEY_PATTERN.match(key or ""):
        raise InvalidKeyError(label, key)
    return key


def quoted_keys(keys, label: str) -> str:
    """'"A","B"' for use inside ``in (...)``."""
    return ",".join(f'"{validate_key(key, label)}"' for key in keys)


def _error_detail(data: Any) -> str:
    """Pick the human-readable part of an Atlassian error body."""
    if isinstance(data, dict):
        messages = data.get("errorMessages") or []
        errors = data.get("errors") or {}
        parts = list(messages) + [f"{k}: {v}" for k, v in errors.items()]
        if parts:
            return "; ".join(str(p) for p in parts)
        if data.get("message"):
            return str(data["message"])
    if isinstance(data, str) and data.strip():
        return data.strip()[:200]
    return "request failed"


def sanitize_error(error: BaseException) -> str:
    """One-line description of a failure that never includes credentials."""
    if isinstance(error, AtlassianApiError):
        return str(error)
    if isinstance(error, httpx.HTTPError):
        return f"{type(error).__name__}: {error}"
    return str(error) or type(error).__name__


class AtlassianClient:
    """Base class: one FetchClient per service, wired through the proxy resolver."""

    service: str = ""

    def __init__(
        self,
        settings: Optional[ServiceSettings] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self.settings = settings or ServiceSettings.from_env(self.service, environ)
        self.base_url = self.settings.url.rstrip("/")
        self._http: FetchClient = create_client_with_dispatcher(
            self.settings.service,
            self.base_url,
            auth=self.settings.auth_config,
            default_headers={"Accept": "application/json"},
            verify_ssl=self.settings.ssl_verify,
            timeout=self.settings.timeout,
            environ=environ,
        )
        logger.info(f"{type(self).__name__} initialized for {self.base_url}")

    async def close(self) -> None:
        await self._http.close()

    async def __aenter__(self):
        await self._http.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    def _ensure_writable(self, action: str) -> None:
        if self.settings.read_only:
            raise ReadOnlyModeError(action)

    async def _request(
        self,
        method: str,
        path: str,
        failure: str,
        params: Optional[Dict[str, Any]] = None,
        json: Any = None,
    ) -> Any:
        """Send a request and return the decoded body.

        Raises AtlassianApiError for non-2xx responses; transport errors are
        logged and re-raised unchanged.
        """
        try:
            if method == "GET":
                response: FetchResponse = await self._http.get(path, params=params)
            elif method == "POST":
                response = await self._http.post(path, json=json, params=params)
            elif method == "PUT":
                response = await self._http.put(path, json=json, params=params)
            else:
                response = await self._http.delete(path, params=params)

            if not response.ok:
                raise AtlassianApiError(
                    response.status,
                    response.status_text,
                    _error_detail(response.data),
                    data=response.data,
                )
        except (AtlassianApiError, httpx.HTTPError) as e:
            logger.error(f"{failure}: {sanitize_error(e)}")
            raise

        return response.data
