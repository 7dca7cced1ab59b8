"""
Confluence REST API client.
"""
import logging
from typing import Any, Dict, Optional

from .base import AtlassianClient, quoted_keys, validate_key

logger = logging.getLogger(__name__)


def _storage_body(content: str) -> Dict[str, Any]:
    return {"storage": {"value": content, "representation": "storage"}}


class ConfluenceClient(AtlassianClient):
    """Confluence client configured from CONFLUENCE_* environment variables."""

    service = "confluence"

    def scoped_cql(self, query: str, space_key: Optional[str] = None) -> str:
        """An explicit space wins over CONFLUENCE_SPACES_FILTER."""
        if space_key:
            validate_key(space_key, "space key")
            return f'space = "{space_key}" AND {query}'
        if self.settings.key_filter:
            spaces = quoted_keys(self.settings.key_filter, "space filter key")
            return f"space in ({spaces}) AND {query}"
        return query

    async def search(
        self,
        query: str,
        space_key: Optional[str] = None,
        limit: int = 10,
    ) -> Dict[str, Any]:
        params = {"cql": self.scoped_cql(query, space_key), "limit": limit}
        data = await self._request("GET", "/rest/api/content/search", "Search failed", params=params)
        logger.debug(f"Search completed: {len(data.get('results') or [])} results")
        return data

    async def get_page(self, page_id: str, expand: Optional[str] = None) -> Dict[str, Any]:
        data = await self._request(
            "GET", f"/rest/api/content/{page_id}", f"Failed to get page {page_id}", params={"expand": expand}
        )
        logger.debug(f"Retrieved page: {page_id}")
        return data

    async def create_page(
        self,
        space_key: str,
        title: str,
        content: str,
        parent_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        self._ensure_writable("create page")

        page: Dict[str, Any] = {
            "type": "page",
            "title": title,
            "space": {"key": space_key},
            "body": _storage_body(content),
        }
        if parent_id:
            page["ancestors"] = [{"id": parent_id}]

        data = await self._request("POST", "/rest/api/content", f"Failed to create page {title}", json=page)
        logger.info(f"Created page: {title} ({data.get('id')})")
        return data

    async def update_page(self, page_id: str, title: str, content: str, version: int) -> Dict[str, Any]:
        """``version`` is the page's current version; the update is sent as version + 1."""
        self._ensure_writable("update page")

        page = {
            "id": page_id,
            "type": "page",
            "title": title,
            "body": _storage_body(content),
            "version": {"number": version + 1},
        }
        data = await self._request("PUT", f"/rest/api/content/{page_id}", f"Failed to update page {page_id}", json=page)
        logger.info(f"Updated page: {title} ({page_id})")
        return data

    async def get_spaces(self, limit: int = 25, start: int = 0) -> Dict[str, Any]:
        data = await self._request(
            "GET", "/rest/api/space", "Failed to get spaces", params={"limit": limit, "start": start}
        )
        logger.debug(f"Retrieved {len(data.get('results') or [])} spaces")
        return data
