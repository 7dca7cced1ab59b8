"""
Jira REST API (v2) client.
"""
import logging
from typing import Any, Dict, List, Optional

from .base import AtlassianClient, quoted_keys

logger = logging.getLogger(__name__)


def _join(values: Optional[List[str]]) -> Optional[str]:
    return ",".join(values) if values else None


class JiraClient(AtlassianClient):
    """Jira client configured from JIRA_* environment variables."""

    service = "jira"

    def scoped_jql(self, jql: str) -> str:
        """Restrict ``jql`` to JIRA_PROJECTS_FILTER, when set."""
        if not self.settings.key_filter:
            return jql
        projects = quoted_keys(self.settings.key_filter, "project filter key")
        return f"project in ({projects}) AND ({jql})"

    async def search_issues(
        self,
        jql: str,
        fields: Optional[List[str]] = None,
        max_results: int = 50,
    ) -> Dict[str, Any]:
        params = {
            "jql": self.scoped_jql(jql),
            "maxResults": max_results,
            "fields": _join(fields),
        }
        data = await self._request("GET", "/rest/api/2/search", "Issue search failed", params=params)
        logger.debug(f"Search completed: {len(data.get('issues') or [])} issues found")
        return data

    async def get_issue(
        self,
        issue_key: str,
        fields: Optional[List[str]] = None,
        expand: Optional[List[str]] = None,
    ) -> Dict[str, Any]:
        params = {"fields": _join(fields), "expand": _join(expand)}
        data = await self._request(
            "GET", f"/rest/api/2/issue/{issue_key}", f"Failed to get issue {issue_key}", params=params
        )
        logger.debug(f"Retrieved issue: {issue_key}")
        return data

    async def create_issue(
        self,
        project_key: str,
        issue_type: str,
        summary: str,
        description: Optional[str] = None,
        priority: Optional[str] = None,
    ) -> Dict[str, Any]:
        self._ensure_writable("create issue")

        fields: Dict[str, Any] = {
            "project": {"key": project_key},
            "issuetype": {"name": issue_type},
            "summary": summary,
        }
        if description:
            fields["description"] = description
        if priority:
            fields["priority"] = {"name": priority}

        data = await self._request("POST", "/rest/api/2/issue", "Failed to create issue", json={"fields": fields})
        logger.info(f"Created issue: {data.get('key')}")
        return data

    async def update_issue(self, issue_key: str, fields: Dict[str, Any]) -> Any:
        self._ensure_writable("update issue")

        # Jira answers 204 No Content on success
        data = await self._request(
            "PUT", f"/rest/api/2/issue/{issue_key}", f"Failed to update issue {issue_key}", json={"fields": fields}
        )
        logger.info(f"Updated issue: {issue_key}")
        return data

    async def add_comment(self, issue_key: str, body: str) -> Dict[str, Any]:
        self._ensure_writable("add comment")

        data = await self._request(
            "POST",
            f"/rest/api/2/issue/{issue_key}/comment",
            f"Failed to add comment to issue {issue_key}",
            json={"body": body},
        )
        logger.info(f"Added comment to issue: {issue_key}")
        return data

    async def get_projects(self) -> List[Dict[str, Any]]:
        data = await self._request("GET", "/rest/api/2/project", "Failed to get projects")
        logger.debug(f"Retrieved {len(data or [])} projects")
        return data
