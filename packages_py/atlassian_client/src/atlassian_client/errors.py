from typing import List, Optional


class AtlassianClientError(Exception):
    """Base exception for Jira/Confluence client errors."""
    pass


class MissingConfigError(AtlassianClientError):
    def __init__(self, service: str, env_var: str):
        msg = f"{env_var} environment variable is required for service '{service}'"
        super().__init__(msg)
        self.service = service
        self.env_var = env_var


class MissingCredentialError(AtlassianClientError):
    def __init__(self, service: str, env_vars_tried: List[str]):
        msg = (
            f"Authentication credentials not found for service '{service}'. "
            f"Tried env vars: {', '.join(env_vars_tried)}"
        )
        super().__init__(msg)
        self.service = service
        self.env_vars_tried = env_vars_tried


class InvalidKeyError(AtlassianClientError):
    def __init__(self, label: str, key: str):
        msg = f"Invalid {label}: only alphanumeric characters, hyphens, and underscores are allowed"
        super().__init__(msg)
        self.label = label
        self.key = key


class ReadOnlyModeError(AtlassianClientError):
    def __init__(self, action: str):
        super().__init__(f"Cannot {action}: running in read-only mode")
        self.action = action


class AtlassianApiError(AtlassianClientError):
    """Non-2xx response from the Jira/Confluence REST API."""

    def __init__(self, status: int, reason: str, detail: str, data: Optional[object] = None):
        super().__init__(f"HTTP {status} {reason}: {detail}")
        self.status = status
        self.reason = reason
        self.detail = detail
        self.data = data
