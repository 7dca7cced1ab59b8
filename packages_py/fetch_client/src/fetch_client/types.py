"""
Core type definitions for fetch-client.
"""
from typing import Any, Dict, Literal, TypedDict, Union
from dataclasses import dataclass

# HTTP Methods
HttpMethod = Literal["GET", "POST", "PUT", "DELETE"]

# Authentication Types
AuthType = Literal[
    "basic",
    "basic_email_token",
    "bearer",
    "custom",
]


@dataclass
class FetchResponse:
    """Standardized response object."""
    status: int
    status_text: str
    headers: Dict[str, str]
    url: str
    data: Any = None  # Parsed JSON or Text
    ok: bool = False


class RequestOptions(TypedDict, total=False):
    """Options for making a request."""
    method: HttpMethod
    url: str  # Full URL or path relative to base_url
    headers: Dict[str, str]
    params: Dict[str, Any]  # Query parameters
    json: Any
    data: Any  # Raw body
    timeout: Union[float, None]


class RequestContext(TypedDict):
    """Context passed to auth callbacks."""
    method: str
    url: str
    headers: Dict[str, str]
    body: Any
