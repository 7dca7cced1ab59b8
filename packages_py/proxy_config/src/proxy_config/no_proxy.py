"""
NO_PROXY hostname matching.
"""
from typing import List, Optional
from urllib.parse import urlsplit


def parse_no_proxy(no_proxy: Optional[str]) -> List[str]:
    """Split a NO_PROXY value into trimmed, lower-cased, non-empty entries."""
    if not no_proxy:
        return []
    return [e.strip().lower() for e in no_proxy.split(",") if e.strip()]


def get_hostname(url: str) -> Optional[str]:
    """Lower-cased hostname of ``url``, or None when it cannot be parsed."""
    try:
        return urlsplit(url).hostname
    except ValueError:
        return None


def matches_no_proxy_entry(hostname: str, entry: str) -> bool:
    """Check a lower-cased hostname against a single lower-cased entry.

    - '*' matches everything
    - 'host' matches that exact hostname
    - '.example.com' matches hostnames ending with '.example.com'
    - 'example.com' matches 'example.com' and any of its subdomains
    """
    if entry == "*":
        return True
    if hostname == entry:
        return True
    if entry.startswith("."):
        return hostname.endswith(entry)
    return hostname.endswith("." + entry)


def should_bypass_proxy(url: str, no_proxy: Optional[str]) -> bool:
    """Whether ``url`` should skip the proxy according to ``no_proxy``.

    Malformed URLs never bypass: the caller keeps its normal proxy behaviour.
    """
    if not no_proxy:
        return False

    hostname = get_hostname(url)
    if not hostname:
        return False

    for entry in parse_no_proxy(no_proxy):
        if matches_no_proxy_entry(hostname, entry):
            return True

    return False
