"""
Ordered environment variable lookups.
"""
import os
import re
from typing import List, Mapping, Optional, Sequence
from pydantic import BaseModel

# Python's package manager proxy setting, consulted last for HTTP(S)
ECOSYSTEM_PROXY_FALLBACKS = ("PIP_PROXY",)


class EnvVarResolveResult(BaseModel):
    value: Optional[str]
    source: Optional[str]
    tried: List[str]


def service_prefix(service: str) -> str:
    """Environment prefix for a logical service, e.g. 'jira' -> 'JIRA_'."""
    return re.sub(r"[^A-Z0-9]", "_", service.upper()) + "_"


def service_env_chain(
    service: str,
    suffix: str,
    fallbacks: Sequence[str] = (),
) -> List[str]:
    """Candidate names for ``suffix``: service-scoped, global upper, global lower, fallbacks."""
    suffix = suffix.upper()
    chain = [f"{service_prefix(service)}{suffix}", suffix, suffix.lower()]
    chain.extend(fallbacks)
    return chain


def resolve_env_var_chain(
    candidates: Sequence[str],
    environ: Optional[Mapping[str, str]] = None,
) -> EnvVarResolveResult:
    """
    Try env vars in order; the first non-empty value wins.
    Returns the value, the variable it came from and every name consulted.
    """
    env = os.environ if environ is None else environ
    tried: List[str] = []

    for name in candidates:
        if not name or name in tried:
            continue
        tried.append(name)
        val = env.get(name)
        if val is not None and val.strip():
            return EnvVarResolveResult(value=val.strip(), source=name, tried=tried)

    return EnvVarResolveResult(value=None, source=None, tried=tried)
