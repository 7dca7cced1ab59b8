"""
Shared pytest fixtures: tests never see the host's proxy or Atlassian settings.
"""
import os
import pytest

ISOLATED_ENV_VARS = (
    "HTTP_PROXY", "http_proxy",
    "HTTPS_PROXY", "https_proxy",
    "SOCKS_PROXY", "socks_proxy",
    "ALL_PROXY", "all_proxy",
    "NO_PROXY", "no_proxy",
    "PIP_PROXY",
    "SSL_VERIFY",
    "READ_ONLY_MODE",
)

ISOLATED_ENV_PREFIXES = ("JIRA_", "CONFLUENCE_", "ATLASSIAN_")


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    for name in list(os.environ):
        if name in ISOLATED_ENV_VARS or name.startswith(ISOLATED_ENV_PREFIXES):
            monkeypatch.delenv(name, raising=False)
    yield
