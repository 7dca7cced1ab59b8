"""
Tests for the OAuth helpers and token/cloud-id calls.
"""
import json
import logging
import re
import urllib.parse
import httpx
import pytest
import respx
from atlassian_oauth import (
    OAuthConfig,
    OAuthSetupError,
    OAuthTokens,
    exchange_code_for_tokens,
    format_env_summary,
    generate_auth_url,
    generate_oauth_state,
    get_cloud_id,
    mask_secret,
)
from atlassian_oauth.oauth import ACCESSIBLE_RESOURCES_URL, DEFAULT_SCOPE, TOKEN_URL


@pytest.fixture
def config():
    return OAuthConfig(client_id="client-123", client_secret="s3cr3t-value")


def test_generate_oauth_state():
    first = generate_oauth_state()
    second = generate_oauth_state()

    assert re.fullmatch(r"[0-9a-f]{64}", first)
    assert first != second


def test_generate_auth_url(config):
    url = generate_auth_url(config, "abc")
    parsed = urllib.parse.urlsplit(url)
    params = dict(urllib.parse.parse_qsl(parsed.query))

    assert f"{parsed.scheme}://{parsed.netloc}{parsed.path}" == "https://auth.atlassian.com/authorize"
    assert params == {
        "audience": "api.atlassian.com",
        "client_id": "client-123",
        "scope": DEFAULT_SCOPE,
        "redirect_uri": "http://localhost:8080/callback",
        "state": "abc",
        "response_type": "code",
        "prompt": "consent",
    }


def test_mask_secret():
    assert mask_secret("abcd") == "****"
    assert mask_secret("") == "****"
    assert mask_secret("abcdefgh") == "****efgh"


def test_format_env_summary(config):
    config = config.model_copy(update={"cloud_id": "cloud-1"})
    tokens = OAuthTokens(access_token="access-token-9876", refresh_token="refresh-5555")

    lines = format_env_summary(config, tokens)

    assert "ATLASSIAN_OAUTH_CLIENT_ID=client-123" in lines
    assert "ATLASSIAN_OAUTH_CLIENT_SECRET=****alue" in lines
    assert "ATLASSIAN_OAUTH_CLOUD_ID=cloud-1" in lines
    assert "ATLASSIAN_OAUTH_ACCESS_TOKEN=****9876" in lines
    assert "ATLASSIAN_OAUTH_REFRESH_TOKEN=****5555" in lines
    assert "JIRA_URL=https://api.atlassian.com/ex/jira/cloud-1" in lines
    assert "CONFLUENCE_URL=https://api.atlassian.com/ex/confluence/cloud-1/wiki" in lines
    assert not any("s3cr3t-value" in line for line in lines)


def test_format_env_summary_without_refresh_or_cloud(config):
    lines = format_env_summary(config, OAuthTokens(access_token="tok-1234"))

    assert not any(line.startswith("ATLASSIAN_OAUTH_REFRESH_TOKEN") for line in lines)
    assert not any(line.startswith("JIRA_URL") for line in lines)


def test_tokens_require_access_token():
    with pytest.raises(OAuthSetupError):
        OAuthTokens.from_dict({"refresh_token": "x"})


@pytest.mark.asyncio
class TestTokenExchange:

    async def test_exchange_posts_json(self, config):
        with respx.mock() as mock:
            route = mock.post(TOKEN_URL).respond(
                200,
                json={"access_token": "at", "refresh_token": "rt", "expires_in": 3600, "scope": "read:jira-work"},
            )

            tokens = await exchange_code_for_tokens(config, "the-code", environ={})

        body = json.loads(route.calls.last.request.content)
        assert body == {
            "grant_type": "authorization_code",
            "client_id": "client-123",
            "client_secret": "s3cr3t-value",
            "code": "the-code",
            "redirect_uri": "http://localhost:8080/callback",
        }
        assert tokens.access_token == "at"
        assert tokens.refresh_token == "rt"
        assert tokens.expires_in == 3600

    async def test_exchange_error_description(self, config):
        with respx.mock() as mock:
            mock.post(TOKEN_URL).respond(
                403, json={"error": "invalid_grant", "error_description": "Invalid authorization code"}
            )

            with pytest.raises(OAuthSetupError, match="Invalid authorization code"):
                await exchange_code_for_tokens(config, "bad", environ={})

    async def test_exchange_transport_error(self, config):
        with respx.mock() as mock:
            mock.post(TOKEN_URL).mock(side_effect=httpx.ConnectError("refused"))

            with pytest.raises(OAuthSetupError, match="ConnectError"):
                await exchange_code_for_tokens(config, "code", environ={})

    async def test_exchange_through_proxy_env(self, config):
        # Proxy transports are still intercepted by respx
        env = {"ATLASSIAN_HTTPS_PROXY": "http://proxy.corp:3128"}
        with respx.mock() as mock:
            mock.post(TOKEN_URL).respond(200, json={"access_token": "at"})

            tokens = await exchange_code_for_tokens(config, "code", environ=env)

        assert tokens.access_token == "at"


@pytest.mark.asyncio
class TestCloudId:

    async def test_single_resource(self):
        with respx.mock() as mock:
            route = mock.get(ACCESSIBLE_RESOURCES_URL).respond(200, json=[{"id": "c1", "name": "site"}])

            cloud_id = await get_cloud_id("at", environ={})

        assert cloud_id == "c1"
        assert route.calls.last.request.headers["Authorization"] == "Bearer at"

    async def test_multiple_resources_uses_first(self, caplog):
        resources = [{"id": "c1", "name": "one"}, {"id": "c2", "name": "two"}]
        with respx.mock() as mock:
            mock.get(ACCESSIBLE_RESOURCES_URL).respond(200, json=resources)

            with caplog.at_level(logging.INFO, logger="atlassian_oauth"):
                cloud_id = await get_cloud_id("at", environ={})

        assert cloud_id == "c1"
        assert "two (c2)" in caplog.text
        assert "Using first resource: one (c1)" in caplog.text

    async def test_no_resources(self):
        with respx.mock() as mock:
            mock.get(ACCESSIBLE_RESOURCES_URL).respond(200, json=[])

            with pytest.raises(OAuthSetupError, match="No accessible Atlassian resources"):
                await get_cloud_id("at", environ={})

    async def test_error_message(self):
        with respx.mock() as mock:
            mock.get(ACCESSIBLE_RESOURCES_URL).respond(401, json={"message": "Unauthorized token"})

            with pytest.raises(OAuthSetupError, match="Unauthorized token"):
                await get_cloud_id("at", environ={})
