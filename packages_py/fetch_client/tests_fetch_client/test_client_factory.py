"""
Tests for create_client_with_dispatcher.
"""
import httpcore
import pytest
import respx
from pydantic import SecretStr
from fetch_client import AuthConfig, FetchClient, create_client_with_dispatcher


class TestCreateClientWithDispatcher:

    def test_direct_client_has_no_mounts(self):
        client = create_client_with_dispatcher("jira", "https://jira.example.com/", environ={})

        assert isinstance(client, FetchClient)
        assert client.base_url == "https://jira.example.com"
        kwargs = client._config.client_kwargs
        assert kwargs["trust_env"] is False
        assert kwargs["verify"] is True
        assert "mounts" not in kwargs
        assert "timeout" not in kwargs

    def test_https_proxy_is_mounted(self):
        env = {"HTTPS_PROXY": "http://proxy.corp:3128"}
        client = create_client_with_dispatcher("jira", "https://jira.example.com", environ=env)

        mounts = client._config.client_kwargs["mounts"]
        assert isinstance(mounts["https://"]._pool, httpcore.AsyncHTTPProxy)

    def test_ssl_verify_false_from_env(self):
        env = {"CONFLUENCE_SSL_VERIFY": "false"}
        client = create_client_with_dispatcher("confluence", "https://wiki.example.com", environ=env)

        kwargs = client._config.client_kwargs
        assert kwargs["verify"] is False
        assert set(kwargs["mounts"]) == {"https://"}

    def test_verify_param_overrides_env(self):
        env = {"CONFLUENCE_SSL_VERIFY": "false"}
        client = create_client_with_dispatcher(
            "confluence", "https://wiki.example.com", verify_ssl=True, environ=env
        )

        assert client._config.client_kwargs["verify"] is True

    def test_timeout_applies_to_client(self):
        client = create_client_with_dispatcher("jira", "https://jira.example.com", timeout=7, environ={})
        assert client._config.timeout.read == 7.0

    @pytest.mark.asyncio
    async def test_request_goes_through_client(self):
        client = create_client_with_dispatcher(
            "jira",
            "https://jira.example.com",
            auth=AuthConfig(type="bearer", raw_api_key=SecretStr("pat")),
            default_headers={"Accept": "application/json"},
            environ={"JIRA_SSL_VERIFY": "false"},
        )

        async with client:
            with respx.mock(base_url="https://jira.example.com") as mock:
                route = mock.get("/rest/api/2/myself").respond(200, json={"name": "me"})
                response = await client.get("/rest/api/2/myself")

        request = route.calls.last.request
        assert response.data == {"name": "me"}
        assert request.headers["Authorization"] == "Bearer pat"
        assert request.headers["Accept"] == "application/json"
