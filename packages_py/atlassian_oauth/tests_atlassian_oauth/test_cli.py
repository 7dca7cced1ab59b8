"""
Tests for the atlassian-oauth-setup command.
"""
import pytest
from click.testing import CliRunner
from atlassian_oauth import OAuthSetupError, OAuthTokens
from atlassian_oauth import cli


class FakeServer:
    instances = []

    def __init__(self, host, port):
        self.host = host
        self.port = 9999 if port == 8080 else port
        self.requested_port = port
        self.states = []
        FakeServer.instances.append(self)

    @property
    def redirect_uri(self):
        return f"http://{self.host}:{self.port}/callback"

    def wait_for_code(self, expected_state, timeout=300):
        self.states.append(expected_state)
        return "auth-code"


@pytest.fixture
def fake_flow(monkeypatch):
    FakeServer.instances = []
    calls = {}

    async def fake_exchange(config, code):
        calls["exchange"] = (config, code)
        return OAuthTokens(access_token="access-abcdef", refresh_token="refresh-123456")

    async def fake_cloud_id(access_token):
        calls["cloud_id"] = access_token
        return "cloud-42"

    monkeypatch.setattr(cli, "CallbackServer", FakeServer)
    monkeypatch.setattr(cli, "exchange_code_for_tokens", fake_exchange)
    monkeypatch.setattr(cli, "get_cloud_id", fake_cloud_id)
    monkeypatch.setattr(cli, "load_dotenv", lambda *args, **kwargs: False)
    monkeypatch.setattr(cli, "configure_logging", lambda *args, **kwargs: [])
    return calls


def test_full_flow(fake_flow):
    runner = CliRunner()
    result = runner.invoke(
        cli.main,
        ["--client-id", "cid", "--client-secret", "csecret-xyz1", "--cloud-id", ""],
        input="\n\n",
    )

    assert result.exit_code == 0, result.output
    assert "https://auth.atlassian.com/authorize?" in result.output
    # Localhost redirect is rewritten to the port actually bound
    assert "redirect_uri=http%3A%2F%2Flocalhost%3A9999%2Fcallback" in result.output
    assert "ATLASSIAN_OAUTH_CLIENT_SECRET=****xyz1" in result.output
    assert "ATLASSIAN_OAUTH_ACCESS_TOKEN=****cdef" in result.output
    assert "JIRA_URL=https://api.atlassian.com/ex/jira/cloud-42" in result.output

    config, code = fake_flow["exchange"]
    assert code == "auth-code"
    assert config.redirect_uri == "http://localhost:9999/callback"
    assert fake_flow["cloud_id"] == "access-abcdef"
    assert FakeServer.instances[0].states[0] in result.output


def test_cloud_id_given_skips_lookup(fake_flow):
    runner = CliRunner()
    result = runner.invoke(
        cli.main,
        [
            "--client-id", "cid",
            "--client-secret", "secret",
            "--redirect-uri", "http://localhost:8123/callback",
            "--scope", "read:jira-work",
            "--cloud-id", "given-cloud",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "cloud_id" not in fake_flow
    assert FakeServer.instances[0].requested_port == 8123
    assert "ATLASSIAN_OAUTH_CLOUD_ID=given-cloud" in result.output


def test_non_localhost_redirect_kept(fake_flow):
    runner = CliRunner()
    result = runner.invoke(
        cli.main,
        [
            "--client-id", "cid",
            "--client-secret", "secret",
            "--redirect-uri", "https://app.example.com/callback",
            "--scope", "read:jira-work",
            "--cloud-id", "c",
        ],
    )

    assert result.exit_code == 0, result.output
    config, _ = fake_flow["exchange"]
    assert config.redirect_uri == "https://app.example.com/callback"


def test_failure_exits_non_zero(fake_flow, monkeypatch):
    def failing_wait(self, expected_state, timeout=300):
        raise OAuthSetupError("OAuth error: access_denied")

    monkeypatch.setattr(FakeServer, "wait_for_code", failing_wait)

    runner = CliRunner()
    result = runner.invoke(
        cli.main,
        ["--client-id", "cid", "--client-secret", "secret", "--cloud-id", "c"],
        input="\n\n",
    )

    assert result.exit_code == 1
    assert "OAuth setup completed" not in result.output
