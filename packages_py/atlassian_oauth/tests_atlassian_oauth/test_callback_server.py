"""
Tests for CallbackServer, driven by real HTTP requests.
"""
import threading
import httpx
import pytest
from atlassian_oauth import (
    CallbackServer,
    OAuthSetupError,
    OAuthStateMismatchError,
    OAuthTimeoutError,
)

HOST = "127.0.0.1"


def start_waiting(server: CallbackServer, state: str, timeout: float = 10):
    """Run wait_for_code in a thread; returns (thread, outcome dict)."""
    outcome = {}

    def target():
        try:
            outcome["code"] = server.wait_for_code(state, timeout=timeout)
        except Exception as e:
            outcome["error"] = e

    thread = threading.Thread(target=target, daemon=True)
    thread.start()
    return thread, outcome


def get(server: CallbackServer, path: str) -> httpx.Response:
    return httpx.get(f"http://{HOST}:{server.port}{path}", trust_env=False, timeout=5)


class TestCallbackServer:

    def test_code_returned(self):
        server = CallbackServer(HOST, 0)
        thread, outcome = start_waiting(server, "s1")

        not_found = get(server, "/favicon.ico")
        ok = get(server, "/callback?code=abc&state=s1")
        thread.join(5)

        assert not_found.status_code == 404
        assert ok.status_code == 200
        assert "Authorization Successful" in ok.text
        assert outcome == {"code": "abc"}

    def test_state_mismatch(self):
        server = CallbackServer(HOST, 0)
        thread, outcome = start_waiting(server, "expected")

        response = get(server, "/callback?code=abc&state=forged")
        thread.join(5)

        assert response.status_code == 400
        assert "CSRF" in response.text
        assert isinstance(outcome["error"], OAuthStateMismatchError)

    def test_error_param_escaped(self):
        server = CallbackServer(HOST, 0)
        thread, outcome = start_waiting(server, "s1")

        response = get(
            server,
            "/callback?state=s1&error=access_denied&error_description=%3Cscript%3Ealert(1)%3C%2Fscript%3E",
        )
        thread.join(5)

        assert response.status_code == 400
        assert "<script>" not in response.text
        assert "&lt;script&gt;" in response.text
        assert isinstance(outcome["error"], OAuthSetupError)
        assert "access_denied" in str(outcome["error"])

    def test_timeout(self):
        server = CallbackServer(HOST, 0)
        with pytest.raises(OAuthTimeoutError):
            server.wait_for_code("s1", timeout=0.2)

    def test_port_in_use(self):
        with CallbackServer(HOST, 0) as first:
            with pytest.raises(OAuthSetupError, match="already in use"):
                CallbackServer(HOST, first.port)

    def test_redirect_uri_reports_bound_port(self):
        with CallbackServer(HOST, 0) as server:
            assert server.port != 0
            assert server.redirect_uri == f"http://{HOST}:{server.port}/callback"
