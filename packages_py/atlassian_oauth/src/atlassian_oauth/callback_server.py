"""
Local HTTP server receiving the OAuth redirect.
"""
import errno
import html
import http.server
import logging
import time
import urllib.parse
from typing import Optional

from .errors import OAuthSetupError, OAuthStateMismatchError, OAuthTimeoutError

logger = logging.getLogger(__name__)

CALLBACK_PATH = "/callback"
DEFAULT_HOST = "localhost"
DEFAULT_PORT = 8080
DEFAULT_TIMEOUT = 300.0

_PAGE = """<html>
  <head><title>{title}</title></head>
  <body style="font-family: system-ui; text-align: center; padding: 50px;">
    <h1>{title}</h1>
    {body}
  </body>
</html>
"""


class _CallbackHandler(http.server.BaseHTTPRequestHandler):
    """Handles GET /callback; anything else is a 404."""

    def log_message(self, format, *args):
        logger.debug(f"Callback server: {format % args}")

    def _send_page(self, status: int, title: str, body: str) -> None:
        content = _PAGE.format(title=title, body=body).encode("utf-8")
        self.send_response(status)
        self.send_header("Content-Type", "text/html; charset=utf-8")
        self.send_header("Content-Length", str(len(content)))
        self.end_headers()
        self.wfile.write(content)

    def do_GET(self):
        parsed = urllib.parse.urlsplit(self.path)
        if parsed.path != CALLBACK_PATH:
            self.send_error(404, "Not Found")
            return

        query = urllib.parse.parse_qs(parsed.query)
        state = query.get("state", [None])[0]
        error = query.get("error", [None])[0]
        code = query.get("code", [None])[0]

        # State is checked before anything else in the query is trusted
        if state != self.server.expected_state:
            self._send_page(
                400,
                "Authorization Failed",
                "<p>Invalid OAuth state parameter. This may indicate a CSRF attack.</p>",
            )
            self.server.oauth_error = OAuthStateMismatchError()
            return

        if error:
            description = query.get("error_description", ["Unknown error"])[0]
            self._send_page(
                400,
                "Authorization Failed",
                f"<p>Error: {html.escape(error)}</p>\n    <p>Description: {html.escape(description)}</p>",
            )
            self.server.oauth_error = OAuthSetupError(f"OAuth error: {error}")
            return

        if code:
            self._send_page(
                200,
                "Authorization Successful",
                "<p>You can close this window and return to the terminal.</p>",
            )
            self.server.oauth_code = code
            return

        self.send_error(404, "Not Found")


class CallbackServer:
    """Waits for a single OAuth redirect on ``http://host:port/callback``.

    Port 0 binds an ephemeral port; ``port`` reports the one actually bound.
    """

    def __init__(self, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT):
        try:
            self._server = http.server.HTTPServer((host, port), _CallbackHandler)
        except OSError as e:
            if e.errno == errno.EADDRINUSE:
                raise OAuthSetupError(
                    f"Port {port} is already in use. Please close other applications using this port."
                ) from e
            raise OAuthSetupError(f"Could not start callback server on {host}:{port}: {e}") from e

        self.host = host
        self.port = self._server.server_address[1]
        self._server.expected_state = None
        self._server.oauth_code = None
        self._server.oauth_error = None
        logger.info(f"Callback server started on http://{self.host}:{self.port}")

    @property
    def redirect_uri(self) -> str:
        return f"http://{self.host}:{self.port}{CALLBACK_PATH}"

    def wait_for_code(self, expected_state: str, timeout: float = DEFAULT_TIMEOUT) -> str:
        """Serve requests until a valid callback arrives, then return the code.

        Raises:
            OAuthStateMismatchError: the callback's state differs from ``expected_state``.
            OAuthSetupError: the authorization server returned an error.
            OAuthTimeoutError: nothing arrived within ``timeout`` seconds.
        """
        server = self._server
        server.expected_state = expected_state
        server.oauth_code = None
        server.oauth_error = None

        deadline = time.monotonic() + timeout
        try:
            while server.oauth_code is None and server.oauth_error is None:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    raise OAuthTimeoutError(timeout)
                server.timeout = min(1.0, remaining)
                server.handle_request()
        finally:
            self.close()

        if server.oauth_error is not None:
            raise server.oauth_error
        return server.oauth_code

    def close(self) -> None:
        self._server.server_close()

    def __enter__(self) -> "CallbackServer":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
