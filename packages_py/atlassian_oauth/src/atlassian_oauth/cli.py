"""
Command-line OAuth 2.0 setup wizard for Atlassian Cloud.

Usage:
    atlassian-oauth-setup
    atlassian-oauth-setup --client-id ID --client-secret SECRET --cloud-id ""
"""
import asyncio
import logging
import sys
import urllib.parse
from typing import Optional

import click
from dotenv import load_dotenv

from atlassian_client.logger import configure_logging

from .callback_server import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_TIMEOUT, CallbackServer
from .errors import OAuthSetupError
from .oauth import (
    DEFAULT_REDIRECT_URI,
    DEFAULT_SCOPE,
    OAuthConfig,
    exchange_code_for_tokens,
    format_env_summary,
    generate_auth_url,
    generate_oauth_state,
    get_cloud_id,
)

logger = logging.getLogger(__name__)


def _is_localhost(redirect_uri: str) -> bool:
    return "localhost" in (urllib.parse.urlsplit(redirect_uri).hostname or "")


def _callback_port(redirect_uri: str) -> int:
    try:
        return urllib.parse.urlsplit(redirect_uri).port or DEFAULT_PORT
    except ValueError:
        return DEFAULT_PORT


def run_oauth_setup(config: OAuthConfig, timeout: float = DEFAULT_TIMEOUT) -> list:
    """Run the browser flow and return the .env summary lines."""
    # 1. Callback server
    port = _callback_port(config.redirect_uri) if _is_localhost(config.redirect_uri) else DEFAULT_PORT
    server = CallbackServer(DEFAULT_HOST, port)
    if _is_localhost(config.redirect_uri):
        config = config.model_copy(update={"redirect_uri": server.redirect_uri})

    # 2. Consent URL
    state = generate_oauth_state()
    click.echo("\nPlease open this URL in your browser to authorize the application:")
    click.echo(f"\n{generate_auth_url(config, state)}\n")

    # 3. Callback, tokens, cloud id
    code = server.wait_for_code(state, timeout=timeout)
    tokens = asyncio.run(exchange_code_for_tokens(config, code))
    if not config.cloud_id:
        config = config.model_copy(update={"cloud_id": asyncio.run(get_cloud_id(tokens.access_token))})

    return format_env_summary(config, tokens)


@click.command()
@click.version_option(version="0.1.0", prog_name="atlassian-oauth-setup")
@click.option("--client-id", prompt="Enter your OAuth Client ID", help="OAuth app client id")
@click.option(
    "--client-secret",
    prompt="Enter your OAuth Client Secret",
    hide_input=True,
    help="OAuth app client secret",
)
@click.option(
    "--redirect-uri",
    prompt="Enter your Redirect URI",
    default=DEFAULT_REDIRECT_URI,
    show_default=True,
    help="Redirect URI registered for the app",
)
@click.option("--scope", prompt="Enter OAuth scopes", default=DEFAULT_SCOPE, show_default=True)
@click.option(
    "--cloud-id",
    prompt="Enter your Cloud ID (optional, will auto-detect)",
    default="",
    show_default=False,
)
@click.option("--timeout", type=float, default=DEFAULT_TIMEOUT, show_default=True, help="Seconds to wait for the callback")
@click.option("--env-file", type=click.Path(dir_okay=False), default=None, help=".env file to load first")
@click.option("--log-level", default=None, help="Overrides ATLASSIAN_LOG_LEVEL")
def main(
    client_id: str,
    client_secret: str,
    redirect_uri: str,
    scope: str,
    cloud_id: str,
    timeout: float,
    env_file: Optional[str],
    log_level: Optional[str],
):
    """OAuth 2.0 setup wizard for Atlassian Cloud."""
    load_dotenv(env_file)
    configure_logging(log_level)

    try:
        config = OAuthConfig(
            client_id=client_id.strip(),
            client_secret=client_secret.strip(),
            redirect_uri=redirect_uri.strip() or DEFAULT_REDIRECT_URI,
            scope=scope.strip() or DEFAULT_SCOPE,
            cloud_id=cloud_id.strip() or None,
        )
        lines = run_oauth_setup(config, timeout=timeout)
    except OAuthSetupError as e:
        logger.error(f"OAuth setup failed: {e}")
        sys.exit(1)

    click.echo("\nOAuth setup completed successfully!")
    click.echo("\nAdd these environment variables to your .env file:\n")
    for line in lines:
        click.echo(line)
    click.echo("\nKeep these credentials secure and do not commit them to version control.")
    click.echo("Token values have been masked above. Re-run the setup to generate new ones.")


if __name__ == "__main__":
    main()
