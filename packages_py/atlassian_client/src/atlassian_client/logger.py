"""
Console/file logging setup for the Atlassian clients.
"""
import logging
import os
import sys
from typing import List, Mapping, Optional, Union

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
DEFAULT_LOG_FILE = "atlassian-clients.log"

# Top-level packages whose loggers share the handlers
PACKAGE_LOGGERS = (
    "proxy_config",
    "proxy_dispatcher",
    "fetch_client",
    "atlassian_client",
    "atlassian_oauth",
)

# Marks handlers installed here so repeated calls replace them
_HANDLER_FLAG = "_atlassian_handler"


def _build_handlers(env: Mapping[str, str]) -> List[logging.Handler]:
    formatter = logging.Formatter(LOG_FORMAT)

    # stderr keeps stdout free for CLI output
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    if env.get("ATLASSIAN_LOG_FILE", "").lower() == "true":
        path = env.get("ATLASSIAN_LOG_FILE_PATH") or DEFAULT_LOG_FILE
        handlers.append(logging.FileHandler(path, encoding="utf-8"))

    for handler in handlers:
        handler.setFormatter(formatter)
        setattr(handler, _HANDLER_FLAG, True)
    return handlers


def configure_logging(
    level: Optional[Union[str, int]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> List[logging.Logger]:
    """
    Install handlers on every package logger.

    Level comes from ``level`` or ATLASSIAN_LOG_LEVEL (default INFO).
    ATLASSIAN_LOG_FILE=true adds a file handler at ATLASSIAN_LOG_FILE_PATH.
    """
    env = os.environ if environ is None else environ
    level = level or env.get("ATLASSIAN_LOG_LEVEL") or "INFO"
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    handlers = _build_handlers(env)
    configured = []
    for name in PACKAGE_LOGGERS:
        pkg_logger = logging.getLogger(name)
        pkg_logger.setLevel(level)
        for existing in list(pkg_logger.handlers):
            if getattr(existing, _HANDLER_FLAG, False):
                pkg_logger.removeHandler(existing)
                existing.close()
        for handler in handlers:
            pkg_logger.addHandler(handler)
        configured.append(pkg_logger)

    return configured
