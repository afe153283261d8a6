from __future__ import annotations

import os
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from dotenv import load_dotenv

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s: %(message)s"

# Repository root, for running from a checkout without a .env in the cwd
_PROJECT_ENV = Path(__file__).resolve().parents[2] / ".env"


def setup_logging() -> None:
    """Load .env, then configure the root logger from MCP_LOG_LEVEL / MCP_LOG_FILE.

    httpx logs every request at INFO; vismanet_server.http already logs the
    same line at DEBUG, so httpx is held at WARNING unless DEBUG is asked for.
    """
    if not load_dotenv() and _PROJECT_ENV.exists():
        load_dotenv(_PROJECT_ENV, override=False)

    level = getattr(logging, os.getenv("MCP_LOG_LEVEL", "INFO").upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("httpx").setLevel(
        logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    )

    log_file = os.getenv("MCP_LOG_FILE")
    if not log_file:
        return
    try:
        handler = RotatingFileHandler(log_file, maxBytes=5_000_000, backupCount=3)
    except OSError as e:
        logging.getLogger("vismanet_server").warning(
            "Could not open log file %s: %s", log_file, e
        )
        return
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.getLogger().addHandler(handler)


def truncate(text: str, max_len: int = 2000) -> str:
    """Cut text to max_len, marking the cut."""
    if text is None:
        return ""
    if len(text) <= max_len:
        return text
    return text[:max_len] + "... [truncated]"
