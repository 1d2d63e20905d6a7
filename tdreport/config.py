"""Configuration for tdreport.

Settings come from the environment (optionally populated from a .env file).
"""

import json
import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

DEFAULT_API_BASE = "https://api.todoist.com/rest/v2"
DEFAULT_TOKEN_FILE = ".token.todoist"
DEFAULT_TIMEOUT_SEC = 10.0

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_api_base() -> str:
    return os.getenv("TODOIST_API_BASE", DEFAULT_API_BASE).rstrip("/")


def get_timeout() -> float:
    """Request timeout in seconds.

    Raises:
        ValueError: If TODOIST_TIMEOUT_SEC is not a positive number
    """
    raw = os.getenv("TODOIST_TIMEOUT_SEC", str(DEFAULT_TIMEOUT_SEC))
    try:
        timeout = float(raw)
    except ValueError:
        raise ValueError(f"TODOIST_TIMEOUT_SEC must be a number of seconds, got {raw!r}") from None
    if timeout <= 0:
        raise ValueError(f"TODOIST_TIMEOUT_SEC must be positive, got {raw!r}")
    return timeout


def get_token_file() -> Path:
    return Path(os.getenv("TODOIST_TOKEN_FILE", DEFAULT_TOKEN_FILE))


def read_token_file(path: Path) -> Optional[str]:
    """Read an access token from a saved OAuth token file.

    The file holds the JSON token response (``{"access_token": ...}``). A file
    containing only the bare token is accepted as well.

    Returns:
        The access token, or None if the file does not exist
    """
    if not path.exists():
        return None
    text = path.read_text(encoding="utf-8").strip()
    if not text:
        return None
    if text.startswith("{"):
        data = json.loads(text)
        return data.get("access_token") or None
    return text


def get_api_token(token_file: Optional[Path] = None) -> str:
    """Find the Todoist API token.

    Checks in this order:
    1. ``token_file``, when given explicitly (e.g. from --token)
    2. TODOIST_API_TOKEN environment variable (or .env file)
    3. The token file from TODOIST_TOKEN_FILE, or .token.todoist

    Raises:
        ValueError: If no token is configured
    """
    if token_file is not None:
        token = read_token_file(token_file)
        if token:
            return token

    token = os.getenv("TODOIST_API_TOKEN")
    if token:
        return token

    path = token_file or get_token_file()
    if token_file is None:
        token = read_token_file(path)
        if token:
            return token

    raise ValueError(
        "Todoist API token is not set.\n\n"
        "To get your token:\n"
        "1. Go to https://app.todoist.com/app/settings/integrations\n"
        "2. Scroll to 'API token' and copy it\n\n"
        "To save it (choose one):\n"
        "  Option A: Create a .env file in the project root:\n"
        "    echo 'TODOIST_API_TOKEN=your_token_here' > .env\n\n"
        "  Option B: Export in your shell:\n"
        "    export TODOIST_API_TOKEN=your_token_here\n\n"
        f"  Option C: Save an OAuth token response as {path}\n"
    )


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging for command-line use."""
    default_level = "INFO" if verbose else "WARNING"
    level_name = os.getenv("LOG_LEVEL", default_level).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.WARNING), format=LOG_FORMAT)
