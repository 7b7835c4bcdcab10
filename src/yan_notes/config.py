"""Configuration constants for the yan-notes client."""

import os
from pathlib import Path

# Every request path is prefixed with this before being sent.
API_ROOT: str = "/api"

# Server the CLI talks to when YAN_BASE_URL is not set.
DEFAULT_BASE_URL: str = "http://localhost:8080"

# Where the CLI keeps token, tenant code and user profile between runs.
DEFAULT_STATE_FILE: Path = Path("~/.config/yan-notes/state.json").expanduser()

# Where downloaded attachments are saved.
DEFAULT_DOWNLOAD_DIR: Path = Path("~/Downloads").expanduser()

# Entry point the auth-failure handler redirects to.
LOGIN_PATH: str = "/login"

# Seconds between sync ticks while a note is open for editing.
SYNC_INTERVAL: float = 3.0

# Seconds between checks of a watched file in "yan-notes edit".
WATCH_POLL_INTERVAL: float = 0.5

# Seconds before an HTTP request is abandoned.
REQUEST_TIMEOUT: float = 30.0

# Keys in the opaque key-value store. All are cleared together.
TOKEN_KEY: str = "token"
TENANT_KEY: str = "organ-code"
USER_KEY: str = "user-info"
COOKIES_KEY: str = "session-cookies"

TENANT_HEADER: str = "Organ-Code"

JSON_CONTENT_TYPE: str = "application/json"

# Responses with one of these content types are saved to disk. Matched as substrings.
DOWNLOADABLE_TYPES: tuple[str, ...] = (
    "image/",
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.ms-powerpoint",
    "application/vnd.openxmlformats-officedocument.presentationml.presentation",
    "text/csv",
    "application/zip",
    "application/x-zip-compressed",
    "application/octet-stream",
)

FALLBACK_DOWNLOAD_NAME: str = "download"


def resolve_base_url() -> str:
    """Return the server base URL, honouring YAN_BASE_URL."""
    return os.environ.get("YAN_BASE_URL", DEFAULT_BASE_URL).rstrip("/")


def resolve_state_file() -> Path:
    """Return the persistent state file, honouring YAN_STATE_FILE."""
    env = os.environ.get("YAN_STATE_FILE")
    return Path(env).expanduser() if env else DEFAULT_STATE_FILE


def resolve_download_dir() -> Path:
    """Return the download directory, honouring YAN_DOWNLOAD_DIR."""
    env = os.environ.get("YAN_DOWNLOAD_DIR")
    return Path(env).expanduser() if env else DEFAULT_DOWNLOAD_DIR
