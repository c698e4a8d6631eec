"""
Client configuration.

Read from the environment with django-environ, the same way the backend
settings are:

    CAMPUS_API_URL         REST base URL (default http://localhost:8000/api/v1)
    CAMPUS_WS_URL          Realtime endpoint (default derived from the API URL)
    CAMPUS_TOKEN           JWT access token
    CAMPUS_PAGE_SIZE       Message window page size (default 50)
    CAMPUS_TYPING_TIMEOUT  Seconds after the last keystroke before the
                           local typing flag clears (default 3)
"""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit, urlunsplit

import environ

DEFAULT_API_URL = "http://localhost:8000/api/v1"
REALTIME_PATH = "/ws/realtime/"


def realtime_url_for(base_url: str) -> str:
    """``http://host/api/v1`` -> ``ws://host/ws/realtime/``"""
    parts = urlsplit(base_url)
    scheme = "wss" if parts.scheme == "https" else "ws"
    return urlunsplit((scheme, parts.netloc, REALTIME_PATH, "", ""))


@dataclass(frozen=True)
class ClientConfig:
    base_url: str = DEFAULT_API_URL
    ws_url: str | None = None
    token: str | None = None
    page_size: int = 50
    typing_timeout: float = 3.0

    def __post_init__(self):
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        if not self.ws_url:
            object.__setattr__(self, "ws_url", realtime_url_for(self.base_url))

    @classmethod
    def from_env(cls, env: environ.Env | None = None) -> ClientConfig:
        env = env or environ.Env()
        return cls(
            base_url=env.str("CAMPUS_API_URL", default=DEFAULT_API_URL),
            ws_url=env.str("CAMPUS_WS_URL", default="") or None,
            token=env.str("CAMPUS_TOKEN", default="") or None,
            page_size=env.int("CAMPUS_PAGE_SIZE", default=50),
            typing_timeout=env.float("CAMPUS_TYPING_TIMEOUT", default=3.0),
        )
