from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

DEFAULT_API_URL = "http://localhost:4000"
DEFAULT_STORAGE_PATH = "~/.guidely/storage.json"
DEFAULT_TIMEOUT_SECONDS = 10.0

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClientConfig:
    # Auth API / REST backend
    api_base_url: str
    request_timeout_seconds: float

    # Durable session storage (JSON key/value file)
    storage_path: str

    # Google Identity Services (optional)
    google_client_id: Optional[str]

    @property
    def google_enabled(self) -> bool:
        """Google sign-in is offered only when a client ID is configured."""
        return bool(self.google_client_id)

    def url(self, path: str) -> str:
        return f"{self.api_base_url}/{path.lstrip('/')}"


@lru_cache(maxsize=1)
def load_client_config() -> ClientConfig:
    """
    Load client configuration from environment variables.

    GUIDELY_API_URL defaults to the local backend (http://localhost:4000).
    Google sign-in is enabled if GUIDELY_GOOGLE_CLIENT_ID is set.
    """
    base = (os.getenv("GUIDELY_API_URL", "") or "").strip() or DEFAULT_API_URL
    base = base.rstrip("/")

    raw_timeout = (os.getenv("GUIDELY_HTTP_TIMEOUT_SECONDS", "") or "").strip()
    try:
        timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT_SECONDS
    except ValueError:
        logger.warning(
            "Ignoring GUIDELY_HTTP_TIMEOUT_SECONDS=%r (not a number); using %ss", raw_timeout, DEFAULT_TIMEOUT_SECONDS
        )
        timeout = DEFAULT_TIMEOUT_SECONDS
    if not timeout >= 1:
        timeout = 1.0

    storage_path = (os.getenv("GUIDELY_STORAGE_PATH", "") or "").strip() or DEFAULT_STORAGE_PATH

    return ClientConfig(
        api_base_url=base,
        request_timeout_seconds=timeout,
        storage_path=os.path.expanduser(storage_path),
        google_client_id=(os.getenv("GUIDELY_GOOGLE_CLIENT_ID", "") or "").strip() or None,
    )
