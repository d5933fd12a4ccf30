"""
Pytest config.

Tests import the local `guidely/` package from the repo root. When a global
`pytest` entrypoint is used that doesn't happen reliably during collection,
so we pin the repo root on sys.path here.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Optional
from unittest.mock import MagicMock

import pytest


def _ensure_repo_root_on_syspath() -> None:
    repo_root = Path(__file__).resolve().parents[1]
    repo_root_str = str(repo_root)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


_ensure_repo_root_on_syspath()

from guidely.auth.config import load_client_config  # noqa: E402
from guidely.auth.session import Session  # noqa: E402
from guidely.storage.local_store import LocalStorage  # noqa: E402


def fake_response(status_code: int, body: Optional[Any] = None) -> MagicMock:
    """A `requests.Response` stand-in. `body=None` makes `.json()` raise like a non-JSON body."""
    r = MagicMock()
    r.status_code = status_code
    if body is None:
        r.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        r.json.return_value = body
    return r


@pytest.fixture
def cfg(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.setenv("GUIDELY_API_URL", "http://api.test")
    monkeypatch.setenv("GUIDELY_STORAGE_PATH", str(tmp_path / "storage.json"))
    monkeypatch.delenv("GUIDELY_HTTP_TIMEOUT_SECONDS", raising=False)
    monkeypatch.delenv("GUIDELY_GOOGLE_CLIENT_ID", raising=False)
    load_client_config.cache_clear()
    yield load_client_config()
    load_client_config.cache_clear()


@pytest.fixture
def storage(cfg) -> LocalStorage:
    return LocalStorage(cfg.storage_path)


@pytest.fixture
def session(storage: LocalStorage) -> Session:
    s = Session(storage)
    s.restore()
    return s


@pytest.fixture
def make_response():
    return fake_response
