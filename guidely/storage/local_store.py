"""Durable key/value storage on the local filesystem (the client's "local storage")."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional

logger = logging.getLogger(__name__)


@dataclass
class LocalStorage:
    """
    String key/value store persisted to a single JSON file.

    Every write replaces the whole file atomically, so a multi-key update
    (e.g. `token` + `user`) is observed entirely or not at all by a reader.
    """

    path: str

    def __post_init__(self) -> None:
        """Ensure parent directory exists."""
        self.path = os.path.abspath(os.path.expanduser(self.path))
        Path(self.path).parent.mkdir(parents=True, exist_ok=True)

    def _read_all(self) -> Dict[str, str]:
        p = Path(self.path)
        if not p.exists():
            return {}
        try:
            data = json.loads(p.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable storage file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring storage file %s: expected a JSON object", self.path)
            return {}
        # Values are strings by contract; drop anything else.
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, items: Mapping[str, str]) -> None:
        directory = os.path.dirname(self.path)
        fd, tmp = tempfile.mkstemp(prefix=".storage-", suffix=".json", dir=directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(dict(items), f, sort_keys=True, indent=2)
            os.replace(tmp, self.path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise

    def get_item(self, key: str) -> Optional[str]:
        """Return the stored string for `key`, or None."""
        return self._read_all().get(key)

    def keys(self) -> List[str]:
        return sorted(self._read_all().keys())

    def set_items(self, items: Mapping[str, str]) -> None:
        """Write several keys in one atomic update."""
        data = self._read_all()
        for k, v in items.items():
            if not isinstance(v, str):
                raise TypeError(f"storage values must be strings (key={k!r})")
            data[k] = v
        self._write_all(data)

    def remove_items(self, keys: Iterable[str]) -> None:
        """Remove several keys in one atomic update. Missing keys are ignored."""
        data = self._read_all()
        for k in keys:
            data.pop(k, None)
        self._write_all(data)
