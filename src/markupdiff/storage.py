#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/markupdiff/storage.py
"""Key-value persistence for session state.

A store maps string keys to string values. :class:`DiffSession` only needs
``get`` and ``set``, so any object implementing :class:`KeyValueStore` can be
injected. Two implementations ship with the package:

- :class:`InMemoryStore` keeps everything in a dictionary (tests, one-off use)
- :class:`JsonFileStore` keeps one JSON object on disk and rewrites it on
  every ``set`` (last write wins)
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional, Protocol, Union, runtime_checkable

from markupdiff.constants import DEFAULT_STATE_DIR, STATE_DIR_ENV_VAR, STATE_FILENAME
from markupdiff.exceptions import StorageError

logger = logging.getLogger(__name__)


@runtime_checkable
class KeyValueStore(Protocol):
    """Minimal persistence interface used by the session."""

    def get(self, key: str) -> Optional[str]:
        """Return the stored value or ``None``."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``."""
        ...


class InMemoryStore:
    """Dictionary-backed store."""

    def __init__(self, initial: Optional[dict[str, str]] = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def __contains__(self, key: object) -> bool:
        return key in self._data


def default_state_path() -> Path:
    """Return the state file location.

    ``$MARKUPDIFF_STATE_DIR/state.json`` when the environment variable is set,
    ``~/.markupdiff/state.json`` otherwise.
    """
    state_dir = os.environ.get(STATE_DIR_ENV_VAR) or DEFAULT_STATE_DIR
    return Path(state_dir).expanduser() / STATE_FILENAME


class JsonFileStore:
    """Store backed by a single JSON file.

    The file holds a JSON object of key to string value. A missing file reads
    as empty; an unreadable or corrupt file raises :class:`StorageError`.

    Parameters
    ----------
    path : str or Path, optional
        Location of the state file, defaults to :func:`default_state_path`

    """

    def __init__(self, path: Union[str, Path, None] = None) -> None:
        self.path = Path(path) if path is not None else default_state_path()

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Cannot read state file {self.path}: {e}", original_error=e) from e
        if not isinstance(data, dict):
            raise StorageError(f"State file {self.path} must contain a JSON object, got {type(data).__name__}")
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except StorageError:
            logger.warning("Discarding unreadable state file %s", self.path)
            data = {}
        data[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise StorageError(f"Cannot write state file {self.path}: {e}", key=key, original_error=e) from e
