"""Client-local storage implementations."""

import json
import os
from pathlib import Path

import logfire

from invoicer.domain.repository import SessionStore


class InMemoryStore(SessionStore):
    """Store that lives as long as the process.

    Used for session-scoped state (the invite correlation token) and as the
    durable store in tests.
    """

    def __init__(self) -> None:
        """Initialize empty store."""
        self._values: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value

    def delete(self, key: str) -> None:
        self._values.pop(key, None)

    def clear(self) -> None:
        self._values.clear()


class JsonFileStore(SessionStore):
    """Durable store backed by a single JSON object on disk.

    Every write rewrites the file through a temporary sibling and an atomic
    rename, so a crash never leaves half a file behind. The file is created
    with owner-only permissions because it holds a bearer token.
    """

    def __init__(self, path: Path) -> None:
        """Initialize file store.

        Args:
            path: JSON file; parent directories are created on first write
        """
        self.path = path
        self._values = self._load()

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value
        self._flush()

    def delete(self, key: str) -> None:
        if self._values.pop(key, None) is not None:
            self._flush()

    def clear(self) -> None:
        self._values = {}
        self._flush()

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logfire.warn("Ignoring unreadable storage file", path=str(self.path), error=str(e))
            return {}
        if not isinstance(data, dict):
            logfire.warn("Ignoring storage file without a JSON object", path=str(self.path))
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _flush(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        fd = os.open(tmp, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            json.dump(self._values, fh)
        os.replace(tmp, self.path)
