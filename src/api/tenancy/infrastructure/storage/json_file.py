"""Durable key/value backend stored as a JSON object on disk.

Writes replace the file atomically. Listeners in this process are
notified on every write; writes from other processes are detected by
poll(), which compares the file against the last known contents.
"""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Callable
from pathlib import Path

from shared_kernel.pubsub import Broadcaster, Subscription
from tenancy.ports.persistence import StorageChange


class JsonFileKeyValueBackend:
    """KeyValueBackend persisted to a single JSON file.

    Raises OSError for I/O failures and ValueError for a file that does not
    contain a JSON object; callers wrap both.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        self._changes: Broadcaster[StorageChange] = Broadcaster()
        self._snapshot: dict[str, str] | None = None

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, str]:
        if not self._path.exists():
            return {}

        raw = self._path.read_text(encoding="utf-8")
        if not raw.strip():
            return {}

        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError(f"{self._path} does not contain a JSON object")
        return {str(key): str(value) for key, value in data.items() if value is not None}

    def _dump(self, values: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(values, f, indent=2, sort_keys=True)
            os.replace(tmp_name, self._path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def get(self, key: str) -> str | None:
        values = self._load()
        self._snapshot = values
        return values.get(key)

    def set(self, key: str, value: str, origin: str | None = None) -> None:
        values = self._load()
        old_value = values.get(key)
        values[key] = value
        self._dump(values)
        self._snapshot = values
        self._changes.publish(
            StorageChange(key=key, old_value=old_value, new_value=value, origin=origin)
        )

    def subscribe(self, listener: Callable[[StorageChange], None]) -> Subscription:
        return self._changes.subscribe(listener)

    def poll(self) -> list[StorageChange]:
        """Detect writes made by other processes since the last read.

        Emits a StorageChange with no origin for every key whose value
        differs from the last known snapshot, and returns them.
        """
        current = self._load()
        previous = self._snapshot
        self._snapshot = current

        if previous is None:
            return []

        changes = [
            StorageChange(key=key, old_value=previous.get(key), new_value=current.get(key))
            for key in sorted(previous.keys() | current.keys())
            if previous.get(key) != current.get(key)
        ]
        for change in changes:
            self._changes.publish(change)
        return changes
