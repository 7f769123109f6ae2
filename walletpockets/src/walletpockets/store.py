"""
Persistence for pocket data.

The registry only needs two things from a store: ``init(key, default)``, which
returns the live object stored under ``key`` (seeding ``default`` when the key
is absent), and ``save()``, which makes the current contents durable. Callers
mutate the returned object in place and then call ``save()``.

HD pocket records live under the ``"pockets"`` key as an ordered list whose
positions are the pocket ids. :class:`PocketSlots` wraps that list so deleted
pockets leave a ``None`` tombstone instead of shifting their neighbours.
"""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Iterator, MutableSequence
from pathlib import Path
from typing import Any, Protocol

from loguru import logger
from pydantic import ValidationError
from pydantic_core import to_jsonable_python

from walletpockets.errors import StoreError
from walletpockets.models import PocketRecord

POCKETS_KEY = "pockets"


class Store(Protocol):
    def init(self, key: str, default: Any) -> Any: ...

    def save(self) -> None: ...


class MemoryStore:
    """Dict-backed store, mostly useful for tests and embedding."""

    def __init__(self, data: dict[str, Any] | None = None):
        self.data: dict[str, Any] = data if data is not None else {}
        self.save_count = 0

    def init(self, key: str, default: Any) -> Any:
        return self.data.setdefault(key, default)

    def save(self) -> None:
        self.save_count += 1


class JsonFileStore:
    """Store persisted as a single JSON object on disk."""

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._data: dict[str, Any] | None = None

    @property
    def data(self) -> dict[str, Any]:
        if self._data is None:
            self._data = self._load()
        return self._data

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            logger.debug(f"No store at {self.path}, starting empty")
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Failed to read store {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StoreError(f"Store {self.path} does not contain a JSON object")
        return data

    def init(self, key: str, default: Any) -> Any:
        return self.data.setdefault(key, default)

    def save(self) -> None:
        payload = json.dumps(to_jsonable_python(self.data), indent=2)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Write to a sibling temp file and rename so a crash never leaves half a file
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self.path)
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise StoreError(f"Failed to write store {self.path}: {e}") from e
        logger.trace(f"Saved store to {self.path}")


class PocketSlots:
    """
    Ordered HD pocket records with tombstones.

    Wraps the list held by the store without copying it, so every mutation
    made here is what the next ``save()`` writes. Slots are never removed:
    deleting a pocket stores ``None`` at its index and every other pocket
    keeps its id.
    """

    def __init__(self, raw: MutableSequence[Any]):
        self.raw = raw
        for i, entry in enumerate(raw):
            if entry is None or isinstance(entry, PocketRecord):
                continue
            try:
                raw[i] = PocketRecord(**entry)
            except (TypeError, ValidationError) as e:
                raise StoreError(f"Invalid pocket record at slot {i}: {entry!r}") from e

    def __len__(self) -> int:
        return len(self.raw)

    def __getitem__(self, index: int) -> PocketRecord | None:
        return self.raw[index]

    def __iter__(self) -> Iterator[PocketRecord | None]:
        return iter(self.raw)

    def live(self) -> Iterator[tuple[int, PocketRecord]]:
        """Yield ``(index, record)`` for every slot that is not a tombstone."""
        for i, record in enumerate(self.raw):
            if record is not None:
                yield i, record

    def append(self, record: PocketRecord) -> int:
        self.raw.append(record)
        return len(self.raw) - 1

    def tombstone(self, index: int) -> PocketRecord | None:
        old = self.raw[index]
        self.raw[index] = None
        return old

    def find_by_name(self, name: str) -> int | None:
        for i, record in self.live():
            if record.name == name:
                return i
        return None
