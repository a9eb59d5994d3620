"""
Collection-oriented record store (SYNC-ONLY).

Repositories see storage as named collections of JSON-compatible records.
A collection is always loaded whole, changed in memory and written back
whole; the backend only has to make that write atomic.

Manifesto:
    The pipeline's guarantees (append-only staging and audit, upsert by
    natural key) live in the repositories, not in the store. Any backend
    that can load and atomically replace a list of records is a valid
    substitute:

    - **JsonFileStore:** one ``<collection>.json`` file per collection,
      written to a temp file and moved into place with ``os.replace``
    - **MemoryStore:** dict of lists, for tests and dry runs

Architecture:
    ::

        Repository (staging, canonical, products, published, audit)
            │  load(collection) → list[dict]
            │  save(collection, records)
            ▼
        ┌──────────────────────────┐
        │  RecordStore (Protocol)  │
        └────────────┬─────────────┘
             ┌───────┴────────┐
        JsonFileStore     MemoryStore

Guardrails:
    - There is no locking between processes. Two writers that load the
      same collection and save it race, and the later save wins.
    - A write failure leaves the previous file intact and raises
      :class:`StorageError`.
    - A file that is not a JSON array raises :class:`StorageError`
      instead of being silently treated as empty.

Tags:
    storage, protocol, json, atomic-write, restohub
"""

from __future__ import annotations

import copy
import json
import os
import re
import tempfile
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from restohub.core.errors import StorageError
from restohub.core.logging import get_logger

logger = get_logger(__name__)

_COLLECTION_NAME = re.compile(r"^[a-z0-9][a-z0-9_-]*$")


def check_collection_name(name: str) -> str:
    """Collection names double as file names; keep them to a safe alphabet."""
    if not _COLLECTION_NAME.match(name):
        raise StorageError(f"Invalid collection name: {name!r}").with_context(collection=name)
    return name


@runtime_checkable
class RecordStore(Protocol):
    """Abstract SYNCHRONOUS store of named record collections."""

    def load(self, collection: str) -> list[dict[str, Any]]:
        """Return every record of ``collection`` (empty if it does not exist)."""
        ...

    def save(self, collection: str, records: list[dict[str, Any]]) -> None:
        """Atomically replace the contents of ``collection``."""
        ...


class MemoryStore:
    """In-process store. Records are deep-copied on the way in and out."""

    def __init__(self) -> None:
        self._collections: dict[str, list[dict[str, Any]]] = {}

    def load(self, collection: str) -> list[dict[str, Any]]:
        check_collection_name(collection)
        return copy.deepcopy(self._collections.get(collection, []))

    def save(self, collection: str, records: list[dict[str, Any]]) -> None:
        check_collection_name(collection)
        self._collections[collection] = copy.deepcopy(records)

    def collections(self) -> list[str]:
        return sorted(self._collections)


class JsonFileStore:
    """
    One pretty-printed JSON array per collection under ``root``.

    Writes go to a temp file in the same directory, are flushed and
    fsynced, then moved over the target with ``os.replace`` so readers
    never observe a half-written collection.
    """

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root).expanduser()

    def path_for(self, collection: str) -> Path:
        return self.root / f"{check_collection_name(collection)}.json"

    def load(self, collection: str) -> list[dict[str, Any]]:
        path = self.path_for(collection)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as e:
            raise StorageError(f"Failed to read {path}", cause=e).with_context(
                collection=collection
            ) from e

        if not text.strip():
            return []
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise StorageError(f"Corrupt collection file {path}", cause=e).with_context(
                collection=collection
            ) from e
        if not isinstance(data, list):
            raise StorageError(f"Collection file {path} is not a JSON array").with_context(
                collection=collection
            )
        return data

    def save(self, collection: str, records: list[dict[str, Any]]) -> None:
        path = self.path_for(collection)
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            payload = json.dumps(records, indent=2, ensure_ascii=False)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{collection}.", suffix=".tmp", dir=self.root)
        except (OSError, TypeError, ValueError) as e:
            raise StorageError(f"Failed to prepare write of {path}", cause=e).with_context(
                collection=collection
            ) from e

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, path)
        except OSError as e:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise StorageError(f"Failed to write {path}", cause=e).with_context(
                collection=collection
            ) from e

        logger.debug("collection_saved", collection=collection, records=len(records))

    def collections(self) -> list[str]:
        if not self.root.exists():
            return []
        return sorted(p.stem for p in self.root.glob("*.json"))
