"""Base repository over a :class:`~restohub.core.storage.RecordStore`.

Architecture::

    ┌───────────────────────────────────────────────────────────┐
    │                   CollectionRepository                     │
    │                                                            │
    │   store: RecordStore                                       │
    │                                                            │
    │   _load(collection)              → list[dict]              │
    │   _save(collection, records)                               │
    │   _append(collection, record)                              │
    │   _upsert(collection, records, key)  → int                 │
    └───────────────────────────────────────────────────────────┘

Every write is load → change in memory → save of the whole collection.

Tags:
    repository, storage, upsert, restohub
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from restohub.core.storage import RecordStore

RecordKey = Callable[[dict[str, Any]], tuple]


class CollectionRepository:
    """Shared load/save helpers for collection-backed repositories."""

    def __init__(self, store: RecordStore) -> None:
        self.store = store

    def _load(self, collection: str) -> list[dict[str, Any]]:
        return self.store.load(collection)

    def _save(self, collection: str, records: list[dict[str, Any]]) -> None:
        self.store.save(collection, records)

    def _append(self, collection: str, record: dict[str, Any]) -> None:
        records = self._load(collection)
        records.append(record)
        self._save(collection, records)

    def _upsert(
        self,
        collection: str,
        incoming: Iterable[dict[str, Any]],
        key: RecordKey,
        *,
        move_to_end: bool = False,
    ) -> int:
        """Overlay ``incoming`` on the stored records by ``key``.

        Returns how many records were written. A replaced key counts the
        same as a new one. With ``move_to_end`` a replaced record takes the
        last position, so list order follows write order.
        """
        incoming = list(incoming)
        if not incoming:
            return 0

        merged = {key(r): r for r in self._load(collection)}
        for record in incoming:
            k = key(record)
            if move_to_end:
                merged.pop(k, None)
            merged[k] = record

        self._save(collection, list(merged.values()))
        return len(incoming)
