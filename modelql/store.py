"""In-memory record store.

One ordered partition per model type name. Partitions are created on first
write and read as empty when absent. Each partition has its own identifier
counter: ids are decimal strings, assigned in increasing order and never
reused, including after a delete.

All access goes through one re-entrant lock. Reads and writes hand out
shallow copies of records, so assigning fields of a returned record never
changes the store; only ``update`` does. Update and delete build a new partition list and
swap it in, so a reader never sees a half-replaced partition.
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Iterator, List, Mapping, Optional

from .core.naming import ID_FIELD

__all__ = ['Record', 'Store']

_logger = logging.getLogger("modelql")

Record = Dict[str, Any]


class Store:
    """Process-lifetime record storage shared by all generated resolvers."""

    def __init__(self) -> None:
        self._partitions: Dict[str, List[Record]] = {}
        self._counters: Dict[str, int] = {}
        self._lock = threading.RLock()

    @property
    def lock(self) -> threading.RLock:
        """The store lock, for callers that need several operations to be atomic."""
        return self._lock

    def partition(self, type_name: str) -> List[Record]:
        """Return a snapshot of the partition (empty when it does not exist)."""
        with self._lock:
            return [dict(r) for r in self._partitions.get(type_name, ())]

    def type_names(self) -> List[str]:
        with self._lock:
            return list(self._partitions.keys())

    def __contains__(self, type_name: object) -> bool:
        with self._lock:
            return type_name in self._partitions

    def __iter__(self) -> Iterator[str]:
        return iter(self.type_names())

    def get(self, type_name: str, record_id: Any) -> Optional[Record]:
        """Return the record with identifier ``record_id`` or None."""
        if record_id is None:
            return None
        key = str(record_id)
        with self._lock:
            for record in self._partitions.get(type_name, ()):
                if record.get(ID_FIELD) == key:
                    return dict(record)
        return None

    def get_many(self, type_name: str, record_ids: Any) -> List[Record]:
        """Return records whose identifier is in ``record_ids``, in partition order."""
        keys = {str(i) for i in (record_ids or ()) if i is not None}
        if not keys:
            return []
        with self._lock:
            return [dict(r) for r in self._partitions.get(type_name, ()) if r.get(ID_FIELD) in keys]

    def _next_id(self, type_name: str) -> str:
        value = self._counters.get(type_name, 0)
        self._counters[type_name] = value + 1
        return str(value)

    def insert(self, type_name: str, payload: Optional[Mapping[str, Any]]) -> Record:
        """Append a new record built from ``payload`` and return it.

        A stale ``id`` in the payload is overwritten by the allocated one.
        """
        with self._lock:
            record: Record = dict(payload or {})
            record[ID_FIELD] = self._next_id(type_name)
            self._partitions.setdefault(type_name, []).append(record)
        _logger.debug("created %s %s", type_name, record[ID_FIELD])
        return dict(record)

    def update(self, type_name: str, record_id: Any, changes: Optional[Mapping[str, Any]]) -> Optional[Record]:
        """Shallow-merge ``changes`` into the record with ``record_id``.

        Returns the merged record, or None (store untouched) when no record has
        that identifier. The identifier itself cannot be changed.
        """
        key = str(record_id)
        with self._lock:
            current = self._partitions.get(type_name, [])
            updated: Optional[Record] = None
            new_partition: List[Record] = []
            for record in current:
                if updated is None and record.get(ID_FIELD) == key:
                    updated = {**record, **dict(changes or {}), ID_FIELD: key}
                    new_partition.append(updated)
                else:
                    new_partition.append(record)
            if updated is None:
                return None
            self._partitions[type_name] = new_partition
        _logger.debug("updated %s %s", type_name, key)
        return dict(updated)

    def delete(self, type_name: str, record_id: Any) -> bool:
        """Remove the record with ``record_id``; False (store untouched) when absent."""
        key = str(record_id)
        with self._lock:
            current = self._partitions.get(type_name, [])
            remaining = [r for r in current if r.get(ID_FIELD) != key]
            if len(remaining) == len(current):
                return False
            self._partitions[type_name] = remaining
        _logger.debug("deleted %s %s", type_name, key)
        return True

    def reset(self) -> None:
        """Drop every partition and identifier counter."""
        with self._lock:
            self._partitions.clear()
            self._counters.clear()

    def snapshot(self) -> Dict[str, List[Record]]:
        with self._lock:
            return {name: [dict(r) for r in records] for name, records in self._partitions.items()}

    def __repr__(self) -> str:
        with self._lock:
            sizes = {name: len(records) for name, records in self._partitions.items()}
        return f"Store({sizes})"
