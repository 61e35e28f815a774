"""
In-memory document store.

Used when STORAGE_BACKEND=memory (local development and tests). Mirrors the
guarantees the Supabase schema gives the repositories: generated ids and
timestamps, single-document atomic writes and declared unique keys. A unique
key ignores documents where any of its fields is None, like a partial index.
"""

import threading
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Callable, Iterator, Optional

from .exceptions import DuplicateRecordError

Document = dict[str, Any]


class MemoryCollection:
    """A named set of documents with optional unique keys."""

    def __init__(self, name: str, lock: threading.RLock, unique: list[tuple[str, ...]]):
        self.name = name
        self._lock = lock
        self._unique = unique
        self._docs: dict[str, Document] = {}

    def _check_unique(self, doc: Document, ignore_id: Optional[str] = None) -> None:
        for fields in self._unique:
            key = {f: doc.get(f) for f in fields}
            if any(v is None for v in key.values()):
                continue
            for other in self._docs.values():
                if other["id"] == ignore_id:
                    continue
                if all(other.get(f) == v for f, v in key.items()):
                    raise DuplicateRecordError(self.name, key)

    def insert(self, data: Document) -> Document:
        """Insert a document, assigning id and timestamps."""
        with self._lock:
            now = datetime.now(timezone.utc)
            doc = {
                **data,
                "id": str(uuid.uuid4()),
                "created_at": now,
                "updated_at": now,
            }
            self._check_unique(doc)
            self._docs[doc["id"]] = doc
            return dict(doc)

    def find(self, predicate: Callable[[Document], bool] = lambda d: True) -> list[Document]:
        """Return copies of matching documents, newest first."""
        with self._lock:
            matches = [dict(d) for d in reversed(self._docs.values()) if predicate(d)]
        matches.sort(key=lambda d: d["created_at"], reverse=True)
        return matches

    def find_one(self, predicate: Callable[[Document], bool]) -> Optional[Document]:
        matches = self.find(predicate)
        return matches[0] if matches else None

    def update(self, doc_id: str, fields: Document) -> Optional[Document]:
        """Apply ``fields`` to one document. Returns the new version or None."""
        with self._lock:
            current = self._docs.get(doc_id)
            if current is None:
                return None
            updated = {
                **current,
                **fields,
                "id": doc_id,
                "updated_at": datetime.now(timezone.utc),
            }
            self._check_unique(updated, ignore_id=doc_id)
            self._docs[doc_id] = updated
            return dict(updated)

    def update_many(self, predicate: Callable[[Document], bool], fields: Document) -> int:
        """Apply ``fields`` to every matching document. Returns the count."""
        with self._lock:
            ids = [d["id"] for d in self._docs.values() if predicate(d)]
            for doc_id in ids:
                self.update(doc_id, fields)
            return len(ids)

    def delete(self, doc_id: str) -> Optional[Document]:
        """Remove one document, returning it if it existed."""
        with self._lock:
            return self._docs.pop(doc_id, None)

    def __len__(self) -> int:
        return len(self._docs)


class MemoryStore:
    """
    Collection registry sharing one re-entrant lock.

    Holding ``transaction()`` makes a sequence of writes across collections
    atomic with respect to every other store operation.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._collections: dict[str, MemoryCollection] = {}

    def collection(self, name: str, unique: Optional[list[tuple[str, ...]]] = None) -> MemoryCollection:
        """Get or create a collection. ``unique`` is only read on creation."""
        with self._lock:
            if name not in self._collections:
                self._collections[name] = MemoryCollection(name, self._lock, unique or [])
            return self._collections[name]

    @contextmanager
    def transaction(self) -> Iterator[None]:
        with self._lock:
            yield
