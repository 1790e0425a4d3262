"""JSON-backed local content store.

Stands in for the CMS when working offline or in tests.  Persists
every collection in a single JSON file, loaded on init and saved after
every write operation.  Exposes the same query/update surface as the
CMS REST client so maintenance procedures can run against either.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Iterator
from pathlib import Path
from typing import Any, Protocol

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

STORE_FILENAME = ".schoerke-content-store.json"

Record = dict[str, Any]
Where = dict[str, Any]


class FindResult(BaseModel):
    """One page of query results, shaped like the CMS's paginated response."""

    docs: list[Record] = Field(default_factory=list)
    total_docs: int = 0
    limit: int = 10
    page: int = 1
    total_pages: int = 1

    @property
    def has_next_page(self) -> bool:
        return self.page < self.total_pages


class ContentBackend(Protocol):
    """Query/update surface shared by the local store and the CMS client."""

    def find(
        self, collection: str, *, where: Where | None = None, limit: int = 10, page: int = 1
    ) -> FindResult: ...

    def create(self, collection: str, data: Record) -> Record: ...

    def update(self, collection: str, record_id: int, patch: Record) -> Record: ...

    def delete(self, collection: str, record_id: int) -> None: ...


def find_all(
    backend: ContentBackend,
    collection: str,
    *,
    where: Where | None = None,
    page_size: int = 100,
) -> Iterator[Record]:
    """Yield every matching record, fetching one page at a time."""
    page = 1
    while True:
        result = backend.find(collection, where=where, limit=page_size, page=page)
        yield from result.docs
        if not result.has_next_page:
            return
        page += 1


def matches(record: Record, where: Where | None) -> bool:
    """Equality filter; a ``None`` condition matches missing or empty values."""
    if not where:
        return True
    for field, expected in where.items():
        actual = record.get(field)
        if expected is None:
            if actual not in (None, ""):
                return False
        elif actual != expected:
            return False
    return True


class _StoreData(BaseModel):
    """Internal wrapper for JSON serialization."""

    next_id: int = 1
    collections: dict[str, list[Record]] = Field(default_factory=dict)


class ContentStore:
    """JSON-backed CRUD store for CMS-shaped records.

    Loads the store file on init and saves after every mutation.
    """

    def __init__(self, output_dir: Path) -> None:
        self._path = output_dir / STORE_FILENAME
        self._data = self._load()

    # ── Private helpers ──────────────────────────────────────────

    def _load(self) -> _StoreData:
        if not self._path.exists():
            return _StoreData()
        try:
            raw = json.loads(self._path.read_text(encoding="utf-8"))
            return _StoreData.model_validate(raw)
        except (json.JSONDecodeError, ValueError, KeyError):
            logger.warning("Corrupt content store at %s, starting fresh", self._path)
            return _StoreData()

    def _save(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(
            self._data.model_dump_json(indent=2),
            encoding="utf-8",
        )

    def _records(self, collection: str) -> list[Record]:
        return self._data.collections.setdefault(collection, [])

    def _require(self, collection: str, record_id: int) -> Record:
        for record in self._records(collection):
            if record.get("id") == record_id:
                return record
        raise KeyError(f"{collection}/{record_id}")

    # ── Write operations ─────────────────────────────────────────

    def create(self, collection: str, data: Record) -> Record:
        """Insert a record and assign it the next free id."""
        record = {**data, "id": self._data.next_id}
        self._data.next_id += 1
        self._records(collection).append(record)
        self._save()
        return dict(record)

    def update(self, collection: str, record_id: int, patch: Record) -> Record:
        """Apply a partial patch to a record.

        Raises KeyError if the record does not exist.
        """
        record = self._require(collection, record_id)
        record.update({k: v for k, v in patch.items() if k != "id"})
        self._save()
        return dict(record)

    def delete(self, collection: str, record_id: int) -> None:
        """Remove a record.

        Raises KeyError if the record does not exist.
        """
        record = self._require(collection, record_id)
        self._records(collection).remove(record)
        self._save()

    # ── Read operations ──────────────────────────────────────────

    def get(self, collection: str, record_id: int) -> Record | None:
        """Return a record by id, or None if not found."""
        try:
            return dict(self._require(collection, record_id))
        except KeyError:
            return None

    def find(
        self,
        collection: str,
        *,
        where: Where | None = None,
        limit: int = 10,
        page: int = 1,
    ) -> FindResult:
        """Return one page of records, optionally filtered by ``where``."""
        if limit < 1 or page < 1:
            raise ValueError("limit and page must be positive")
        matching = [r for r in self._records(collection) if matches(r, where)]
        start = (page - 1) * limit
        return FindResult(
            docs=[dict(r) for r in matching[start : start + limit]],
            total_docs=len(matching),
            limit=limit,
            page=page,
            total_pages=max(1, math.ceil(len(matching) / limit)),
        )
