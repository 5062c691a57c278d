"""
Configuración de fixtures para pytest.

FakeDocumentStore reproduce en memoria la semántica que el core espera
del store: replace-por-clave con upsert y borrado por $in / $nin.
"""
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

import pytest

from sync_middleware.domain.entities import BulkWriteSummary, KeyFilter, UpsertOperation
from sync_middleware.domain.repositories.document_store import IDocumentStore
from sync_middleware.shared.exceptions.persistence import StoreWriteException


FIXED_NOW = datetime(2025, 12, 16, 10, 15, 0, tzinfo=timezone.utc)


class FakeDocumentStore(IDocumentStore):
    """Document store en memoria que registra cada llamada."""

    def __init__(self, collections: Optional[Dict[str, List[dict]]] = None, fail_on: Sequence[str] = ()):
        self.collections: Dict[str, List[dict]] = collections or {}
        self.fail_on = set(fail_on)
        self.calls: List[tuple] = []

    async def batch_write(self, collection: str, operations: Sequence[UpsertOperation]) -> BulkWriteSummary:
        self.calls.append(("batch_write", collection, list(operations)))
        if "batch_write" in self.fail_on:
            raise StoreWriteException("E11000 duplicate key error", collection=collection)

        docs = self.collections.setdefault(collection, [])
        matched = upserted = 0
        for op in operations:
            new_doc = {op.key_field: op.key, **op.document}
            index = next((i for i, d in enumerate(docs) if d.get(op.key_field) == op.key), None)
            if index is None:
                docs.append(new_doc)
                upserted += 1
            else:
                docs[index] = new_doc
                matched += 1
        return BulkWriteSummary(matched_count=matched, upserted_count=upserted, modified_count=matched)

    async def delete_many(self, collection: str, key_filter: KeyFilter) -> int:
        self.calls.append(("delete_many", collection, key_filter))
        if "delete_many" in self.fail_on:
            raise StoreWriteException("delete failed", collection=collection)

        docs = self.collections.get(collection, [])
        keys = set(key_filter.keys)

        def matches(doc: dict) -> bool:
            in_set = doc.get(key_filter.field) in keys
            return not in_set if key_filter.exclude else in_set

        kept = [d for d in docs if not matches(d)]
        self.collections[collection] = kept
        return len(docs) - len(kept)

    def keys(self, collection: str, field: str) -> set:
        return {d.get(field) for d in self.collections.get(collection, [])}

    def find_one(self, collection: str, field: str, key: Any) -> Optional[dict]:
        return next((d for d in self.collections.get(collection, []) if d.get(field) == key), None)

    def call_names(self) -> List[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def store() -> FakeDocumentStore:
    """Store vacío para cada test."""
    return FakeDocumentStore()


@pytest.fixture
def fixed_now():
    return FIXED_NOW


@pytest.fixture
def fixed_clock(fixed_now):
    return lambda: fixed_now


@pytest.fixture
def make_store():
    """Factory para stores con datos previos o fallos simulados."""
    def _make(collections: Optional[Dict[str, List[dict]]] = None, fail_on: Sequence[str] = ()) -> FakeDocumentStore:
        return FakeDocumentStore(collections=collections, fail_on=fail_on)
    return _make
