"""
Implementación MongoDB (pymongo async) del document store.

Traduce las operaciones de dominio a operaciones del driver:
- UpsertOperation -> ReplaceOne(filter={key_field: key}, upsert=True)
- KeyFilter       -> {field: {"$in" | "$nin": [...]}}
"""
from __future__ import annotations

from typing import Any, Callable, Optional, Sequence

from loguru import logger
from pymongo import ReplaceOne
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import ConnectionFailure, PyMongoError

from sync_middleware.domain.entities import BulkWriteSummary, KeyFilter, UpsertOperation
from sync_middleware.domain.repositories.document_store import IDocumentStore
from sync_middleware.shared.exceptions.persistence import (
    StoreConnectionException,
    StoreWriteException,
)


def to_replace_one(operation: UpsertOperation) -> ReplaceOne:
    """Operación insert-or-replace por clave para bulk_write."""
    return ReplaceOne(
        {operation.key_field: operation.key},
        operation.document,
        upsert=True,
    )


def to_mongo_filter(key_filter: KeyFilter) -> dict[str, Any]:
    operator = "$nin" if key_filter.exclude else "$in"
    return {key_filter.field: {operator: list(key_filter.keys)}}


class MongoDocumentStore(IDocumentStore):
    """
    Document store sobre una base de datos MongoDB.

    Una instancia vive lo que dura un lease (un request); el pool de
    conexiones subyacente pertenece al cliente compartido. La base se
    resuelve en la primera operación, así la validación del lote ocurre
    antes de tocar el cliente.
    """

    def __init__(self, database_factory: Callable[[], AsyncDatabase]) -> None:
        self._database_factory = database_factory
        self._database: Optional[AsyncDatabase] = None

    def _collection(self, name: str) -> AsyncCollection:
        if self._database is None:
            self._database = self._database_factory()
        return self._database[name]

    async def batch_write(
        self,
        collection: str,
        operations: Sequence[UpsertOperation]
    ) -> BulkWriteSummary:
        if not operations:
            return BulkWriteSummary()

        try:
            requests = [to_replace_one(op) for op in operations]
            result = await self._collection(collection).bulk_write(requests, ordered=True)
        except ConnectionFailure as e:
            logger.error(f"[{collection}] Mongo no disponible durante UPSERT: {e}")
            raise StoreConnectionException(str(e), collection=collection) from e
        except (PyMongoError, ValueError) as e:
            logger.error(f"[{collection}] Error en bulk UPSERT: {e}")
            raise StoreWriteException(str(e), collection=collection) from e

        summary = BulkWriteSummary(
            matched_count=result.matched_count,
            upserted_count=result.upserted_count,
            modified_count=result.modified_count,
        )
        logger.info(f"[{collection}] Mongo UPSERT result: {summary}")
        return summary

    async def delete_many(self, collection: str, key_filter: KeyFilter) -> int:
        try:
            result = await self._collection(collection).delete_many(to_mongo_filter(key_filter))
        except ConnectionFailure as e:
            logger.error(f"[{collection}] Mongo no disponible durante DELETE: {e}")
            raise StoreConnectionException(str(e), collection=collection) from e
        except PyMongoError as e:
            logger.error(f"[{collection}] Error en DELETE: {e}")
            raise StoreWriteException(str(e), collection=collection) from e

        logger.info(f"[{collection}] Mongo DELETE result: deleted={result.deleted_count}")
        return result.deleted_count
