"""
Gestión del cliente MongoDB.

Un único AsyncMongoClient (con pool) por proceso, creado de forma perezosa.
Cada request toma un lease explícito que le entrega un document store
ligado a la base configurada; no se comparte estado entre requests.
"""
from contextlib import asynccontextmanager
from typing import AsyncGenerator, AsyncIterator, Optional

from loguru import logger
from pymongo import AsyncMongoClient
from pymongo.errors import ConfigurationError

from sync_middleware.core.config import settings
from sync_middleware.infrastructure.database.mongo_store import MongoDocumentStore
from sync_middleware.shared.exceptions.persistence import StoreConnectionException


class MongoConnectionManager:
    """
    Dueño del cliente MongoDB compartido.

    Uso:
        async with MongoConnectionManager.lease() as store:
            await store.batch_write("Prompt", operations)
    """

    _client: Optional[AsyncMongoClient] = None

    @classmethod
    def get_client(cls) -> AsyncMongoClient:
        """
        Retorna el cliente compartido, creándolo si no existe.

        Raises:
            StoreConnectionException: si MONGO_URI falta o es inválida
        """
        if cls._client is not None:
            return cls._client

        if not settings.MONGO_URI:
            raise StoreConnectionException("MONGO_URI no configurada")

        try:
            cls._client = AsyncMongoClient(
                settings.MONGO_URI,
                maxPoolSize=settings.MONGO_MAX_POOL_SIZE,
                serverSelectionTimeoutMS=settings.MONGO_SERVER_SELECTION_TIMEOUT_MS,
            )
        except ConfigurationError as e:
            raise StoreConnectionException(f"MONGO_URI inválida: {e}") from e

        logger.info(f"Cliente MongoDB creado (pool max={settings.MONGO_MAX_POOL_SIZE})")
        return cls._client

    @classmethod
    @asynccontextmanager
    async def lease(cls) -> AsyncIterator[MongoDocumentStore]:
        """
        Entrega un document store para la duración de una llamada.

        El cliente se obtiene en la primera operación del store, no al
        abrir el lease.
        """
        store = MongoDocumentStore(lambda: cls.get_client()[settings.MONGO_DB_NAME])
        try:
            yield store
        finally:
            logger.debug(f"Lease de MongoDB liberado ({settings.MONGO_DB_NAME})")

    @classmethod
    async def close(cls) -> bool:
        """
        Cierra el cliente compartido si existe.

        Returns:
            bool: True si había un cliente abierto
        """
        if cls._client is None:
            return False
        client, cls._client = cls._client, None
        await client.close()
        return True


async def get_document_store() -> AsyncGenerator[MongoDocumentStore, None]:
    """
    Generador de document stores.
    Para usar como dependencia en FastAPI.

    Yields:
        MongoDocumentStore: Store ligado al lease del request
    """
    async with MongoConnectionManager.lease() as store:
        yield store


async def close_db() -> None:
    """Cierra las conexiones de la base de datos."""
    await MongoConnectionManager.close()
