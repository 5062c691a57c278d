"""
Interfaz del document store (gateway de persistencia).
Define el contrato que debe cumplir cualquier implementación.
"""
from abc import ABC, abstractmethod
from typing import Sequence

from sync_middleware.domain.entities import BulkWriteSummary, KeyFilter, UpsertOperation


class IDocumentStore(ABC):
    """
    Interfaz del document store.
    Ejecuta lotes de escritura contra una colección nombrada; sin lógica de negocio.
    """

    @abstractmethod
    async def batch_write(
        self,
        collection: str,
        operations: Sequence[UpsertOperation]
    ) -> BulkWriteSummary:
        """
        Envía todas las operaciones en un único batch.

        Args:
            collection: Nombre de la colección destino
            operations: Upserts a aplicar, en orden

        Returns:
            BulkWriteSummary: Conteos matched/upserted/modified

        Raises:
            StoreConnectionException: si el store no es alcanzable
            StoreWriteException: si el batch falla (posiblemente aplicado a medias)
        """
        pass

    @abstractmethod
    async def delete_many(self, collection: str, key_filter: KeyFilter) -> int:
        """
        Elimina los documentos que cumplen el predicado por claves.

        Args:
            collection: Nombre de la colección destino
            key_filter: Predicado $in / $nin sobre el campo identidad

        Returns:
            int: Número de documentos eliminados
        """
        pass
