"""
Tipos puros que describen las mutaciones enviadas al document store.

Se mantienen libres de I/O y de pymongo para poder testearlos fácilmente;
la traducción a operaciones del driver vive en infraestructura.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .records import Identity


@dataclass(frozen=True)
class UpsertOperation:
    """
    Insert-or-replace por clave.

    - key_field: campo que identifica el slot del documento
    - key: valor de la identidad
    - document: documento completo de reemplazo
    """

    key_field: str
    key: Identity
    document: dict[str, Any]


@dataclass(frozen=True)
class KeyFilter:
    """
    Predicado de borrado por conjunto de claves.

    exclude=False -> documentos cuya clave está en `keys` ($in)
    exclude=True  -> documentos cuya clave NO está en `keys` ($nin)
    """

    field: str
    keys: tuple[Identity, ...] = field(default_factory=tuple)
    exclude: bool = False


@dataclass(frozen=True)
class BulkWriteSummary:
    """Conteos devueltos por el store tras un batch de upserts."""

    matched_count: int = 0
    upserted_count: int = 0
    modified_count: int = 0
