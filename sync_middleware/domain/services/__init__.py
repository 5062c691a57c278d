"""
Servicios de dominio puros (identidad y deduplicación).
"""
from sync_middleware.domain.services.identity import (
    normalize_identity,
    extract_identity,
    extract_version_id,
    extract_parent_id,
    extract_dependency_id,
)
from sync_middleware.domain.services.deduplication import deduplicate_dependents

__all__ = [
    "normalize_identity",
    "extract_identity",
    "extract_version_id",
    "extract_parent_id",
    "extract_dependency_id",
    "deduplicate_dependents",
]
