"""
Endpoints de sincronizacion Salesforce -> MongoDB.

El cuerpo de cada request es un arreglo JSON de registros. Se recibe sin
tipar para que un cuerpo vacio o no-arreglo responda 400 (no 422); un
cuerpo que no es JSON valido se traduce al mismo 400 en main.py
(empty_payload_message).
"""
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, status

from sync_middleware.application.dto.sync_dto import (
    ErrorResponseDTO,
    RecordSyncResultDTO,
    SnapshotSyncResultDTO,
)
from sync_middleware.application.use_cases.record_sync_use_cases import RecordSyncUseCases
from sync_middleware.application.use_cases.snapshot_sync_use_cases import (
    EMPTY_SNAPSHOT_MESSAGE,
    DependencySnapshotUseCases,
)
from sync_middleware.api.v1.dependencies.use_case_deps import (
    get_record_sync_use_cases,
    get_snapshot_sync_use_cases,
)
from sync_middleware.core.config import settings
from sync_middleware.shared.exceptions.domain import EmptyPayloadException


router = APIRouter(tags=["Sync"])

_ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorResponseDTO},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponseDTO},
}


def empty_payload_message(path: str) -> str:
    """Mensaje 400 de la ruta cuando su cuerpo no es un arreglo utilizable."""
    if path == "/sync_member_dependencies":
        return EMPTY_SNAPSHOT_MESSAGE
    return EmptyPayloadException().message


def resolve_domain(domain: Optional[str]) -> str:
    """Coleccion destino: el parametro `domain` o DEFAULT_DOMAIN si viene vacio."""
    if domain and domain.strip():
        return domain.strip()
    return settings.DEFAULT_DOMAIN


@router.post(
    "/sync_prompt_versions",
    response_model=RecordSyncResultDTO,
    status_code=status.HTTP_200_OK,
    responses=_ERROR_RESPONSES,
    summary="UPSERT de versiones de prompt"
)
async def sync_prompt_versions(
    payload: Any = Body(default=None),
    domain: Optional[str] = Query(default=None, description="Coleccion destino"),
    use_cases: RecordSyncUseCases = Depends(get_record_sync_use_cases)
) -> RecordSyncResultDTO:
    """
    Inserta o reemplaza cada registro por su identidad.

    Los registros sin identidad se omiten; `count` refleja los escritos.
    """
    return await use_cases.upsert_records(payload, resolve_domain(domain))


@router.post(
    "/delete_prompt_versions",
    response_model=RecordSyncResultDTO,
    status_code=status.HTTP_200_OK,
    responses=_ERROR_RESPONSES,
    summary="DELETE de versiones de prompt"
)
async def delete_prompt_versions(
    payload: Any = Body(default=None),
    domain: Optional[str] = Query(default=None, description="Coleccion destino"),
    use_cases: RecordSyncUseCases = Depends(get_record_sync_use_cases)
) -> RecordSyncResultDTO:
    """Elimina los documentos cuyas identidades vienen en el lote."""
    return await use_cases.delete_records(payload, resolve_domain(domain))


@router.post(
    "/sync_member_dependencies",
    response_model=SnapshotSyncResultDTO,
    status_code=status.HTTP_200_OK,
    responses=_ERROR_RESPONSES,
    summary="Reconciliacion de snapshot de dependencias"
)
async def sync_member_dependencies(
    payload: Any = Body(default=None),
    use_cases: DependencySnapshotUseCases = Depends(get_snapshot_sync_use_cases)
) -> SnapshotSyncResultDTO:
    """
    Reemplaza la membresia completa de la coleccion por la del lote.

    - Upsert por parentMemberId con dependientes deduplicados
    - Borrado de todo parentMemberId ausente del lote
    """
    return await use_cases.reconcile(payload)
