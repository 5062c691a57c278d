"""
Router principal de la API v1.
Agrupa todos los endpoints de la version 1.
"""
from fastapi import APIRouter

from sync_middleware.api.v1.endpoints import sync


# Sin prefijo: los flujos de Salesforce invocan las rutas en la raiz
api_router = APIRouter()

api_router.include_router(sync.router)
