"""
Manejadores de eventos de inicio y cierre de la aplicacion.
"""
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable
from fastapi import FastAPI
from loguru import logger

from sync_middleware.core.config import settings
from sync_middleware.infrastructure.database.session import close_db


def startup_handler(app: FastAPI) -> Callable:
    """
    Manejador de eventos de inicio de la aplicacion.

    Args:
        app: Instancia de FastAPI

    Returns:
        Callable: Funcion asincrona de inicio
    """
    async def startup() -> None:
        """Configura logging y valida la configuracion critica."""
        logger.info(f"Iniciando {settings.APP_NAME} v{settings.APP_VERSION}")
        logger.info(f"Entorno: {settings.ENVIRONMENT}")

        _validate_config()

        logger.add(
            settings.LOG_FILE,
            rotation="500 MB",
            retention="10 days",
            level=settings.LOG_LEVEL
        )

        logger.success(f"Mongo Middleware escuchando en el puerto {settings.PORT}")

    return startup


def _validate_config() -> None:
    """
    Valida que la configuracion critica este presente.
    El cliente MongoDB se crea en el primer request: aqui solo se advierte.
    """
    warnings = []

    if not settings.MONGO_URI:
        warnings.append("MONGO_URI no configurada - los endpoints de sync responderan 500")
    if not settings.MONGO_DB_NAME:
        warnings.append("MONGO_DB_NAME vacia")

    for warning in warnings:
        logger.warning(f"CONFIG: {warning}")


def shutdown_handler(app: FastAPI) -> Callable:
    """
    Manejador de eventos de cierre de la aplicacion.

    Args:
        app: Instancia de FastAPI

    Returns:
        Callable: Funcion asincrona de cierre
    """
    async def shutdown() -> None:
        """Libera el pool de conexiones de MongoDB."""
        logger.info("Cerrando aplicacion...")
        await close_db()
        logger.info("Conexiones de MongoDB cerradas")
        logger.success("Aplicacion cerrada correctamente")

    return shutdown


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Ciclo de vida de la aplicacion: startup antes de servir, shutdown al final."""
    await startup_handler(app)()
    try:
        yield
    finally:
        await shutdown_handler(app)()
