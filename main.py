"""
Punto de entrada principal de la aplicación FastAPI.
Configura la aplicación, middlewares, rutas y eventos.
"""
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from sync_middleware.core.config import settings, get_cors_origins
from sync_middleware.core.events import lifespan
from sync_middleware.api.v1.router import api_router
from sync_middleware.api.v1.endpoints.sync import empty_payload_message
from sync_middleware.api.middlewares.error_handler import ErrorHandlerMiddleware
from sync_middleware.application.dto.sync_dto import HealthResponseDTO
from sync_middleware.shared.exceptions.base import AppException
from sync_middleware.shared.exceptions.domain import EmptyPayloadException


def create_application() -> FastAPI:
    """
    Factory para crear y configurar la aplicación FastAPI.

    Returns:
        FastAPI: Instancia configurada de la aplicación
    """
    application = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Middleware de sincronizacion Salesforce -> MongoDB",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    cors_origins = get_cors_origins(settings.CORS_ORIGINS)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Middleware personalizado para errores no manejados
    application.add_middleware(ErrorHandlerMiddleware)

    application.include_router(api_router)

    # Manejador global de excepciones personalizadas
    @application.exception_handler(AppException)
    async def app_exception_handler(request, exc: AppException):
        log = logger.warning if exc.status_code < 500 else logger.error
        log(f"{request.url.path} -> {exc.status_code} {exc.error_code}: {exc.message}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message}
        )

    # Cuerpo que FastAPI no pudo leer (JSON invalido): mismo 400 que un lote vacio
    @application.exception_handler(RequestValidationError)
    async def validation_exception_handler(request, exc: RequestValidationError):
        error = EmptyPayloadException(empty_payload_message(request.url.path))
        logger.warning(f"{request.url.path} -> {error.status_code} cuerpo invalido: {exc.errors()}")
        return JSONResponse(
            status_code=error.status_code,
            content={"error": error.message}
        )

    # Health check: no depende de la disponibilidad del store
    @application.get("/health", tags=["Health"], response_model=HealthResponseDTO)
    async def health_check():
        """Endpoint para verificar el estado de la aplicación."""
        return {"status": "ok"}

    return application


# Crear instancia de la aplicación
app = create_application()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
