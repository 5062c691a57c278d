"""
Middleware para manejo centralizado de errores.
"""
from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from loguru import logger


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Middleware para capturar errores no manejados de forma centralizada."""

    async def dispatch(self, request: Request, call_next):
        """
        Procesa la petición y captura errores.

        Args:
            request: Petición HTTP
            call_next: Siguiente middleware/handler

        Returns:
            Response: Respuesta HTTP
        """
        try:
            response = await call_next(request)
            return response
        except Exception as exc:
            logger.exception(f"Error no manejado en {request.url.path}: {exc}")

            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"error": str(exc) or "Internal server error"}
            )
