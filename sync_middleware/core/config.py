"""
Configuracion central de la aplicacion.
Gestiona variables de entorno y configuraciones globales del middleware
de sincronizacion (Salesforce -> MongoDB).
"""
import json
from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """
    Clase de configuracion de la aplicacion.
    Lee variables de entorno (o .env) y proporciona valores por defecto.

    - MONGO_URI / MONGO_DB_NAME: destino de la replicacion
    - DEFAULT_DOMAIN: coleccion usada cuando el request no envia ?domain=
    - VERSION_ID_FIELD: campo identidad de los registros versionados
    """

    # Configuracion de la aplicacion
    APP_NAME: str = Field(default="Mongo Sync Middleware")
    APP_VERSION: str = Field(default="1.0.0")
    DEBUG: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="production")

    # Configuracion del servidor
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=3000)

    # MongoDB
    MONGO_URI: str = Field(default="")
    MONGO_DB_NAME: str = Field(default="salesforce_sync")
    MONGO_MAX_POOL_SIZE: int = Field(default=10)
    MONGO_SERVER_SELECTION_TIMEOUT_MS: int = Field(default=5000)

    # Colecciones y campos identidad
    DEFAULT_DOMAIN: str = Field(default="Prompt")
    MEMBER_DEPENDENCIES_COLLECTION: str = Field(default="MemberDependencies")
    VERSION_ID_FIELD: str = Field(default="promptVersionId")

    # CORS (acepta lista JSON o "*" para todos los origenes)
    CORS_ORIGINS: str = Field(default="*")

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE: str = Field(default="logs/app.log")

    class Config:
        """Configuracion de Pydantic."""
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


def get_cors_origins(cors_string: str) -> List[str]:
    """
    Parsea la configuracion de CORS.
    Acepta "*" para todos los origenes o una lista JSON.
    """
    if cors_string == "*":
        return ["*"]
    try:
        return json.loads(cors_string)
    except json.JSONDecodeError:
        return [origin.strip() for origin in cors_string.split(",")]


# Instancia global de configuracion
settings = Settings()
