# backend/app/core/config.py
"""
Este archivo contiene la configuración de la aplicación.
"""

from pydantic_settings import BaseSettings
from typing import Literal, Optional
from pathlib import Path

# Apunta al directorio 'backend/'
BASE_DIR = Path(__file__).resolve().parent.parent.parent

class Settings(BaseSettings):
    """
    Configuración de la aplicación usando Pydantic BaseSettings.
    Todo se puede sobrescribir desde .env o variables de entorno.
    """
    # Configuración general del proyecto
    BASE_DIR: Path = BASE_DIR
    API_V1_STR: str = "/api"
    PROJECT_NAME: str = "Bookstore API"
    PROJECT_VERSION: str = "0.1.0"

    # Catálogo estático de libros
    BOOKS_DATA_FILE: Path = BASE_DIR / "app" / "data" / "books.json"

    # Identidad del carrito
    # Sin userId todos los invitados comparten el carrito DEFAULT_USER_ID.
    DEFAULT_USER_ID: str = "default-user"
    REQUIRE_USER_ID: bool = False

    # Backend del carrito: "memory" (por proceso) o "redis"
    CART_BACKEND: Literal["memory", "redis"] = "memory"

    # Configuración de Redis
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0
    REDIS_PASSWORD: Optional[str] = None
    REDIS_LOCK_TIMEOUT: float = 5.0

    # Logging - Defaults seguros
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Server - Del .env con defaults
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    class Config:
        env_file = ".env"
        case_sensitive = False

# Instancia global de la configuración
settings = Settings()
