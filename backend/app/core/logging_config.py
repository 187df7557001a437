# backend/app/core/logging_config.py
"""
Configuración del logging de la aplicación.

Se llama una sola vez al arrancar la app; cada módulo obtiene su propio
logger con ``logging.getLogger(__name__)``.
"""

import logging

from app.core.config import Settings


def setup_logging(settings: Settings) -> None:
    """Configura el logger raíz con el nivel y formato definidos en settings."""
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(level=level, format=settings.LOG_FORMAT)

    # uvicorn trae sus propios handlers; solo alineamos el nivel
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).setLevel(level)
