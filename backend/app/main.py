# backend/app/main.py
"""
Punto de entrada principal de la aplicación FastAPI.

Este módulo configura y inicializa la aplicación: logging, routers de la
API, manejadores de errores y eventos del ciclo de vida.
"""

import logging

from fastapi import FastAPI

from app.api import deps
from app.api.v1.api_router import api_router_v1  # Router principal de la API v1
from app.core.config import settings  # Configuración centralizada de la aplicación
from app.core.exceptions import register_exception_handlers
from app.core.logging_config import setup_logging

setup_logging(settings)
logger = logging.getLogger(__name__)

# ========================================
# CONFIGURACIÓN DE LA APLICACIÓN FASTAPI
# ========================================

app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    version=settings.PROJECT_VERSION,
    description="API de la librería: catálogo de libros y carrito de compras"
)

# Errores de dominio -> {"error": ..., "details": ...}
register_exception_handlers(app)

# ========================================
# REGISTRO DE ROUTERS DE LA API
# ========================================

# El prefijo se obtiene de settings (por defecto "/api")
app.include_router(api_router_v1, prefix=settings.API_V1_STR)


# ========================================
# ENDPOINTS RAÍZ Y VERIFICACIÓN DE ESTADO
# ========================================

@app.get("/", tags=["Root"])
async def read_root():
    """
    Health check básico: confirma que el servicio responde.

    Example:
        GET /
        Response: {"message": "Bienvenido a Bookstore API v0.1.0"}
    """
    return {"message": f"Bienvenido a {settings.PROJECT_NAME} v{settings.PROJECT_VERSION}"}

# ========================================
# EVENTOS DEL CICLO DE VIDA DE LA APLICACIÓN
# ========================================

@app.on_event("startup")
async def startup_event():
    logger.info(f"🚀 {settings.PROJECT_NAME} v{settings.PROJECT_VERSION} arrancando (carrito: {settings.CART_BACKEND})")


@app.on_event("shutdown")
async def shutdown_event():
    """Cierra las conexiones de los stores de carritos que se llegaron a crear."""
    await deps.close_cart_services()


def run() -> None:
    """Arranca el servidor con uvicorn usando HOST y PORT de la configuración."""
    import uvicorn

    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT)
