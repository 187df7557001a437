# backend/app/api/v1/api_router.py
"""
Este archivo contiene el router principal para la API versión 1.

Se encarga de registrar y configurar todos los routers de la versión 1 de la API.
"""

from fastapi import APIRouter

# Importación de routers especializados por dominio de negocio
from app.api.v1.endpoints import (
    books,
    cart
)

# ========================================
# CONFIGURACIÓN DEL ROUTER PRINCIPAL V1
# ========================================

api_router_v1 = APIRouter()

# ========================================
# REGISTRO DE ROUTERS POR DOMINIO DE NEGOCIO
# ========================================

# ROUTER DEL CATÁLOGO
# Listado de solo lectura del dataset estático de libros
api_router_v1.include_router(
    books.router,
    prefix="/books",                # Prefijo: /api/books
    tags=["Books"]
)

# ROUTER DEL CARRITO
# Maneja las operaciones del carrito de compras
api_router_v1.include_router(
    cart.router,
    prefix="/cart",                 # Prefijo: /api/cart
    tags=["Cart"]
)
