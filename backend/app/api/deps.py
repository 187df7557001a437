# backend/app/api/deps.py
"""
Módulo de dependencias para FastAPI.

Este archivo centraliza todas las dependencias que pueden ser inyectadas
en los endpoints de la API: configuración, identidad del usuario y
servicios. En los tests se sustituyen con ``app.dependency_overrides``.
"""

from typing import Dict, Optional, Tuple

from fastapi import Depends, Query

from app.core.config import Settings, settings
from app.core.exceptions import ValidationError
from app.crud.cart_store import build_cart_store
from app.services.book_service import BookService
from app.services.cart_service import CartService


def get_settings() -> Settings:
    """
    Dependencia de FastAPI para obtener el objeto de configuración.
    """
    return settings


def get_user_id(
    user_id: Optional[str] = Query(default=None, alias="userId"),
    settings: Settings = Depends(get_settings),
) -> str:
    """
    Resuelve la identidad del carrito a partir del query param ``userId``.

    Sin ``userId`` (o vacío) se usa ``DEFAULT_USER_ID``, salvo que
    ``REQUIRE_USER_ID`` esté activo, en cuyo caso es un error de validación.
    """
    if user_id:
        return user_id
    if settings.REQUIRE_USER_ID:
        raise ValidationError([{
            "path": ["userId"],
            "message": "User ID is required",
            "code": "missing",
        }])
    return settings.DEFAULT_USER_ID


# Un servicio por configuración de backend; se reutiliza entre peticiones
# para que los carritos sobrevivan, y se cierra en el shutdown de la app.
_cart_services: Dict[Tuple, CartService] = {}


def _cart_backend_key(settings: Settings) -> Tuple:
    return (settings.CART_BACKEND, settings.REDIS_HOST, settings.REDIS_PORT, settings.REDIS_DB)


def get_cart_service(settings: Settings = Depends(get_settings)) -> CartService:
    """
    Servicio de carrito construido a partir de la configuración inyectada.

    Mientras la configuración del backend no cambie se devuelve siempre el
    mismo servicio (y el mismo store).
    """
    key = _cart_backend_key(settings)
    service = _cart_services.get(key)
    if service is None:
        service = CartService(build_cart_store(settings))
        _cart_services[key] = service
    return service


async def close_cart_services() -> None:
    """Cierra los stores creados y olvida los servicios."""
    services = list(_cart_services.values())
    _cart_services.clear()
    for service in services:
        await service.store.close()


def get_book_service(settings: Settings = Depends(get_settings)) -> BookService:
    return BookService(settings.BOOKS_DATA_FILE)
