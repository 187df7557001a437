# backend/app/crud/cart_store.py
"""
Almacenamiento de carritos por usuario.

El servicio de carrito solo conoce la interfaz ``CartStore`` (get / set /
delete por clave más un lock por clave), de modo que el backend se puede
cambiar sin tocar la lógica de negocio:

- MemoryCartStore: diccionario del proceso, un ``asyncio.Lock`` por usuario.
- RedisCartStore: lista JSON en ``cart:<userId>`` y lock distribuido de Redis.

Un carrito vacío (lista ``[]``) sigue existiendo: solo ``delete`` lo borra.
"""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import AsyncContextManager, AsyncIterator, Dict, List, Optional, Tuple

from redis.asyncio import Redis

from app.core.config import Settings
from app.schemas.cart_schema import CartLineItem

logger = logging.getLogger(__name__)


class CartStore(ABC):
    """Interfaz del almacenamiento de carritos."""

    @abstractmethod
    async def get(self, user_id: str) -> Optional[List[CartLineItem]]:
        """Devuelve las líneas del carrito o None si el usuario no tiene carrito."""

    @abstractmethod
    async def set(self, user_id: str, items: List[CartLineItem]) -> None:
        """Guarda (o crea) el carrito completo del usuario."""

    @abstractmethod
    async def delete(self, user_id: str) -> None:
        """Elimina el carrito del usuario si existe."""

    @abstractmethod
    def lock(self, user_id: str) -> AsyncContextManager:
        """Lock que serializa las modificaciones sobre el carrito de un usuario."""

    async def close(self) -> None:
        """Libera recursos del backend. No hace nada por defecto."""


class MemoryCartStore(CartStore):
    """
    Carritos en un diccionario en memoria.

    Se guardan y devuelven copias de las líneas para que nadie mute el
    estado sin pasar por ``set``.

    Cada lock se registra junto al número de corrutinas que lo usan o
    esperan; al quedar libre se descarta si el usuario no tiene carrito,
    así las peticiones contra usuarios desconocidos no dejan rastro.
    """

    def __init__(self):
        self._carts: Dict[str, List[CartLineItem]] = {}
        self._locks: Dict[str, Tuple[asyncio.Lock, int]] = {}

    async def get(self, user_id: str) -> Optional[List[CartLineItem]]:
        items = self._carts.get(user_id)
        if items is None:
            return None
        return [item.model_copy() for item in items]

    async def set(self, user_id: str, items: List[CartLineItem]) -> None:
        self._carts[user_id] = [item.model_copy() for item in items]

    async def delete(self, user_id: str) -> None:
        self._carts.pop(user_id, None)
        self._discard_lock_if_unused(user_id)

    def lock(self, user_id: str) -> AsyncContextManager:
        return self._user_lock(user_id)

    @asynccontextmanager
    async def _user_lock(self, user_id: str) -> AsyncIterator[None]:
        lock, users = self._locks.get(user_id, (None, 0))
        if lock is None:
            lock = asyncio.Lock()
        self._locks[user_id] = (lock, users + 1)
        try:
            async with lock:
                yield
        finally:
            lock, users = self._locks[user_id]
            self._locks[user_id] = (lock, users - 1)
            self._discard_lock_if_unused(user_id)

    def _discard_lock_if_unused(self, user_id: str) -> None:
        entry = self._locks.get(user_id)
        if entry is not None and entry[1] == 0 and user_id not in self._carts:
            del self._locks[user_id]


class RedisCartStore(CartStore):
    """
    Carritos en Redis, uno por clave ``cart:<userId>`` serializado como JSON.

    El lock usa ``Redis.lock`` para que varios procesos compartan la misma
    exclusión por usuario.
    """

    key_prefix = "cart"

    def __init__(self, client: Redis, lock_timeout: float = 5.0):
        self.client = client
        self.lock_timeout = lock_timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "RedisCartStore":
        client = Redis(
            host=settings.REDIS_HOST,
            port=settings.REDIS_PORT,
            db=settings.REDIS_DB,
            password=settings.REDIS_PASSWORD,
            decode_responses=True,
        )
        return cls(client, lock_timeout=settings.REDIS_LOCK_TIMEOUT)

    def _get_cart_key(self, user_id: str) -> str:
        return f"{self.key_prefix}:{user_id}"

    async def get(self, user_id: str) -> Optional[List[CartLineItem]]:
        raw = await self.client.get(self._get_cart_key(user_id))
        if raw is None:
            return None
        return [CartLineItem.model_validate(entry) for entry in json.loads(raw)]

    async def set(self, user_id: str, items: List[CartLineItem]) -> None:
        payload = json.dumps([item.model_dump(by_alias=True) for item in items])
        await self.client.set(self._get_cart_key(user_id), payload)

    async def delete(self, user_id: str) -> None:
        await self.client.delete(self._get_cart_key(user_id))

    def lock(self, user_id: str) -> AsyncContextManager:
        return self.client.lock(
            f"{self._get_cart_key(user_id)}:lock",
            timeout=self.lock_timeout,
            blocking_timeout=self.lock_timeout,
        )

    async def close(self) -> None:
        await self.client.aclose()


def build_cart_store(settings: Settings) -> CartStore:
    """Crea el backend indicado por ``CART_BACKEND``."""
    if settings.CART_BACKEND == "redis":
        logger.info(f"🛒 Carritos en Redis {settings.REDIS_HOST}:{settings.REDIS_PORT}/{settings.REDIS_DB}")
        return RedisCartStore.from_settings(settings)
    logger.info("🛒 Carritos en memoria del proceso")
    return MemoryCartStore()
