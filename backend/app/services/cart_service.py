# backend/app/services/cart_service.py
"""
Servicio de Carrito de Compras para la aplicación.

Gestiona el carrito de cada usuario sobre un ``CartStore`` intercambiable.
Cada operación valida su entrada antes de acceder al store y las
modificaciones se hacen con el lock del usuario tomado, de modo que nunca
hay dos líneas con el mismo productId dentro de un carrito.
"""

import logging
from typing import Any, List, Optional

from app.core.exceptions import NotFoundError
from app.crud.cart_store import CartStore
from app.schemas.cart_schema import (
    Cart,
    CartItemCreate,
    CartItemDelete,
    CartItemUpdate,
    CartLineItem,
)
from app.schemas.validation import validate_payload

logger = logging.getLogger(__name__)

CART_NOT_FOUND = "Cart not found"
ITEM_NOT_FOUND = "Item not found in cart"


def _find_index(items: List[CartLineItem], product_id: str) -> Optional[int]:
    return next((i for i, item in enumerate(items) if item.product_id == product_id), None)


def calculate_total_price(items: List[CartLineItem]) -> float:
    """Suma de precio por cantidad de todas las líneas."""
    return sum(item.price * item.quantity for item in items)


class CartService:
    """
    Servicio para gestionar el carrito de compras de un usuario.
    """

    def __init__(self, store: CartStore):
        self.store = store

    async def get_cart(self, user_id: str) -> Cart:
        """
        Obtiene el carrito del usuario con sus totales.

        ``total_items`` es el número de líneas, no la suma de cantidades.
        Un usuario sin carrito recibe un carrito vacío.
        """
        items = await self.store.get(user_id) or []
        return Cart(
            items=items,
            total_items=len(items),
            total_price=calculate_total_price(items),
        )

    async def add_item(self, user_id: str, payload: Any) -> CartItemCreate:
        """
        Añade un producto al carrito de un usuario.

        Si el producto ya existe se suma la cantidad y se conserva el precio
        de la línea original. Devuelve la entrada validada.
        """
        item = validate_payload(CartItemCreate, payload)

        async with self.store.lock(user_id):
            items = await self.store.get(user_id) or []
            index = _find_index(items, item.product_id)
            if index is not None:
                items[index].quantity += item.quantity
                logger.info(f"🛒 {user_id}: +{item.quantity} de '{item.product_id}' (total {items[index].quantity})")
            else:
                items.append(CartLineItem(
                    product_id=item.product_id,
                    quantity=item.quantity,
                    price=item.price,
                ))
                logger.info(f"🛒 {user_id}: nueva línea '{item.product_id}' x{item.quantity}")
            await self.store.set(user_id, items)

        return item

    async def update_item(self, user_id: str, payload: Any) -> CartItemUpdate:
        """
        Fija la cantidad de una línea existente; con cantidad 0 la elimina.

        Raises:
            NotFoundError: si el usuario no tiene carrito o la línea no existe
        """
        item = validate_payload(CartItemUpdate, payload)

        async with self.store.lock(user_id):
            items = await self._get_existing_cart(user_id)
            index = self._get_item_index(user_id, items, item.product_id)

            if item.quantity == 0:
                del items[index]
                logger.info(f"🗑️ {user_id}: '{item.product_id}' eliminado al fijar cantidad 0")
            else:
                items[index].quantity = item.quantity
                logger.info(f"🔄 {user_id}: '{item.product_id}' ahora x{item.quantity}")
            await self.store.set(user_id, items)

        return item

    async def remove_item(self, user_id: str, payload: Any) -> str:
        """
        Elimina una línea del carrito. ``itemId`` se busca como productId.

        Raises:
            NotFoundError: si el usuario no tiene carrito o la línea no existe
        """
        data = validate_payload(CartItemDelete, payload)

        async with self.store.lock(user_id):
            items = await self._get_existing_cart(user_id)
            index = self._get_item_index(user_id, items, data.item_id)
            del items[index]
            await self.store.set(user_id, items)

        logger.info(f"🗑️ {user_id}: '{data.item_id}' eliminado del carrito")
        return data.item_id

    async def _get_existing_cart(self, user_id: str) -> List[CartLineItem]:
        items = await self.store.get(user_id)
        if items is None:
            logger.warning(f"Carrito no encontrado para '{user_id}'")
            raise NotFoundError(CART_NOT_FOUND)
        return items

    def _get_item_index(self, user_id: str, items: List[CartLineItem], product_id: str) -> int:
        index = _find_index(items, product_id)
        if index is None:
            logger.warning(f"'{product_id}' no está en el carrito de '{user_id}'")
            raise NotFoundError(ITEM_NOT_FOUND)
        return index
