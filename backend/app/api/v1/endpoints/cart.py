# backend/app/api/v1/endpoints/cart.py
"""
Este archivo contiene los endpoints para el carrito de compras.

Todos comparten la ruta ``/cart`` y se distinguen por el método HTTP:
GET lista, POST añade, PUT fija la cantidad y DELETE elimina una línea.
El usuario se identifica con el query param ``userId``.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query

from app.api import deps
from app.core.exceptions import AppError, ServiceError
from app.schemas.cart_schema import (
    Cart,
    CartItemAddedResponse,
    CartItemRemovedResponse,
    CartItemUpdatedResponse,
)
from app.services.cart_service import CartService

logger = logging.getLogger(__name__)

# Router para el carrito de compras
router = APIRouter()


@router.get("", response_model=Cart)
async def get_cart(
    user_id: str = Depends(deps.get_user_id),
    cart_service: CartService = Depends(deps.get_cart_service),
):
    """
    Obtiene el contenido del carrito de un usuario con sus totales.
    """
    try:
        return await cart_service.get_cart(user_id)
    except AppError:
        raise
    except Exception as e:
        logger.exception(f"❌ ERROR: Error fetching cart items for '{user_id}'")
        raise ServiceError("Failed to fetch cart items", details=str(e)) from e


@router.post("", response_model=CartItemAddedResponse)
async def add_item_to_cart(
    payload: Any = Body(default=None),
    user_id: str = Depends(deps.get_user_id),
    cart_service: CartService = Depends(deps.get_cart_service),
):
    """
    Añade un producto al carrito. Si ya estaba, suma la cantidad.
    """
    try:
        item = await cart_service.add_item(user_id, payload)
    except AppError:
        raise
    except Exception as e:
        logger.exception(f"❌ ERROR: Error adding item to cart for '{user_id}'")
        raise ServiceError("Failed to add item to cart", details=str(e)) from e

    return CartItemAddedResponse(message="Item added to cart successfully", item=item)


@router.put("", response_model=CartItemUpdatedResponse)
async def update_cart_item(
    payload: Any = Body(default=None),
    user_id: str = Depends(deps.get_user_id),
    cart_service: CartService = Depends(deps.get_cart_service),
):
    """
    Fija la cantidad de una línea del carrito; cantidad 0 la elimina.
    """
    try:
        item = await cart_service.update_item(user_id, payload)
    except AppError:
        raise
    except Exception as e:
        logger.exception(f"❌ ERROR: Error updating cart item for '{user_id}'")
        raise ServiceError("Failed to update cart item", details=str(e)) from e

    return CartItemUpdatedResponse(message="Cart item updated successfully", item=item)


@router.delete("", response_model=CartItemRemovedResponse)
async def remove_item_from_cart(
    item_id: Optional[str] = Query(default=None, alias="itemId"),
    user_id: str = Depends(deps.get_user_id),
    cart_service: CartService = Depends(deps.get_cart_service),
):
    """
    Elimina un producto del carrito de un usuario.
    """
    try:
        removed_id = await cart_service.remove_item(user_id, {"itemId": item_id})
    except AppError:
        raise
    except Exception as e:
        logger.exception(f"❌ ERROR: Error removing cart item for '{user_id}'")
        raise ServiceError("Failed to remove item from cart", details=str(e)) from e

    return CartItemRemovedResponse(message="Item removed from cart successfully", item_id=removed_id)
