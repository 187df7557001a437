# backend/app/schemas/cart_schema.py
"""
Esquemas Pydantic para la gestión del carrito de la compra.

Cada operación declara su propio esquema de entrada con tipos estrictos:
no se aceptan números como texto, cantidades con decimales ni booleanos en
campos numéricos. Las reglas de rango llevan su propio mensaje para que
el cliente reciba un issue legible por campo.

En JSON los campos viajan en camelCase (``productId``, ``totalPrice``...);
en Python se usan los nombres snake_case.
"""

from typing import Annotated, Any, List

from pydantic import BeforeValidator, Field, StrictInt, StrictStr, field_validator

from app.schemas.base_schema import CamelModel


def _integral_float_to_int(v: Any) -> Any:
    # 2.0 es un entero válido en JSON; 1.5 no
    if isinstance(v, float):
        if not v.is_integer():
            raise ValueError("Expected integer")
        return int(v)
    return v


# Entero estricto que además acepta floats sin parte decimal
IntegralNumber = Annotated[StrictInt, BeforeValidator(_integral_float_to_int)]


# ========================================
# ESQUEMAS DE ENTRADA
# ========================================

class CartItemCreate(CamelModel):
    """Esquema para añadir un item al carrito (POST)."""
    product_id: StrictStr
    quantity: IntegralNumber
    price: float = Field(strict=True, allow_inf_nan=False)

    @field_validator("product_id")
    @classmethod
    def product_id_required(cls, v: str) -> str:
        if not v:
            raise ValueError("Product ID is required")
        return v

    @field_validator("quantity")
    @classmethod
    def quantity_at_least_one(cls, v: int) -> int:
        if v < 1:
            raise ValueError("Quantity must be at least 1")
        return v

    @field_validator("price")
    @classmethod
    def price_non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("Price must be non-negative")
        return v


class CartItemUpdate(CamelModel):
    """Esquema para fijar la cantidad de una línea existente (PUT). 0 la elimina."""
    product_id: StrictStr
    quantity: IntegralNumber

    @field_validator("product_id")
    @classmethod
    def product_id_required(cls, v: str) -> str:
        if not v:
            raise ValueError("Product ID is required")
        return v

    @field_validator("quantity")
    @classmethod
    def quantity_non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Quantity cannot be negative")
        return v


class CartItemDelete(CamelModel):
    """Esquema para eliminar una línea (DELETE). ``itemId`` se compara con el productId."""
    item_id: StrictStr

    @field_validator("item_id")
    @classmethod
    def item_id_required(cls, v: str) -> str:
        if not v:
            raise ValueError("Item ID is required")
        return v


# ========================================
# ESQUEMAS DE ESTADO Y RESPUESTA
# ========================================

class CartLineItem(CamelModel):
    """Una línea del carrito tal como se guarda en el store."""
    product_id: str
    quantity: int
    price: float


class Cart(CamelModel):
    """Esquema que representa el estado completo del carrito."""
    items: List[CartLineItem]
    total_items: int
    total_price: float


class CartItemAddedResponse(CamelModel):
    message: str
    item: CartItemCreate


class CartItemUpdatedResponse(CamelModel):
    message: str
    item: CartItemUpdate


class CartItemRemovedResponse(CamelModel):
    message: str
    item_id: str
