# backend/app/schemas/cart_schema.py
"""
Esquemas Pydantic para la gestión del carrito de la compra.

`Cart` y `CartLine` sólo se construyen a partir de datos ya validados:
el único punto que convierte un valor no confiable (el JSON decodificado
de la cookie) en un `Cart` es `cart_service.normalize_cart`.
"""

from pydantic import BaseModel, Field
from typing import List, Optional


# ========================================
# ESTADO DEL CARRITO (viaja firmado en la cookie)
# ========================================

class CartLine(BaseModel):
    """Una línea del carrito. El orden de los campos (sku, qty) es el orden de serialización."""
    sku: str
    qty: int


class Cart(BaseModel):
    """Estado completo del carrito: líneas en orden de inserción, un SKU por línea."""
    items: List[CartLine] = []


# ========================================
# ESQUEMAS DE ENTRADA
# ========================================

class CartItemCreate(BaseModel):
    """Esquema para añadir o actualizar un item. La cantidad se acota a [1, 999] en el endpoint."""
    sku: str
    qty: Optional[float] = None


class CartItemRemove(BaseModel):
    """Esquema para eliminar un item del carrito."""
    sku: str


# ========================================
# ESQUEMAS DE RESPUESTA
# ========================================

class CartLineResponse(BaseModel):
    """Línea del carrito enriquecida con los datos visibles del producto."""
    sku: str
    qty: int
    name: str
    slug: Optional[str] = None
    image_url: Optional[str] = None
    price_display: Optional[str] = None


class CartResponse(BaseModel):
    """Esquema que representa el estado del carrito devuelto al cliente."""
    items: List[CartLineResponse] = []
    item_count: int = Field(0, description="Suma de cantidades de todas las líneas")


class CartBadge(BaseModel):
    """Contador del icono del carrito."""
    item_count: int
