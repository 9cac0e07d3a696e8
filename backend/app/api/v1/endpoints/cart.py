# backend/app/api/v1/endpoints/cart.py
"""
Este archivo contiene los endpoints para el carrito de compras.

El carrito viaja en una cookie firmada. Cada petición vuelve a leer el
catálogo, decodifica y normaliza la cookie y, si hay cambios, la vuelve a
firmar y emitir.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Dict, Optional
import logging

from app.api import deps
from app.schemas.cart_schema import (
    Cart, CartBadge, CartItemCreate, CartItemRemove, CartLineResponse, CartResponse
)
from app.schemas.product_schema import ProductResponse
from app.services.cart_service import (
    CartService, cart_item_count, clamp_quantity, upsert_cart_item
)
from app.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)

# Router para el carrito de compras
router = APIRouter()


def _cart_response(cart: Cart, products_by_sku: Dict[str, ProductResponse]) -> CartResponse:
    """Une cada línea del carrito con los datos visibles de su producto."""
    lines = []
    for line in cart.items:
        product: Optional[ProductResponse] = products_by_sku.get(line.sku)
        lines.append(CartLineResponse(
            sku=line.sku,
            qty=line.qty,
            name=product.name if product else line.sku,
            slug=product.slug if product else None,
            image_url=product.image_url if product else None,
            price_display=product.price_display if product else None,
        ))
    return CartResponse(items=lines, item_count=cart_item_count(cart))


async def _set_quantity(
    item: CartItemCreate,
    request: Request,
    response: Response,
    db: Optional[AsyncSession],
    catalog: CatalogService,
    cart_service: CartService,
) -> CartResponse:
    """Lógica común de add/update: valida el SKU, acota la cantidad y reescribe la cookie."""
    qty = clamp_quantity(item.qty if item.qty else 1)
    products_by_sku = await catalog.products_by_sku(db)
    if item.sku not in products_by_sku:
        logger.warning(f"⚠️ CARRITO: SKU desconocido '{item.sku}'")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid SKU")

    cart = cart_service.read_cart(request, products_by_sku.values())
    next_cart = upsert_cart_item(cart, item.sku, qty)
    cart_service.write_cart(response, next_cart)
    return _cart_response(next_cart, products_by_sku)


@router.get("", response_model=CartResponse)
async def get_cart(
    request: Request,
    db: Optional[AsyncSession] = Depends(deps.get_db),
    catalog: CatalogService = Depends(deps.get_catalog_service),
    cart_service: CartService = Depends(deps.get_cart_service),
):
    """
    Obtiene el contenido del carrito. Una cookie ausente o manipulada equivale a un carrito vacío.
    """
    products_by_sku = await catalog.products_by_sku(db)
    cart = cart_service.read_cart(request, products_by_sku.values())
    return _cart_response(cart, products_by_sku)


@router.get("/badge", response_model=CartBadge)
async def get_cart_badge(
    request: Request,
    db: Optional[AsyncSession] = Depends(deps.get_db),
    catalog: CatalogService = Depends(deps.get_catalog_service),
    cart_service: CartService = Depends(deps.get_cart_service),
):
    """
    Devuelve sólo el número total de unidades en el carrito.
    """
    products = await catalog.list_products(db)
    cart = cart_service.read_cart(request, products)
    return CartBadge(item_count=cart_item_count(cart))


@router.post("/add", response_model=CartResponse)
async def add_item_to_cart(
    item: CartItemCreate,
    request: Request,
    response: Response,
    db: Optional[AsyncSession] = Depends(deps.get_db),
    catalog: CatalogService = Depends(deps.get_catalog_service),
    cart_service: CartService = Depends(deps.get_cart_service),
):
    """
    Añade un producto al carrito. Si ya estaba, su cantidad se reemplaza.
    """
    return await _set_quantity(item, request, response, db, catalog, cart_service)


@router.post("/update", response_model=CartResponse)
async def update_cart_item(
    item: CartItemCreate,
    request: Request,
    response: Response,
    db: Optional[AsyncSession] = Depends(deps.get_db),
    catalog: CatalogService = Depends(deps.get_catalog_service),
    cart_service: CartService = Depends(deps.get_cart_service),
):
    """
    Cambia la cantidad de un producto del carrito.
    """
    return await _set_quantity(item, request, response, db, catalog, cart_service)


@router.post("/remove", response_model=CartResponse)
async def remove_item_from_cart(
    item: CartItemRemove,
    request: Request,
    response: Response,
    db: Optional[AsyncSession] = Depends(deps.get_db),
    catalog: CatalogService = Depends(deps.get_catalog_service),
    cart_service: CartService = Depends(deps.get_cart_service),
):
    """
    Elimina un producto del carrito. Un SKU que no esté en el carrito no produce error.
    """
    products_by_sku = await catalog.products_by_sku(db)
    cart = cart_service.read_cart(request, products_by_sku.values())
    next_cart = upsert_cart_item(cart, item.sku, 0)
    cart_service.write_cart(response, next_cart)
    return _cart_response(next_cart, products_by_sku)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def clear_cart(
    response: Response,
    cart_service: CartService = Depends(deps.get_cart_service),
):
    """
    Vacía completamente el carrito.
    """
    cart_service.clear_cart(response)
    return None
