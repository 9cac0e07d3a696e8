# backend/app/api/v1/endpoints/checkout.py
"""
Endpoint de checkout: convierte el carrito en una consulta para recoger en tienda.

1. Lee y normaliza el carrito de la cookie contra el catálogo actual.
2. Valida los datos de contacto (y el honeypot anti-spam).
3. Guarda la consulta y sus items en una única transacción.
4. Envía el aviso por correo (si falla se registra, pero la consulta ya está guardada).
5. Vacía la cookie del carrito.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from pydantic import EmailStr, TypeAdapter, ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import logging

from app.api import deps
from app.core.config import Settings
from app.crud import inquiry_crud
from app.schemas.inquiry_schema import InquiryCreate, InquiryCreated
from app.services import email_service
from app.services.cart_service import CartService
from app.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)

router = APIRouter()

_email_adapter = TypeAdapter(EmailStr)


@router.post("", response_model=InquiryCreated, status_code=status.HTTP_201_CREATED)
async def checkout(
    inquiry_in: InquiryCreate,
    request: Request,
    response: Response,
    db: Optional[AsyncSession] = Depends(deps.get_db),
    settings: Settings = Depends(deps.get_settings),
    catalog: CatalogService = Depends(deps.get_catalog_service),
    cart_service: CartService = Depends(deps.get_cart_service),
):
    """
    Procesa el checkout y devuelve el identificador de la consulta creada.
    """
    products_by_sku = await catalog.products_by_sku(db)
    cart = cart_service.read_cart(request, products_by_sku.values())
    if not cart.items:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cart is empty")

    if inquiry_in.website:
        logger.warning("Checkout rechazado: honeypot relleno")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Spam detected")

    if not inquiry_in.name or not inquiry_in.email:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Name and email are required")
    try:
        _email_adapter.validate_python(inquiry_in.email)
    except ValidationError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email is invalid")

    if db is None:
        logger.error("❌ Checkout sin base de datos configurada: la consulta no se puede guardar")
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Inquiry storage is not configured")

    inquiry = inquiry_in.model_copy(update={
        "source_url": inquiry_in.source_url or request.headers.get("referer", ""),
    })

    inquiry_id = await inquiry_crud.create_inquiry(db, inquiry, cart.items, products_by_sku)
    logger.info(f"✅ CONSULTA: Creada {inquiry_id} con {len(cart.items)} líneas")

    try:
        await email_service.send_inquiry_email(settings, inquiry_id, inquiry, cart.items, products_by_sku)
    except Exception as e:
        logger.error(f"Error al enviar el correo de la consulta {inquiry_id}: {e}", exc_info=True)

    cart_service.clear_cart(response)
    return InquiryCreated(inquiry_id=inquiry_id)
