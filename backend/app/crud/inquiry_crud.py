# backend/app/crud/inquiry_crud.py
"""
Operaciones CRUD para el modelo Inquiry.

Una consulta se guarda junto con una línea por cada item del carrito, con una
copia del nombre y del precio visible del producto, en una única transacción.
"""

import uuid
from typing import List, Mapping, Any

from sqlalchemy import select
from sqlalchemy.orm import selectinload
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.inquiry_model import Inquiry, InquiryItem
from app.schemas.cart_schema import CartLine
from app.schemas.inquiry_schema import InquiryCreate

async def create_inquiry(
    db: AsyncSession,
    inquiry: InquiryCreate,
    items: List[CartLine],
    products_by_sku: Mapping[str, Any],
) -> str:
    """
    Crea la consulta y sus items de forma asíncrona. Si algo falla se hace
    rollback y se relanza la excepción.
    """
    inquiry_id = str(uuid.uuid4())
    db_inquiry = Inquiry(
        id=inquiry_id,
        name=inquiry.name,
        email=inquiry.email,
        phone=inquiry.phone or None,
        company=inquiry.company or None,
        message=inquiry.message or None,
        source_url=inquiry.source_url or None,
        status="New",
    )
    db.add(db_inquiry)

    for line in items:
        product = products_by_sku.get(line.sku)
        db.add(InquiryItem(
            id=str(uuid.uuid4()),
            inquiry_id=inquiry_id,
            sku=line.sku,
            qty=line.qty,
            name_snapshot=product.name if product else line.sku,
            price_snapshot=(product.price_display or None) if product else None,
        ))

    try:
        await db.commit()
    except Exception:
        await db.rollback()
        raise
    return inquiry_id

async def list_inquiries_with_items(db: AsyncSession) -> List[Inquiry]:
    """
    Obtiene todas las consultas, las más recientes primero, con sus items.
    """
    query = (
        select(Inquiry)
        .options(selectinload(Inquiry.items))
        .order_by(Inquiry.created_at.desc())
    )
    result = await db.execute(query)
    return list(result.scalars().all())
