# backend/app/crud/product_crud.py

"""
Operaciones CRUD para el modelo Product.

Este módulo implementa las operaciones de Create, Read, Update, Delete para
productos contra PostgreSQL. La lógica de respaldo en fichero JSON vive en
`app.services.catalog_service`, que es quien decide cuándo llamar aquí.
"""

import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import DuplicateProductError
from app.db.models.product_model import Product

import logging

logger = logging.getLogger(__name__)

# ========================================
# OPERACIONES DE LECTURA (READ)
# ========================================

async def get_products(db: AsyncSession) -> List[Product]:
    """Obtiene todos los productos ordenados por nombre."""
    result = await db.execute(select(Product).order_by(Product.name.asc()))
    return list(result.scalars().all())


async def get_product_by_slug(db: AsyncSession, slug: str) -> Optional[Product]:
    result = await db.execute(select(Product).filter(Product.slug == slug).limit(1))
    return result.scalars().first()


async def get_product_by_sku(db: AsyncSession, sku: str) -> Optional[Product]:
    result = await db.execute(select(Product).filter(Product.sku == sku).limit(1))
    return result.scalars().first()


async def get_product_by_id(db: AsyncSession, product_id: str) -> Optional[Product]:
    result = await db.execute(select(Product).filter(Product.id == product_id))
    return result.scalars().first()


# ========================================
# OPERACIONES DE ESCRITURA
# ========================================

async def create_product(db: AsyncSession, fields: Dict[str, Any]) -> Product:
    """
    Crea un producto. `fields` ya viene normalizado (sku recortado, slug,
    descripción saneada) por la capa de servicio.
    """
    db_product = Product(id=str(uuid.uuid4()), **fields)
    db.add(db_product)
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise DuplicateProductError("Product SKU or slug already exists") from e
    await db.refresh(db_product)
    return db_product


async def update_product(db: AsyncSession, product_id: str, fields: Dict[str, Any]) -> Optional[Product]:
    """Actualiza un producto existente. Devuelve None si no existe."""
    db_product = await get_product_by_id(db, product_id)
    if not db_product:
        return None

    for field, value in fields.items():
        setattr(db_product, field, value)

    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise DuplicateProductError("Product SKU or slug already exists") from e
    await db.refresh(db_product)
    return db_product


async def delete_product(db: AsyncSession, product_id: str) -> None:
    await db.execute(delete(Product).where(Product.id == product_id))
    await db.commit()
