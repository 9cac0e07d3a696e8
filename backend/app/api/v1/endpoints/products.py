# backend/app/api/v1/endpoints/products.py

"""
Endpoints REST públicos del catálogo de la pastelería.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import logging

from app.api import deps
from app.schemas.product_schema import ProductResponse
from app.services.catalog_service import CatalogService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=List[ProductResponse])
async def read_products(
    db: Optional[AsyncSession] = Depends(deps.get_db),
    catalog: CatalogService = Depends(deps.get_catalog_service),
) -> List[ProductResponse]:
    """Lista los productos del catálogo ordenados por nombre."""
    return await catalog.list_products(db)


@router.get("/{slug}", response_model=ProductResponse)
async def read_product(
    slug: str,
    db: Optional[AsyncSession] = Depends(deps.get_db),
    catalog: CatalogService = Depends(deps.get_catalog_service),
) -> ProductResponse:
    """Obtiene los detalles de un producto por su slug."""
    logger.debug(f"🔍 PRODUCTO: Buscando producto slug '{slug}'")

    product = await catalog.get_product_by_slug(db, slug)
    if not product:
        logger.warning(f"⚠️ PRODUCTO: No encontrado slug '{slug}'")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return product
