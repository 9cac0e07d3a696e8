# backend/app/api/v1/endpoints/admin.py

"""
Endpoints de administración: gestión del catálogo, de las recetas y listado de consultas.

Todas las rutas de este router exigen HTTP Basic (ver `deps.require_admin`),
que se aplica al registrar el router.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import logging

from app.api import deps
from app.core.exceptions import DuplicateProductError, DuplicateRecipeError
from app.crud import inquiry_crud
from app.schemas.inquiry_schema import Inquiry
from app.schemas.product_schema import ProductCreate, ProductResponse, ProductUpdate
from app.schemas.recipe_schema import RecipeCreate, RecipeResponse, RecipeUpdate
from app.services.catalog_service import CatalogService
from app.services.recipe_service import RecipeService

logger = logging.getLogger(__name__)
router = APIRouter()


# ========================================
# PRODUCTOS
# ========================================

@router.get("/products", response_model=List[ProductResponse])
async def admin_list_products(
    db: Optional[AsyncSession] = Depends(deps.get_db),
    catalog: CatalogService = Depends(deps.get_catalog_service),
):
    return await catalog.list_products(db)


@router.post("/products", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def admin_create_product(
    *,
    db: Optional[AsyncSession] = Depends(deps.get_db),
    catalog: CatalogService = Depends(deps.get_catalog_service),
    product_in: ProductCreate,
) -> ProductResponse:
    """Crea un nuevo producto en el catálogo."""
    logger.info(f"🆕 PRODUCTO: Creando producto con SKU '{product_in.sku}'")
    try:
        return await catalog.create_product(db, product_in)
    except DuplicateProductError as e:
        logger.error(f"❌ ERROR: {e}")
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.get("/products/{product_id}", response_model=ProductResponse)
async def admin_read_product(
    product_id: str,
    db: Optional[AsyncSession] = Depends(deps.get_db),
    catalog: CatalogService = Depends(deps.get_catalog_service),
) -> ProductResponse:
    product = await catalog.get_product_by_id(db, product_id)
    if not product:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    return product


@router.put("/products/{product_id}", response_model=ProductResponse)
async def admin_update_product(
    *,
    product_id: str,
    db: Optional[AsyncSession] = Depends(deps.get_db),
    catalog: CatalogService = Depends(deps.get_catalog_service),
    product_in: ProductUpdate,
) -> ProductResponse:
    """Actualiza un producto existente."""
    logger.info(f"🔄 PRODUCTO: Actualizando producto id '{product_id}'")
    try:
        product = await catalog.update_product(db, product_id, product_in)
    except DuplicateProductError as e:
        logger.error(f"❌ ERROR: {e}")
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    if not product:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found for update")
    return product


@router.delete("/products/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def admin_delete_product(
    product_id: str,
    db: Optional[AsyncSession] = Depends(deps.get_db),
    catalog: CatalogService = Depends(deps.get_catalog_service),
):
    """Elimina un producto. Los carritos que lo contengan lo descartarán en su próxima lectura."""
    await catalog.delete_product(db, product_id)
    return None


# ========================================
# RECETAS
# ========================================

@router.get("/recipes", response_model=List[RecipeResponse])
async def admin_list_recipes(
    db: Optional[AsyncSession] = Depends(deps.get_db),
    recipes: RecipeService = Depends(deps.get_recipe_service),
):
    """Todas las recetas, incluidos los borradores."""
    return await recipes.list_recipes(db, include_drafts=True)


@router.post("/recipes", response_model=RecipeResponse, status_code=status.HTTP_201_CREATED)
async def admin_create_recipe(
    *,
    db: Optional[AsyncSession] = Depends(deps.get_db),
    recipes: RecipeService = Depends(deps.get_recipe_service),
    recipe_in: RecipeCreate,
) -> RecipeResponse:
    try:
        return await recipes.create_recipe(db, recipe_in)
    except DuplicateRecipeError as e:
        logger.error(f"❌ ERROR: {e}")
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.get("/recipes/{recipe_id}", response_model=RecipeResponse)
async def admin_read_recipe(
    recipe_id: str,
    db: Optional[AsyncSession] = Depends(deps.get_db),
    recipes: RecipeService = Depends(deps.get_recipe_service),
) -> RecipeResponse:
    recipe = await recipes.get_recipe_by_id(db, recipe_id)
    if not recipe:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found")
    return recipe


@router.put("/recipes/{recipe_id}", response_model=RecipeResponse)
async def admin_update_recipe(
    *,
    recipe_id: str,
    db: Optional[AsyncSession] = Depends(deps.get_db),
    recipes: RecipeService = Depends(deps.get_recipe_service),
    recipe_in: RecipeUpdate,
) -> RecipeResponse:
    try:
        recipe = await recipes.update_recipe(db, recipe_id, recipe_in)
    except DuplicateRecipeError as e:
        logger.error(f"❌ ERROR: {e}")
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    if not recipe:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found for update")
    return recipe


@router.post("/recipes/{recipe_id}/toggle-published", response_model=RecipeResponse)
async def admin_toggle_recipe(
    recipe_id: str,
    db: Optional[AsyncSession] = Depends(deps.get_db),
    recipes: RecipeService = Depends(deps.get_recipe_service),
) -> RecipeResponse:
    """Publica o retira una receta de la página pública."""
    recipe = await recipes.toggle_recipe_published(db, recipe_id)
    if not recipe:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found")
    return recipe


@router.delete("/recipes/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
async def admin_delete_recipe(
    recipe_id: str,
    db: Optional[AsyncSession] = Depends(deps.get_db),
    recipes: RecipeService = Depends(deps.get_recipe_service),
):
    await recipes.delete_recipe(db, recipe_id)
    return None


# ========================================
# CONSULTAS
# ========================================

@router.get("/inquiries", response_model=List[Inquiry])
async def admin_list_inquiries(
    db: Optional[AsyncSession] = Depends(deps.get_db),
):
    """Lista las consultas recibidas, las más recientes primero."""
    if db is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Inquiry storage is not configured")
    return await inquiry_crud.list_inquiries_with_items(db)
