# backend/app/api/v1/endpoints/recipes.py

"""
Endpoints públicos de recetas favoritas. Sólo se exponen recetas publicadas.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import logging

from app.api import deps
from app.schemas.recipe_schema import RecipeResponse
from app.services.recipe_service import RecipeService

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=List[RecipeResponse])
async def read_recipes(
    db: Optional[AsyncSession] = Depends(deps.get_db),
    recipes: RecipeService = Depends(deps.get_recipe_service),
) -> List[RecipeResponse]:
    """Recetas publicadas, las más recientes primero."""
    return await recipes.list_recipes(db)


@router.get("/{slug}", response_model=RecipeResponse)
async def read_recipe(
    slug: str,
    db: Optional[AsyncSession] = Depends(deps.get_db),
    recipes: RecipeService = Depends(deps.get_recipe_service),
) -> RecipeResponse:
    recipe = await recipes.get_recipe_by_slug(db, slug)
    if not recipe:
        logger.warning(f"⚠️ RECETA: No encontrada slug '{slug}'")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recipe not found")
    return recipe
