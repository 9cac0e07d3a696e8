# backend/app/crud/recipe_crud.py

"""
Operaciones CRUD para el modelo Recipe contra PostgreSQL.

El respaldo en fichero JSON vive en `app.services.recipe_service`.
"""

import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import select, delete, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import DuplicateRecipeError
from app.db.models.recipe_model import Recipe

# ========================================
# OPERACIONES DE LECTURA (READ)
# ========================================

async def get_recipes(db: AsyncSession, include_drafts: bool = False) -> List[Recipe]:
    """Recetas más recientes primero. Sin `include_drafts` sólo las publicadas."""
    query = select(Recipe).order_by(Recipe.created_at.desc())
    if not include_drafts:
        query = query.filter(Recipe.published.is_(True))
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_recipe_by_slug(db: AsyncSession, slug: str, include_drafts: bool = False) -> Optional[Recipe]:
    query = select(Recipe).filter(Recipe.slug == slug)
    if not include_drafts:
        query = query.filter(Recipe.published.is_(True))
    result = await db.execute(query.limit(1))
    return result.scalars().first()


async def get_recipe_by_id(db: AsyncSession, recipe_id: str) -> Optional[Recipe]:
    result = await db.execute(select(Recipe).filter(Recipe.id == recipe_id))
    return result.scalars().first()


# ========================================
# OPERACIONES DE ESCRITURA
# ========================================

async def _commit_or_duplicate(db: AsyncSession) -> None:
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise DuplicateRecipeError("Recipe slug already exists") from e


async def create_recipe(db: AsyncSession, fields: Dict[str, Any]) -> Recipe:
    db_recipe = Recipe(id=str(uuid.uuid4()), **fields)
    db.add(db_recipe)
    await _commit_or_duplicate(db)
    await db.refresh(db_recipe)
    return db_recipe


async def update_recipe(db: AsyncSession, recipe_id: str, fields: Dict[str, Any]) -> Optional[Recipe]:
    """Actualiza una receta existente. Devuelve None si no existe."""
    db_recipe = await get_recipe_by_id(db, recipe_id)
    if not db_recipe:
        return None

    for field, value in fields.items():
        setattr(db_recipe, field, value)

    await _commit_or_duplicate(db)
    await db.refresh(db_recipe)
    return db_recipe


async def toggle_recipe_published(db: AsyncSession, recipe_id: str) -> Optional[Recipe]:
    """Invierte `published` en una única sentencia UPDATE."""
    result = await db.execute(
        update(Recipe)
        .where(Recipe.id == recipe_id)
        .values(published=~Recipe.published)
        .returning(Recipe.id)
    )
    if result.scalar_one_or_none() is None:
        await db.rollback()
        return None
    await db.commit()
    return await get_recipe_by_id(db, recipe_id)


async def delete_recipe(db: AsyncSession, recipe_id: str) -> None:
    await db.execute(delete(Recipe).where(Recipe.id == recipe_id))
    await db.commit()
