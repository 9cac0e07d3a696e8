# backend/app/services/recipe_service.py

"""
Servicio de recetas favoritas.

La página pública sólo muestra recetas publicadas, las más recientes primero.
La administración ve también los borradores y puede publicarlos o
despublicarlos. Misma persistencia que el catálogo: PostgreSQL si está
configurado, y si no (o si falla) el fichero `RECIPES_JSON_PATH`.
"""

import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.core.exceptions import DuplicateRecipeError
from app.crud import recipe_crud
from app.schemas.recipe_schema import RecipeCreate, RecipeResponse, RecipeUpdate
from app.services.fallback_store import JsonFallbackStore
from app.utils.text import sanitize_recipe_html, slugify

logger = logging.getLogger(__name__)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class RecipeService(JsonFallbackStore):
    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def json_path(self) -> Path:
        return Path(self.settings.RECIPES_JSON_PATH)

    @staticmethod
    def _prepare_fields(recipe_in: RecipeCreate) -> Dict[str, Any]:
        return {
            "slug": slugify(recipe_in.slug or recipe_in.title),
            "title": recipe_in.title,
            "image_url": recipe_in.image_url or "",
            "recipe_html": sanitize_recipe_html(recipe_in.recipe_html),
            "published": recipe_in.published,
        }

    def _find_index(self, recipes: List[Dict[str, Any]], recipe_id: str) -> Optional[int]:
        return next((i for i, r in enumerate(recipes) if r.get("id") == recipe_id), None)

    # ========================================
    # LECTURA
    # ========================================

    async def list_recipes(self, db: Optional[AsyncSession], include_drafts: bool = False) -> List[RecipeResponse]:
        async def from_db(session: AsyncSession) -> List[RecipeResponse]:
            recipes = await recipe_crud.get_recipes(session, include_drafts=include_drafts)
            return [RecipeResponse.model_validate(r) for r in recipes]

        def from_json() -> List[RecipeResponse]:
            recipes = [r for r in self._load_json() if include_drafts or r.get("published")]
            # fechas ISO-8601 en UTC: el orden de texto es el orden cronológico
            recipes.sort(key=lambda r: str(r.get("created_at") or ""), reverse=True)
            return [RecipeResponse.model_validate(r) for r in recipes]

        return await self._with_database_fallback("Recipe list", db, from_db, from_json)

    async def get_recipe_by_slug(
        self, db: Optional[AsyncSession], slug: str, include_drafts: bool = False
    ) -> Optional[RecipeResponse]:
        async def from_db(session: AsyncSession) -> Optional[RecipeResponse]:
            recipe = await recipe_crud.get_recipe_by_slug(session, slug, include_drafts=include_drafts)
            return RecipeResponse.model_validate(recipe) if recipe else None

        def from_json() -> Optional[RecipeResponse]:
            match = next(
                (r for r in self._load_json() if r.get("slug") == slug and (include_drafts or r.get("published"))),
                None,
            )
            return RecipeResponse.model_validate(match) if match else None

        return await self._with_database_fallback("Recipe lookup", db, from_db, from_json)

    async def get_recipe_by_id(self, db: Optional[AsyncSession], recipe_id: str) -> Optional[RecipeResponse]:
        async def from_db(session: AsyncSession) -> Optional[RecipeResponse]:
            recipe = await recipe_crud.get_recipe_by_id(session, recipe_id)
            return RecipeResponse.model_validate(recipe) if recipe else None

        def from_json() -> Optional[RecipeResponse]:
            recipes = self._load_json()
            index = self._find_index(recipes, recipe_id)
            return RecipeResponse.model_validate(recipes[index]) if index is not None else None

        return await self._with_database_fallback("Recipe by id", db, from_db, from_json)

    # ========================================
    # ESCRITURA
    # ========================================

    async def create_recipe(self, db: Optional[AsyncSession], recipe_in: RecipeCreate) -> RecipeResponse:
        """
        Crea una receta.

        Raises:
            DuplicateRecipeError: si el slug ya existe.
        """
        fields = self._prepare_fields(recipe_in)

        async def in_db(session: AsyncSession) -> RecipeResponse:
            return RecipeResponse.model_validate(await recipe_crud.create_recipe(session, fields))

        def in_json() -> RecipeResponse:
            recipes = self._load_json()
            if any(r.get("slug") == fields["slug"] for r in recipes):
                raise DuplicateRecipeError("Recipe slug already exists")
            now = _now_iso()
            recipe = {"id": str(uuid.uuid4()), **fields, "created_at": now, "updated_at": now}
            recipes.insert(0, recipe)
            self._save_json(recipes)
            return RecipeResponse.model_validate(recipe)

        recipe = await self._with_database_fallback("Create recipe", db, in_db, in_json)
        logger.info(f"✅ RECETA: Creada '{recipe.slug}'")
        return recipe

    async def update_recipe(
        self, db: Optional[AsyncSession], recipe_id: str, recipe_in: RecipeUpdate
    ) -> Optional[RecipeResponse]:
        """Devuelve None si la receta no existe. Un slug de otra receta lanza `DuplicateRecipeError`."""
        fields = self._prepare_fields(recipe_in)

        async def in_db(session: AsyncSession) -> Optional[RecipeResponse]:
            recipe = await recipe_crud.update_recipe(session, recipe_id, fields)
            return RecipeResponse.model_validate(recipe) if recipe else None

        def in_json() -> Optional[RecipeResponse]:
            recipes = self._load_json()
            index = self._find_index(recipes, recipe_id)
            if index is None:
                return None
            if any(r.get("slug") == fields["slug"] for i, r in enumerate(recipes) if i != index):
                raise DuplicateRecipeError("Recipe slug already exists")
            recipes[index] = {**recipes[index], **fields, "updated_at": _now_iso()}
            self._save_json(recipes)
            return RecipeResponse.model_validate(recipes[index])

        return await self._with_database_fallback("Update recipe", db, in_db, in_json)

    async def toggle_recipe_published(self, db: Optional[AsyncSession], recipe_id: str) -> Optional[RecipeResponse]:
        async def in_db(session: AsyncSession) -> Optional[RecipeResponse]:
            recipe = await recipe_crud.toggle_recipe_published(session, recipe_id)
            return RecipeResponse.model_validate(recipe) if recipe else None

        def in_json() -> Optional[RecipeResponse]:
            recipes = self._load_json()
            index = self._find_index(recipes, recipe_id)
            if index is None:
                return None
            current = recipes[index]
            recipes[index] = {**current, "published": not current.get("published"), "updated_at": _now_iso()}
            self._save_json(recipes)
            return RecipeResponse.model_validate(recipes[index])

        recipe = await self._with_database_fallback("Toggle recipe", db, in_db, in_json)
        if recipe:
            logger.info(f"🔄 RECETA: '{recipe.slug}' publicada={recipe.published}")
        return recipe

    async def delete_recipe(self, db: Optional[AsyncSession], recipe_id: str) -> None:
        def in_json() -> None:
            recipes = self._load_json()
            self._save_json([r for r in recipes if r.get("id") != recipe_id])

        await self._with_database_fallback(
            "Delete recipe", db, lambda session: recipe_crud.delete_recipe(session, recipe_id), in_json
        )
        logger.info(f"🗑️ RECETA: Eliminada id '{recipe_id}'")
