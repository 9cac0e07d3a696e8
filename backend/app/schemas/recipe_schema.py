# backend/app/schemas/recipe_schema.py
"""
Esquemas Pydantic para las recetas favoritas publicadas por la pastelería.
"""

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator


class RecipeCreate(BaseModel):
    """Alta de una receta. El slug se deriva del título si viene vacío."""
    title: str = Field(..., min_length=1)
    slug: Optional[str] = ""
    image_url: Optional[str] = ""
    recipe_html: Optional[str] = ""
    published: bool = False

    @field_validator("title")
    @classmethod
    def strip_title(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class RecipeUpdate(RecipeCreate):
    """Actualización completa de una receta (mismo formulario que el alta)."""
    pass


class RecipeResponse(BaseModel):
    id: str
    slug: str
    title: str
    image_url: Optional[str] = ""
    recipe_html: Optional[str] = ""
    published: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
