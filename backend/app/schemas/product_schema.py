# backend/app/schemas/product_schema.py
"""
Esquemas Pydantic para el modelo Product.

Se usan tanto para los productos leídos de la base de datos (from_attributes)
como para los leídos del fichero JSON de respaldo.
"""

from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

# ========================================
# ESQUEMA BASE
# ========================================

class ProductBase(BaseModel):
    """Propiedades comunes compartidas entre esquemas de producto."""
    name: str = Field(..., min_length=1)
    description: Optional[str] = ""
    image_url: Optional[str] = ""
    price_display: Optional[str] = ""


# ========================================
# ESQUEMAS PARA OPERACIONES
# ========================================

class ProductCreate(ProductBase):
    """Esquema para crear un producto. El slug se deriva del nombre si viene vacío."""
    sku: str = Field(..., min_length=1)
    slug: Optional[str] = ""

    @field_validator("sku", "name")
    @classmethod
    def strip_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value


class ProductUpdate(ProductCreate):
    """Actualización completa de un producto (mismo formulario que el alta)."""
    pass


# ========================================
# ESQUEMA DE RESPUESTA
# ========================================

class ProductResponse(BaseModel):
    """Producto del catálogo tal y como lo ven el carrito y la API."""
    id: str
    sku: str
    slug: str
    name: str
    description: Optional[str] = ""
    image_url: Optional[str] = ""
    price_display: Optional[str] = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
