# backend/app/schemas/inquiry_schema.py
"""
Se encarga de definir los esquemas Pydantic para las consultas (checkout).
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional
from datetime import datetime


class InquiryCreate(BaseModel):
    """Datos de contacto enviados desde el formulario de checkout."""
    name: Optional[str] = Field("", description="Nombre del cliente")
    email: Optional[str] = Field("", description="Email del cliente (se valida en el checkout)")
    phone: Optional[str] = Field("", description="Teléfono")
    company: Optional[str] = Field("", description="Empresa")
    message: Optional[str] = Field("", description="Mensaje libre")
    website: Optional[str] = Field("", description="Honeypot anti-spam, debe venir vacío")
    source_url: Optional[str] = Field("", description="Página de origen (Referer)")

    @field_validator("name", "email", "phone", "company", "message", "website", "source_url")
    @classmethod
    def strip_text(cls, v):
        return (v or "").strip()


class InquiryCreated(BaseModel):
    """Respuesta del checkout."""
    inquiry_id: str


class InquiryItem(BaseModel):
    """Esquema de respuesta para un item de la consulta."""
    sku: str
    qty: int
    name_snapshot: str
    price_snapshot: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class Inquiry(BaseModel):
    """Esquema completo de respuesta para una consulta."""
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    company: Optional[str] = None
    message: Optional[str] = None
    source_url: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None
    items: List[InquiryItem] = []

    model_config = ConfigDict(from_attributes=True)
