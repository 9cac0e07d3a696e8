# backend/app/db/models/product_model.py
from sqlalchemy import Column, String, Text
from sqlalchemy.sql import func
from sqlalchemy.dialects.postgresql import TIMESTAMP

from app.db.database import Base

class Product(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, index=True)
    sku = Column(String(100), unique=True, nullable=False, index=True)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=False, default="")
    image_url = Column(Text, nullable=False, default="")
    price_display = Column(String(100), nullable=False, default="")
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Product(sku='{self.sku}', slug='{self.slug}')>"
