# backend/app/db/models/recipe_model.py
from sqlalchemy import Boolean, Column, String, Text
from sqlalchemy.sql import func
from sqlalchemy.dialects.postgresql import TIMESTAMP

from app.db.database import Base

class Recipe(Base):
    __tablename__ = "favorite_recipes"

    id = Column(String(36), primary_key=True, index=True)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    title = Column(String(255), nullable=False)
    image_url = Column(Text, nullable=True)
    recipe_html = Column(Text, nullable=False, default="")
    published = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Recipe(slug='{self.slug}', published={self.published})>"
