# backend/app/db/models/inquiry_model.py
"""
Este archivo contiene el modelo de consulta (pedido para recoger) de la aplicación.
"""

from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from sqlalchemy.dialects.postgresql import TIMESTAMP

from app.db.database import Base

class Inquiry(Base):
    __tablename__ = "inquiries"

    id = Column(String(36), primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=True)
    company = Column(String(255), nullable=True)
    message = Column(Text, nullable=True)
    source_url = Column(Text, nullable=True)
    status = Column(String(50), nullable=False, default="New")
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())

    items = relationship("InquiryItem", back_populates="inquiry", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Inquiry(id={self.id}, email='{self.email}', status='{self.status}')>"


class InquiryItem(Base):
    __tablename__ = "inquiry_items"

    id = Column(String(36), primary_key=True, index=True)
    inquiry_id = Column(String(36), ForeignKey("inquiries.id", ondelete="CASCADE"), nullable=False)
    sku = Column(String(100), nullable=False)
    qty = Column(Integer, nullable=False)
    # Copia del producto en el momento de la consulta
    name_snapshot = Column(String(255), nullable=False)
    price_snapshot = Column(String(100), nullable=True)

    inquiry = relationship("Inquiry", back_populates="items")

    def __repr__(self):
        return f"<InquiryItem(inquiry_id={self.inquiry_id}, sku='{self.sku}', qty={self.qty})>"
