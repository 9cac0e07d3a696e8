# backend/app/services/email_service.py
"""
Servicio de Envío de Correo para la aplicación.

Envía al equipo de la pastelería un aviso en texto plano por cada consulta
recibida en el checkout. Utiliza la biblioteca FastMail.
"""

from fastapi_mail import FastMail, MessageSchema, ConnectionConfig, MessageType
from typing import Any, List, Mapping
import logging

from app.core.config import Settings
from app.schemas.cart_schema import CartLine
from app.schemas.inquiry_schema import InquiryCreate

logger = logging.getLogger(__name__)


def _connection_config(settings: Settings) -> ConnectionConfig:
    """Construye la configuración SMTP a partir de los settings cargados del .env."""
    return ConnectionConfig(
        MAIL_USERNAME=settings.SMTP_USER or "",
        MAIL_PASSWORD=settings.SMTP_PASSWORD or "",
        MAIL_FROM=settings.EMAIL_FROM,
        MAIL_PORT=settings.SMTP_PORT,
        MAIL_SERVER=settings.SMTP_HOST,
        MAIL_STARTTLS=not settings.SMTP_SSL,
        MAIL_SSL_TLS=settings.SMTP_SSL,
        USE_CREDENTIALS=bool(settings.SMTP_USER),
        VALIDATE_CERTS=True,
    )


def build_inquiry_email_body(
    inquiry_id: str,
    inquiry: InquiryCreate,
    items: List[CartLine],
    products_by_sku: Mapping[str, Any],
) -> str:
    """Genera el cuerpo del correo: datos de contacto, mensaje y una línea por item."""
    item_lines = []
    for line in items:
        product = products_by_sku.get(line.sku)
        name = product.name if product else line.sku
        price = f" ({product.price_display})" if product and product.price_display else ""
        item_lines.append(f"- {name} x{line.qty}{price}")

    return (
        f"New inquiry {inquiry_id}\n\n"
        f"Name: {inquiry.name}\n"
        f"Email: {inquiry.email}\n"
        f"Phone: {inquiry.phone or ''}\n"
        f"Company: {inquiry.company or ''}\n\n"
        f"Message:\n{inquiry.message or ''}\n\n"
        f"Items:\n" + "\n".join(item_lines) + "\n\n"
        f"Source URL: {inquiry.source_url or ''}"
    )


async def send_inquiry_email(
    settings: Settings,
    inquiry_id: str,
    inquiry: InquiryCreate,
    items: List[CartLine],
    products_by_sku: Mapping[str, Any],
) -> str:
    """
    Envía el aviso de una nueva consulta.

    Returns:
        "skipped" si el SMTP o los remitentes no están configurados, "sent" si se envió.
        Los errores de envío se propagan; el checkout decide qué hacer con ellos.
    """
    if not settings.email_configured:
        logger.warning("Configuración SMTP/EMAIL_FROM/EMAIL_TO no encontrada. Saltando envío de correo.")
        return "skipped"

    message = MessageSchema(
        subject=f"Whisked Away Inquiry {inquiry_id}",
        recipients=[settings.EMAIL_TO],
        body=build_inquiry_email_body(inquiry_id, inquiry, items, products_by_sku),
        subtype=MessageType.plain,
    )

    fm = FastMail(_connection_config(settings))
    await fm.send_message(message)
    logger.info(f"Correo de la consulta {inquiry_id} enviado a {settings.EMAIL_TO}")
    return "sent"
