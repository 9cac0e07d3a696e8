# backend/app/core/cart_codec.py
"""
Códec del token del carrito.

Un token tiene la forma `payload.signature`:
- payload:   JSON compacto del carrito codificado en base64url (sin relleno)
- signature: HMAC-SHA256(secreto, payload) codificado en base64url (sin relleno)

`decode_cart` sólo autentica. Cualquier fallo (token vacío, forma incorrecta,
firma distinta, base64 o JSON inválidos) devuelve None y nunca lanza: el
llamador lo trata exactamente igual que "no hay carrito". Un payload con firma
válida puede seguir teniendo una forma incorrecta y debe pasar por
`cart_service.normalize_cart` antes de usarse.
"""

import base64
import binascii
import hashlib
import hmac
import json
import logging
import re
from typing import Any, Optional

from app.schemas.cart_schema import Cart

logger = logging.getLogger(__name__)

TOKEN_SEPARATOR = "."
_B64URL_RE = re.compile(r"[A-Za-z0-9_-]*")


def _b64url_encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _b64url_decode(value: str) -> bytes:
    # urlsafe_b64decode descarta en silencio los caracteres fuera del alfabeto
    if not _B64URL_RE.fullmatch(value):
        raise binascii.Error("invalid base64url character")
    padding = "=" * (-len(value) % 4)
    return base64.urlsafe_b64decode(value + padding)


def sign_payload(payload: str, secret: str) -> str:
    """Firma el payload (tal cual aparece en el token) con el secreto del servidor."""
    digest = hmac.new(secret.encode("utf-8"), payload.encode("utf-8"), hashlib.sha256).digest()
    return _b64url_encode(digest)


def serialize_cart(cart: Cart) -> bytes:
    """Representación canónica: sku y luego qty por línea, líneas en su orden."""
    data = {"items": [{"sku": line.sku, "qty": line.qty} for line in cart.items]}
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def encode_cart(cart: Cart, secret: str) -> str:
    """Serializa y firma el carrito, devolviendo `payload.signature`."""
    payload = _b64url_encode(serialize_cart(cart))
    return f"{payload}{TOKEN_SEPARATOR}{sign_payload(payload, secret)}"


def decode_cart(token: Optional[str], secret: str) -> Optional[Any]:
    """
    Verifica el token y devuelve el valor JSON crudo del carrito.

    Returns:
        El valor decodificado sin normalizar, o None si el token no es válido.
    """
    if not token:
        return None

    parts = token.split(TOKEN_SEPARATOR)
    if len(parts) != 2:
        logger.debug("Token de carrito rechazado: forma inválida")
        return None
    payload, signature = parts
    if not payload or not signature:
        return None

    expected = sign_payload(payload, secret)
    # compare_digest con longitudes distintas devuelve False, no lanza
    if not hmac.compare_digest(signature.encode("utf-8"), expected.encode("utf-8")):
        logger.debug("Token de carrito rechazado: firma inválida")
        return None

    try:
        raw = _b64url_decode(payload)
        return json.loads(raw.decode("utf-8"))
    except (binascii.Error, ValueError) as e:
        # UnicodeDecodeError y JSONDecodeError son subclases de ValueError
        logger.debug(f"Token de carrito rechazado: payload ilegible ({type(e).__name__})")
        return None
