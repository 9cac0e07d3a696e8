# backend/app/services/cart_service.py
"""
Servicio de Carrito de Compras para la aplicación.

El carrito no se guarda en el servidor: viaja en una cookie firmada
(ver `app.core.cart_codec`). Este módulo contiene:

- La normalización del valor decodificado contra el catálogo vivo.
- Las funciones puras de mutación (upsert, conteo, mapa sku -> cantidad).
- `CartService`, que lee y escribe la cookie con el secreto configurado.

Dos pestañas que modifican el carrito a la vez no se fusionan: gana la
última cookie escrita.
"""

import logging
import math
from typing import Any, Dict, Iterable, Mapping, Optional

from fastapi import Request, Response

from app.core.cart_codec import decode_cart, encode_cart
from app.core.config import Settings
from app.schemas.cart_schema import Cart, CartLine

logger = logging.getLogger(__name__)

MAX_ITEMS = 25
MAX_QTY = 999


# ========================================
# NORMALIZACIÓN (valor no confiable -> Cart)
# ========================================

def _coerce_quantity(value: Any) -> Optional[float]:
    """Convierte la cantidad cruda a número. Devuelve None si no es numérica."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return float(value)
        except OverflowError:
            # enteros JSON mayores que cualquier float
            return None
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def normalize_cart(raw_value: Any, catalog: Mapping[str, Any]) -> Cart:
    """
    Convierte el valor decodificado de la cookie en un `Cart` válido.

    Reglas aplicadas a cada línea, en orden:
    - se descarta si no es un objeto con `sku` de tipo string
    - se descarta si `qty` no es un número finito en [1, 999]
    - se descarta si el sku no existe en el catálogo
    - se descarta si el sku ya apareció en una línea anterior
    - la cantidad se trunca a entero
    Al llegar a MAX_ITEMS líneas aceptadas se ignora el resto.

    Nunca lanza excepciones: una entrada con forma incorrecta produce un carrito vacío.
    """
    if not isinstance(raw_value, dict) or not isinstance(raw_value.get("items"), list):
        return Cart(items=[])

    lines = []
    seen = set()
    for item in raw_value["items"]:
        if not isinstance(item, dict) or not isinstance(item.get("sku"), str):
            continue
        sku = item["sku"]
        qty = _coerce_quantity(item.get("qty"))
        if qty is None or not math.isfinite(qty) or qty < 1 or qty > MAX_QTY:
            continue
        if sku not in catalog:
            continue
        if sku in seen:
            continue
        seen.add(sku)
        lines.append(CartLine(sku=sku, qty=math.floor(qty)))
        if len(lines) >= MAX_ITEMS:
            break

    return Cart(items=lines)


# ========================================
# MUTACIONES PURAS
# ========================================

def upsert_cart_item(cart: Cart, sku: str, qty: int) -> Cart:
    """
    Inserta, actualiza o elimina una línea devolviendo un carrito nuevo.

    - qty <= 0: elimina la línea del sku si existe.
    - sku presente: reemplaza la cantidad manteniendo la posición.
    - sku ausente: añade la línea al final.
    El resultado se recorta a MAX_ITEMS, por lo que un alta con el carrito
    lleno no tiene efecto. No valida el rango de qty: el llamador debe
    acotarla con `clamp_quantity`.
    """
    items = list(cart.items)
    index = next((i for i, line in enumerate(items) if line.sku == sku), None)

    if qty <= 0:
        if index is not None:
            del items[index]
        return Cart(items=items)

    if index is not None:
        items[index] = CartLine(sku=sku, qty=qty)
    else:
        items.append(CartLine(sku=sku, qty=qty))
    return Cart(items=items[:MAX_ITEMS])


def cart_item_count(cart: Cart) -> int:
    """Suma de cantidades de todas las líneas."""
    return sum(line.qty for line in cart.items)


def cart_item_map(cart: Cart) -> Dict[str, int]:
    """Mapa sku -> cantidad; si hubiera duplicados gana la última línea."""
    return {line.sku: line.qty for line in cart.items}


def clamp_quantity(value: Any, default: int = 1) -> int:
    """Acota una cantidad recibida en la petición a [1, MAX_QTY]."""
    qty = _coerce_quantity(value)
    if qty is None or math.isnan(qty):
        qty = float(default)
    return int(min(max(qty, 1), MAX_QTY))


# ========================================
# TRANSPORTE (cookie)
# ========================================

class CartService:
    """
    Lee y escribe el carrito firmado en la cookie de la respuesta.
    """
    def __init__(self, settings: Settings):
        self.settings = settings

    def _cookie_kwargs(self) -> Dict[str, Any]:
        return {
            "path": "/",
            "httponly": True,
            "samesite": "lax",
            "secure": self.settings.CART_COOKIE_SECURE,
        }

    def read_cart(self, request: Request, products: Iterable[Any]) -> Cart:
        """
        Devuelve el carrito de la petición normalizado contra `products`.
        Un token ausente, manipulado o ilegible equivale a un carrito vacío.
        """
        secret = self.settings.require_cookie_secret()
        products_by_sku = {product.sku: product for product in products}
        token = request.cookies.get(self.settings.CART_COOKIE_NAME)
        decoded = decode_cart(token, secret)
        return normalize_cart(decoded, products_by_sku)

    def write_cart(self, response: Response, cart: Cart) -> None:
        """Firma el carrito y lo emite en la cookie (30 días)."""
        secret = self.settings.require_cookie_secret()
        response.set_cookie(
            self.settings.CART_COOKIE_NAME,
            encode_cart(cart, secret),
            max_age=self.settings.CART_COOKIE_MAX_AGE,
            **self._cookie_kwargs(),
        )

    def clear_cart(self, response: Response) -> None:
        """Vacía la cookie con caducidad inmediata."""
        response.set_cookie(
            self.settings.CART_COOKIE_NAME,
            "",
            max_age=0,
            **self._cookie_kwargs(),
        )
