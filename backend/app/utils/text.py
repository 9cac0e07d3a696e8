# backend/app/utils/text.py
"""
Utilidades de texto: slugs y saneado del HTML de productos y recetas.
"""

import re
import unicodedata

import bleach
from bleach.html5lib_shim import Filter
from bleach.sanitizer import Cleaner

ALLOWED_TAGS = [
    "p", "br", "strong", "em", "u", "h2", "h3",
    "ul", "ol", "li", "a", "blockquote",
]

ALLOWED_ATTRIBUTES = {
    "a": ["href", "title", "target", "rel"],
}

ALLOWED_PROTOCOLS = ["http", "https", "mailto"]


def slugify(value: str) -> str:
    """'Crème Brûlée Tart' -> 'creme-brulee-tart'"""
    value = unicodedata.normalize("NFKD", str(value or ""))
    value = value.encode("ascii", "ignore").decode("ascii").lower()
    value = re.sub(r"[^a-z0-9]+", "-", value)
    return value.strip("-")


def sanitize_product_html(html: str) -> str:
    """Deja sólo el HTML de formato permitido en las descripciones del catálogo."""
    return bleach.clean(
        html or "",
        tags=ALLOWED_TAGS,
        attributes=ALLOWED_ATTRIBUTES,
        protocols=ALLOWED_PROTOCOLS,
        strip=True,
    )


class _NewTabLinks(Filter):
    """Todos los enlaces de una receta se abren en otra pestaña."""

    def __iter__(self):
        for token in super().__iter__():
            if token["type"] in ("StartTag", "EmptyTag") and token["name"] == "a":
                attrs = dict(token.get("data") or {})
                attrs[(None, "rel")] = "noopener"
                attrs[(None, "target")] = "_blank"
                token["data"] = attrs
            yield token


_recipe_cleaner = Cleaner(
    tags=ALLOWED_TAGS,
    attributes=ALLOWED_ATTRIBUTES,
    protocols=ALLOWED_PROTOCOLS,
    strip=True,
    filters=[_NewTabLinks],
)


def sanitize_recipe_html(html: str) -> str:
    """Igual que las descripciones de producto, forzando rel="noopener" y target="_blank" en los enlaces."""
    return _recipe_cleaner.clean(html or "")
