# backend/app/core/exceptions.py
"""
Excepciones de negocio de la aplicación.

Los errores de manipulación o formato del carrito NO se modelan como
excepciones: el códec devuelve None y el carrito se trata como vacío.
"""


class ConfigurationError(RuntimeError):
    """Falta configuración obligatoria (secreto de firma, base de datos)."""


class DuplicateProductError(ValueError):
    """Ya existe un producto con el mismo SKU o slug."""


class DuplicateRecipeError(ValueError):
    """Ya existe una receta con el mismo slug."""
