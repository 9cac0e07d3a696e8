# backend/app/services/catalog_service.py

"""
Capa de servicios para el catálogo de productos de la pastelería.

El catálogo es la fuente de verdad para el carrito: en cada petición se
consulta de nuevo (nunca se cachea entre peticiones) y el carrito descarta
los SKUs que ya no existen.

Persistencia:
- Con base de datos configurada se usa PostgreSQL (`product_crud`).
- Sin base de datos, o si una operación falla, se usa el fichero JSON
  `PRODUCTS_JSON_PATH` (ver `JsonFallbackStore`).
"""

import logging
import uuid
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import Settings
from app.core.exceptions import DuplicateProductError
from app.crud import product_crud
from app.schemas.product_schema import ProductCreate, ProductResponse, ProductUpdate
from app.services.fallback_store import JsonFallbackStore
from app.utils.text import sanitize_product_html, slugify

logger = logging.getLogger(__name__)

class CatalogService(JsonFallbackStore):
    """
    Servicio para operaciones de negocio relacionadas con productos.

    Todas las operaciones reciben la sesión de base de datos (o None) y
    devuelven `ProductResponse`, independientemente del almacenamiento usado.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def json_path(self) -> Path:
        return Path(self.settings.PRODUCTS_JSON_PATH)

    @staticmethod
    def _prepare_fields(product_in: ProductCreate) -> Dict[str, Any]:
        return {
            "sku": product_in.sku.strip(),
            "slug": slugify(product_in.slug or product_in.name),
            "name": product_in.name,
            "description": sanitize_product_html(product_in.description),
            "image_url": product_in.image_url or "",
            "price_display": product_in.price_display or "",
        }

    # ========================================
    # OPERACIONES DE CONSULTA
    # ========================================

    async def list_products(self, db: Optional[AsyncSession]) -> List[ProductResponse]:
        async def from_db(session: AsyncSession) -> List[ProductResponse]:
            return [ProductResponse.model_validate(p) for p in await product_crud.get_products(session)]

        def from_json() -> List[ProductResponse]:
            products = sorted(self._load_json(), key=lambda p: str(p.get("name", "")).casefold())
            return [ProductResponse.model_validate(p) for p in products]

        return await self._with_database_fallback("Product list", db, from_db, from_json)

    async def products_by_sku(self, db: Optional[AsyncSession]) -> Dict[str, ProductResponse]:
        """Instantánea sku -> producto del catálogo actual."""
        return {product.sku: product for product in await self.list_products(db)}

    async def _get_by(self, task_name: str, db: Optional[AsyncSession], field: str, value: str,
                      crud_fn: Callable[[AsyncSession, str], Awaitable[Any]]) -> Optional[ProductResponse]:
        async def from_db(session: AsyncSession) -> Optional[ProductResponse]:
            product = await crud_fn(session, value)
            return ProductResponse.model_validate(product) if product else None

        def from_json() -> Optional[ProductResponse]:
            match = next((p for p in self._load_json() if p.get(field) == value), None)
            return ProductResponse.model_validate(match) if match else None

        return await self._with_database_fallback(task_name, db, from_db, from_json)

    async def get_product_by_slug(self, db: Optional[AsyncSession], slug: str) -> Optional[ProductResponse]:
        return await self._get_by("Product by slug", db, "slug", slug, product_crud.get_product_by_slug)

    async def get_product_by_sku(self, db: Optional[AsyncSession], sku: str) -> Optional[ProductResponse]:
        return await self._get_by("Product by sku", db, "sku", sku, product_crud.get_product_by_sku)

    async def get_product_by_id(self, db: Optional[AsyncSession], product_id: str) -> Optional[ProductResponse]:
        return await self._get_by("Product by id", db, "id", product_id, product_crud.get_product_by_id)

    # ========================================
    # OPERACIONES DE ESCRITURA
    # ========================================

    async def create_product(self, db: Optional[AsyncSession], product_in: ProductCreate) -> ProductResponse:
        """
        Crea un producto nuevo.

        Raises:
            DuplicateProductError: si el SKU o el slug ya existen.
        """
        fields = self._prepare_fields(product_in)

        async def in_db(session: AsyncSession) -> ProductResponse:
            return ProductResponse.model_validate(await product_crud.create_product(session, fields))

        def in_json() -> ProductResponse:
            products = self._load_json()
            if any(p.get("sku") == fields["sku"] for p in products):
                raise DuplicateProductError("Product SKU already exists")
            if any(p.get("slug") == fields["slug"] for p in products):
                raise DuplicateProductError("Product slug already exists")
            product = {"id": str(uuid.uuid4()), **fields}
            products.append(product)
            self._save_json(products)
            return ProductResponse.model_validate(product)

        product = await self._with_database_fallback("Create product", db, in_db, in_json)
        logger.info(f"✅ PRODUCTO: Creado SKU '{product.sku}'")
        return product

    async def update_product(
        self, db: Optional[AsyncSession], product_id: str, product_in: ProductUpdate
    ) -> Optional[ProductResponse]:
        """
        Actualiza un producto. Devuelve None si no existe.

        Raises:
            DuplicateProductError: si el nuevo SKU o slug pertenecen a otro producto.
        """
        fields = self._prepare_fields(product_in)

        async def in_db(session: AsyncSession) -> Optional[ProductResponse]:
            product = await product_crud.update_product(session, product_id, fields)
            return ProductResponse.model_validate(product) if product else None

        def in_json() -> Optional[ProductResponse]:
            products = self._load_json()
            index = next((i for i, p in enumerate(products) if p.get("id") == product_id), None)
            if index is None:
                return None
            if any(p.get("sku") == fields["sku"] for i, p in enumerate(products) if i != index):
                raise DuplicateProductError("Product SKU already exists")
            if any(p.get("slug") == fields["slug"] for i, p in enumerate(products) if i != index):
                raise DuplicateProductError("Product slug already exists")
            products[index] = {**products[index], **fields}
            self._save_json(products)
            return ProductResponse.model_validate(products[index])

        return await self._with_database_fallback("Update product", db, in_db, in_json)

    async def delete_product(self, db: Optional[AsyncSession], product_id: str) -> None:
        def in_json() -> None:
            products = self._load_json()
            self._save_json([p for p in products if p.get("id") != product_id])

        await self._with_database_fallback(
            "Delete product", db, lambda session: product_crud.delete_product(session, product_id), in_json
        )
        logger.info(f"🗑️ PRODUCTO: Eliminado id '{product_id}'")
