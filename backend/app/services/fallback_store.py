# backend/app/services/fallback_store.py

"""
Base común para los servicios con respaldo en fichero JSON.

El catálogo y las recetas se guardan en PostgreSQL cuando hay base de datos
configurada. Sin base de datos, o si una operación falla, se usa un fichero
JSON (una lista de objetos). Cada fallo se registra como warning y la sesión
se devuelve a un estado limpio con rollback.
"""

import json
import logging
from pathlib import Path
from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

T = TypeVar("T")


class JsonFallbackStore:
    """
    Las subclases definen `json_path`; todo lo demás se comparte.
    """

    @property
    def json_path(self) -> Path:
        raise NotImplementedError

    def _load_json(self) -> List[Dict[str, Any]]:
        try:
            raw = self.json_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        try:
            records = json.loads(raw.lstrip("\ufeff"))
        except json.JSONDecodeError:
            logger.error(f"Fichero JSON ilegible: {self.json_path}")
            return []
        return records if isinstance(records, list) else []

    def _save_json(self, records: List[Dict[str, Any]]) -> None:
        self.json_path.parent.mkdir(parents=True, exist_ok=True)
        self.json_path.write_text(json.dumps(records, indent=2, ensure_ascii=False), encoding="utf-8")

    async def _with_database_fallback(
        self,
        task_name: str,
        db: Optional[AsyncSession],
        db_fn: Callable[[AsyncSession], Awaitable[T]],
        fallback_fn: Callable[[], T],
    ) -> T:
        if db is None:
            return fallback_fn()
        try:
            return await db_fn(db)
        except SQLAlchemyError as e:
            logger.warning(f"⚠️ {task_name} falló en la base de datos, usando JSON: {e}")
            await db.rollback()
            return fallback_fn()
