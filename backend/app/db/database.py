# backend/app/db/database.py

"""
Configuración principal de la base de datos para la aplicación.

Este módulo establece la conexión con PostgreSQL usando SQLAlchemy y define
los componentes básicos que serán utilizados por toda la aplicación:
- Motor de base de datos (engine)
- Fábrica de sesiones (AsyncSessionLocal)
- Clase base para modelos (Base)

La base de datos es opcional: si DATABASE_URL no está configurada, `engine`
y `AsyncSessionLocal` son None y el catálogo trabaja sobre el fichero JSON.
La función get_db() vive en app/api/deps.py.
"""

from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy.orm import declarative_base
from app.core.config import settings # Importamos nuestra configuración

engine = None
AsyncSessionLocal = None

if settings.database_configured:
    # asyncpg acepta ssl="require": cifra la conexión sin verificar el certificado
    connect_args = {"ssl": "require"} if settings.DATABASE_SSL else {}
    engine = create_async_engine(settings.async_database_url, pool_pre_ping=True, connect_args=connect_args)

    # expire_on_commit=False es importante para que los objetos sigan siendo utilizables
    # después de que la transacción se haya confirmado.
    AsyncSessionLocal = async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

# Clase base declarativa para todos los modelos ORM
Base = declarative_base()


async def create_tables() -> None:
    """Crea las tablas si no existen (sólo con base de datos configurada)."""
    if engine is None:
        return
    # Importar los modelos registra sus tablas en Base.metadata
    from app.db.models import product_model, inquiry_model, recipe_model  # noqa: F401
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
