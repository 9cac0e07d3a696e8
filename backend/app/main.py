# backend/app/main.py
"""
Punto de entrada principal de la aplicación FastAPI.

Este módulo configura y inicializa la aplicación FastAPI completa,
incluyendo el logging, el registro de rutas, el manejo de errores de
configuración y los eventos del ciclo de vida de la aplicación.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.core.config import settings  # Configuración centralizada de la aplicación
from app.core.exceptions import ConfigurationError
from app.api.v1.api_router import api_router_v1  # Router principal de la API v1
from app.db.database import create_tables

# ========================================
# CONFIGURACIÓN DE LOGGING
# ========================================

logging.basicConfig(level=settings.LOG_LEVEL, format=settings.LOG_FORMAT)
logger = logging.getLogger(__name__)


# ========================================
# CICLO DE VIDA DE LA APLICACIÓN
# ========================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Al arrancar crea las tablas (si hay base de datos) y avisa si falta el
    secreto del carrito: las rutas del carrito fallarán hasta que se configure.
    """
    if not settings.COOKIE_SIGNING_SECRET:
        logger.error("❌ COOKIE_SIGNING_SECRET no configurado: el carrito no funcionará")
    if settings.database_configured:
        await create_tables()
        logger.info("✅ Base de datos inicializada")
    else:
        logger.info("ℹ️  DATABASE_URL no configurada, el catálogo usa el fichero JSON")
    yield


app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    version=settings.PROJECT_VERSION,
    description="API de la tienda de Whisked Away Bakery",
    lifespan=lifespan,
)

app.include_router(api_router_v1, prefix=settings.API_V1_STR)


# ========================================
# MANEJO DE ERRORES
# ========================================

@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    """Un error de configuración nunca se degrada en silencio: se registra y se responde 500."""
    logger.error(f"❌ Error de configuración en {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Server is not configured"})


# ========================================
# ENDPOINTS RAÍZ Y VERIFICACIÓN DE ESTADO
# ========================================

@app.get("/", tags=["Root"])
async def read_root():
    """
    Endpoint raíz para verificación básica del estado de la API.

    Returns:
        dict: Mensaje de bienvenida con información del proyecto
    """
    return {"message": f"Bienvenido a {settings.PROJECT_NAME} v{settings.PROJECT_VERSION}"}
