# backend/app/api/deps.py
"""
Módulo de dependencias para FastAPI.

Este archivo centraliza todas las dependencias que pueden ser inyectadas
en los endpoints de la API: sesión de base de datos, configuración,
servicio de carrito y verificación del administrador.
"""

import secrets
from typing import AsyncGenerator, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import database
from app.core.config import Settings, settings
from app.services.cart_service import CartService
from app.services.catalog_service import CatalogService
from app.services.recipe_service import RecipeService

admin_security = HTTPBasic(realm="Whisked Away Admin")


async def get_db() -> AsyncGenerator[Optional[AsyncSession], None]:
    """
    Dependencia de FastAPI para obtener una sesión de base de datos asíncrona.
    Produce None cuando no hay base de datos configurada.
    """
    if database.AsyncSessionLocal is None:
        yield None
        return
    async with database.AsyncSessionLocal() as session:
        yield session

def get_settings() -> Settings:
    """
    Dependencia de FastAPI para obtener el objeto de configuración.
    """
    return settings

def get_cart_service(settings: Settings = Depends(get_settings)) -> CartService:
    """
    Dependencia para obtener el servicio de carrito.
    """
    return CartService(settings)

def require_admin(
    credentials: HTTPBasicCredentials = Depends(admin_security),
    settings: Settings = Depends(get_settings),
) -> str:
    """
    Verifica las credenciales HTTP Basic del administrador.
    """
    user_ok = secrets.compare_digest(credentials.username.encode("utf-8"), settings.ADMIN_USER.encode("utf-8"))
    pass_ok = secrets.compare_digest(credentials.password.encode("utf-8"), settings.ADMIN_PASS.encode("utf-8"))
    if not (user_ok and pass_ok):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid admin credentials",
            headers={"WWW-Authenticate": "Basic"},
        )
    return credentials.username

def get_catalog_service(settings: Settings = Depends(get_settings)) -> CatalogService:
    """
    Dependencia para obtener el servicio de catálogo.
    """
    return CatalogService(settings)

def get_recipe_service(settings: Settings = Depends(get_settings)) -> RecipeService:
    """
    Dependencia para obtener el servicio de recetas.
    """
    return RecipeService(settings)
