"""
Este archivo contiene el router principal para la API versión 1.

Se encarga de registrar y configurar todos los routers de la versión 1 de la API.
"""

from fastapi import APIRouter, Depends

from app.api import deps

# Importación de routers especializados por dominio de negocio
from app.api.v1.endpoints import (
    products,
    recipes,
    cart,
    checkout,
    admin
)

# ========================================
# CONFIGURACIÓN DEL ROUTER PRINCIPAL V1
# ========================================

api_router_v1 = APIRouter()

# ========================================
# REGISTRO DE ROUTERS POR DOMINIO DE NEGOCIO
# ========================================

# ROUTER DE PRODUCTOS
# Catálogo público de la pastelería
api_router_v1.include_router(
    products.router,
    prefix="/products",             # Prefijo: /api/v1/products
    tags=["Products"]
)

# ROUTER DE RECETAS
# Recetas favoritas publicadas
api_router_v1.include_router(
    recipes.router,
    prefix="/recipes",
    tags=["Recipes"]
)

# ROUTER DEL CARRITO
# Carrito en cookie firmada
api_router_v1.include_router(
    cart.router,
    prefix="/cart",
    tags=["Cart"]
)

# ROUTER DE CHECKOUT
# Convierte el carrito en una consulta y avisa por correo
api_router_v1.include_router(
    checkout.router,
    prefix="/checkout",
    tags=["Checkout"]
)

# ROUTER DE ADMINISTRACIÓN
# Protegido con HTTP Basic para todas sus rutas
api_router_v1.include_router(
    admin.router,
    prefix="/admin",
    tags=["Admin"],
    dependencies=[Depends(deps.require_admin)]
)
