# backend/app/core/config.py
"""
Este archivo contiene la configuración de la aplicación.

Toda la configuración se construye una sola vez al arrancar el proceso y se
inyecta en los endpoints mediante `deps.get_settings`. El secreto de firma
del carrito nunca se lee desde el entorno dentro del códec.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from pathlib import Path

from app.core.exceptions import ConfigurationError

# Apunta al directorio 'backend/'
BASE_DIR = Path(__file__).resolve().parent.parent.parent

class Settings(BaseSettings):
    """
    Configuración de la aplicación usando Pydantic BaseSettings.
    Variables sensibles desde .env, defaults seguros para el resto.
    """
    # Configuración general del proyecto
    BASE_DIR: Path = BASE_DIR
    API_V1_STR: str = "/api/v1"
    PROJECT_NAME: str = "Whisked Away Bakery"
    PROJECT_VERSION: str = "0.1.0"

    # Carrito firmado - el secreto es REQUERIDO en el primer uso
    COOKIE_SIGNING_SECRET: Optional[str] = None
    CART_COOKIE_NAME: str = "wa_cart"
    CART_COOKIE_MAX_AGE: int = 60 * 60 * 24 * 30
    CART_COOKIE_SECURE: bool = False

    # Base de datos - opcional, sin ella el catálogo usa el fichero JSON
    DATABASE_URL: Optional[str] = None
    DATABASE_SSL: bool = True

    # Catálogo y recetas en fichero (fallback)
    PRODUCTS_JSON_PATH: Path = BASE_DIR / "data" / "products.json"
    RECIPES_JSON_PATH: Path = BASE_DIR / "data" / "recipes.json"

    # Administración
    ADMIN_USER: str = "admin"
    ADMIN_PASS: str = "admin"

    # SMTP for emails - From .env
    SMTP_HOST: Optional[str] = None
    SMTP_PORT: Optional[int] = None
    SMTP_USER: Optional[str] = None
    SMTP_PASSWORD: Optional[str] = None
    SMTP_SSL: bool = True
    EMAIL_FROM: Optional[str] = None
    EMAIL_TO: Optional[str] = None

    # Logging - Defaults seguros
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    @property
    def database_configured(self) -> bool:
        """Indica si hay una base de datos real configurada (no el placeholder del .env de ejemplo)."""
        url = self.DATABASE_URL or ""
        if not url:
            return False
        if "host:5432/db" in url:
            return False
        return True

    @property
    def async_database_url(self) -> str:
        """URL de conexión asíncrona (asyncpg) derivada de DATABASE_URL."""
        if not self.database_configured:
            raise ConfigurationError("DATABASE_URL is not set")
        url = self.DATABASE_URL
        if url.startswith("postgres://"):
            url = "postgresql://" + url[len("postgres://"):]
        if url.startswith("postgresql://"):
            url = "postgresql+asyncpg://" + url[len("postgresql://"):]
        return url

    @property
    def email_configured(self) -> bool:
        return all([self.SMTP_HOST, self.SMTP_PORT, self.EMAIL_FROM, self.EMAIL_TO])

    def require_cookie_secret(self) -> str:
        """
        Devuelve el secreto de firma del carrito.

        Raises:
            ConfigurationError: si COOKIE_SIGNING_SECRET no está definido. Un
                carrito firmado con una clave vacía sería falsificable.
        """
        if not self.COOKIE_SIGNING_SECRET:
            raise ConfigurationError("COOKIE_SIGNING_SECRET is not set")
        return self.COOKIE_SIGNING_SECRET

# Instancia global de la configuración
settings = Settings()
