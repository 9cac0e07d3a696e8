"""Pytest configuration and fixtures"""
import json
import os
import shutil
from pathlib import Path

import pytest

# Set test environment variables before the app is imported
os.environ.setdefault("COOKIE_SIGNING_SECRET", "test-secret")
for _var in ("DATABASE_URL", "SMTP_HOST", "SMTP_PORT", "EMAIL_FROM", "EMAIL_TO"):
    os.environ.pop(_var, None)

from fastapi.testclient import TestClient

from app.api import deps
from app.core.config import Settings
from app.main import app

SEED_PRODUCTS = Path(__file__).resolve().parent.parent / "data" / "products.json"
SEED_RECIPES = SEED_PRODUCTS.with_name("recipes.json")


@pytest.fixture
def products_path(tmp_path) -> Path:
    """Copia del catálogo de ejemplo en un directorio temporal."""
    path = tmp_path / "products.json"
    shutil.copy(SEED_PRODUCTS, path)
    return path


@pytest.fixture
def recipes_path(tmp_path) -> Path:
    path = tmp_path / "recipes.json"
    shutil.copy(SEED_RECIPES, path)
    return path


@pytest.fixture
def test_settings(products_path, recipes_path) -> Settings:
    return Settings(
        COOKIE_SIGNING_SECRET="test-secret",
        DATABASE_URL=None,
        PRODUCTS_JSON_PATH=products_path,
        RECIPES_JSON_PATH=recipes_path,
        ADMIN_USER="baker",
        ADMIN_PASS="flour",
        SMTP_HOST=None,
        EMAIL_FROM=None,
        EMAIL_TO=None,
    )


@pytest.fixture
def seed_products(products_path):
    return json.loads(products_path.read_text(encoding="utf-8"))


@pytest.fixture
def seed_recipes(recipes_path):
    return json.loads(recipes_path.read_text(encoding="utf-8"))


@pytest.fixture
def client(test_settings):
    """Test client using the temporary catalog and no database"""
    app.dependency_overrides[deps.get_settings] = lambda: test_settings
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_auth():
    return ("baker", "flour")
