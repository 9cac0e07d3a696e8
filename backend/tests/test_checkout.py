"""
Tests for the checkout endpoint
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from app.api import deps
from app.core.cart_codec import encode_cart
from app.main import app
from app.schemas.cart_schema import Cart, CartLine

CHECKOUT_URL = "/api/v1/checkout"

VALID_FORM = {
    "name": "Ada Baker",
    "email": "ada@example.com",
    "phone": "555-0100",
    "message": "Pick up Saturday morning",
}


def _set_cart_cookie(client, *pairs):
    cart = Cart(items=[CartLine(sku=sku, qty=qty) for sku, qty in pairs])
    client.cookies.set("wa_cart", encode_cart(cart, "test-secret"))


@pytest.fixture
def db_session():
    """Sesión simulada: el catálogo se lee de product_crud parcheado."""
    session = MagicMock()
    session.rollback = AsyncMock()
    return session


@pytest.fixture
def db_client(client, db_session, seed_products):
    async def override_get_db():
        yield db_session

    app.dependency_overrides[deps.get_db] = override_get_db
    products = [SimpleNamespace(**p) for p in seed_products]
    with patch("app.crud.product_crud.get_products", AsyncMock(return_value=products)):
        yield client


@pytest.fixture
def create_inquiry():
    with patch("app.crud.inquiry_crud.create_inquiry", AsyncMock(return_value="inq-123")) as mock:
        yield mock


@pytest.fixture
def send_email():
    with patch("app.services.email_service.send_inquiry_email", AsyncMock(return_value="sent")) as mock:
        yield mock


class TestCheckoutValidation:
    """Requests rejected before anything is stored."""

    def test_empty_cart_is_rejected(self, db_client, create_inquiry):
        response = db_client.post(CHECKOUT_URL, json=VALID_FORM)

        assert response.status_code == 400
        assert response.json()["detail"] == "Cart is empty"
        create_inquiry.assert_not_called()

    def test_honeypot_is_rejected(self, db_client, create_inquiry):
        _set_cart_cookie(db_client, ("muffin-01", 2))

        response = db_client.post(CHECKOUT_URL, json={**VALID_FORM, "website": "http://spam.example"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Spam detected"
        create_inquiry.assert_not_called()

    @pytest.mark.parametrize("missing", ["name", "email"])
    def test_name_and_email_are_required(self, db_client, create_inquiry, missing):
        _set_cart_cookie(db_client, ("muffin-01", 2))

        response = db_client.post(CHECKOUT_URL, json={**VALID_FORM, missing: "   "})

        assert response.status_code == 400
        assert response.json()["detail"] == "Name and email are required"

    def test_invalid_email_is_rejected(self, db_client, create_inquiry):
        _set_cart_cookie(db_client, ("muffin-01", 2))

        response = db_client.post(CHECKOUT_URL, json={**VALID_FORM, "email": "not-an-email"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Email is invalid"
        create_inquiry.assert_not_called()

    def test_without_database_returns_503(self, client):
        _set_cart_cookie(client, ("muffin-01", 2))

        response = client.post(CHECKOUT_URL, json=VALID_FORM)

        assert response.status_code == 503


class TestCheckoutSuccess:
    """A valid checkout stores the inquiry, notifies and clears the cart."""

    def test_creates_inquiry_and_clears_cart(self, db_client, db_session, create_inquiry, send_email):
        _set_cart_cookie(db_client, ("muffin-01", 2), ("ghost-01", 1), ("sourdough-01", 1))

        response = db_client.post(CHECKOUT_URL, json=VALID_FORM, headers={"referer": "https://shop.example/cart"})

        assert response.status_code == 201
        assert response.json() == {"inquiry_id": "inq-123"}
        assert "Max-Age=0" in response.headers["set-cookie"]

        session, inquiry, items, products_by_sku = create_inquiry.await_args.args
        assert session is db_session
        assert inquiry.name == "Ada Baker"
        assert inquiry.source_url == "https://shop.example/cart"
        assert [(line.sku, line.qty) for line in items] == [("muffin-01", 2), ("sourdough-01", 1)]
        assert "muffin-01" in products_by_sku
        send_email.assert_awaited_once()
        assert send_email.await_args.args[1] == "inq-123"

    def test_explicit_source_url_wins_over_referer(self, db_client, create_inquiry, send_email):
        _set_cart_cookie(db_client, ("muffin-01", 1))

        db_client.post(
            CHECKOUT_URL,
            json={**VALID_FORM, "source_url": "https://shop.example/products/blueberry-muffin"},
            headers={"referer": "https://shop.example/cart"},
        )

        inquiry = create_inquiry.await_args.args[1]
        assert inquiry.source_url == "https://shop.example/products/blueberry-muffin"

    def test_email_failure_does_not_fail_checkout(self, db_client, create_inquiry):
        _set_cart_cookie(db_client, ("muffin-01", 2))

        with patch(
            "app.services.email_service.send_inquiry_email",
            AsyncMock(side_effect=ConnectionError("smtp down")),
        ):
            response = db_client.post(CHECKOUT_URL, json=VALID_FORM)

        assert response.status_code == 201
        assert response.json() == {"inquiry_id": "inq-123"}
        assert "Max-Age=0" in response.headers["set-cookie"]

    def test_storage_failure_keeps_cart(self, db_client, send_email):
        _set_cart_cookie(db_client, ("muffin-01", 2))

        with patch("app.crud.inquiry_crud.create_inquiry", AsyncMock(side_effect=RuntimeError("db down"))):
            with pytest.raises(RuntimeError):
                db_client.post(CHECKOUT_URL, json=VALID_FORM)

        send_email.assert_not_called()
