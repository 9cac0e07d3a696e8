"""
Tests for the cart endpoints
"""

from app.api import deps
from app.core.cart_codec import encode_cart
from app.core.config import Settings
from app.main import app
from app.schemas.cart_schema import Cart, CartLine

CART_URL = "/api/v1/cart"


def _set_cart_cookie(client, *pairs, secret="test-secret"):
    cart = Cart(items=[CartLine(sku=sku, qty=qty) for sku, qty in pairs])
    client.cookies.set("wa_cart", encode_cart(cart, secret))


class TestReadCart:
    """Tests for GET /cart and GET /cart/badge."""

    def test_empty_cart_without_cookie(self, client):
        response = client.get(CART_URL)

        assert response.status_code == 200
        assert response.json() == {"items": [], "item_count": 0}

    def test_cart_lines_include_product_details(self, client):
        _set_cart_cookie(client, ("muffin-01", 3))

        data = client.get(CART_URL).json()

        assert data["item_count"] == 3
        line = data["items"][0]
        assert line["sku"] == "muffin-01"
        assert line["qty"] == 3
        assert line["name"] == "Blueberry Muffin"
        assert line["slug"] == "blueberry-muffin"
        assert line["price_display"] == "$3.50 each"

    def test_badge_sums_quantities(self, client):
        _set_cart_cookie(client, ("muffin-01", 2), ("sourdough-01", 5))

        response = client.get(f"{CART_URL}/badge")

        assert response.status_code == 200
        assert response.json() == {"item_count": 7}

    def test_forged_cookie_reads_as_empty_cart(self, client):
        _set_cart_cookie(client, ("muffin-01", 3), secret="attacker-secret")
        assert client.get(CART_URL).json() == {"items": [], "item_count": 0}

    def test_garbage_cookie_reads_as_empty_cart(self, client):
        client.cookies.set("wa_cart", "not-a-token")
        assert client.get(CART_URL).json() == {"items": [], "item_count": 0}

    def test_unknown_sku_in_cookie_is_dropped(self, client):
        _set_cart_cookie(client, ("discontinued-01", 4), ("croissant-01", 1))

        data = client.get(CART_URL).json()

        assert [line["sku"] for line in data["items"]] == ["croissant-01"]
        assert data["item_count"] == 1


class TestAddAndUpdate:
    """Tests for POST /cart/add and POST /cart/update."""

    def test_add_sets_signed_cookie(self, client):
        response = client.post(f"{CART_URL}/add", json={"sku": "muffin-01", "qty": 2})

        assert response.status_code == 200
        assert response.json()["item_count"] == 2
        cookie = response.headers["set-cookie"]
        assert cookie.startswith("wa_cart=")
        assert "HttpOnly" in cookie
        assert "Max-Age=2592000" in cookie

    def test_added_items_persist_across_requests(self, client):
        client.post(f"{CART_URL}/add", json={"sku": "muffin-01", "qty": 2})
        client.post(f"{CART_URL}/add", json={"sku": "sourdough-01", "qty": 1})

        data = client.get(CART_URL).json()

        assert [(line["sku"], line["qty"]) for line in data["items"]] == [("muffin-01", 2), ("sourdough-01", 1)]
        assert client.get(f"{CART_URL}/badge").json() == {"item_count": 3}

    def test_add_existing_sku_replaces_quantity(self, client):
        client.post(f"{CART_URL}/add", json={"sku": "muffin-01", "qty": 2})
        data = client.post(f"{CART_URL}/add", json={"sku": "muffin-01", "qty": 4}).json()

        assert data["items"] == [
            {
                "sku": "muffin-01",
                "qty": 4,
                "name": "Blueberry Muffin",
                "slug": "blueberry-muffin",
                "image_url": "/assets/products/blueberry-muffin.jpg",
                "price_display": "$3.50 each",
            }
        ]

    def test_unknown_sku_is_rejected(self, client):
        response = client.post(f"{CART_URL}/add", json={"sku": "ghost-01", "qty": 1})

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid SKU"
        assert "set-cookie" not in response.headers

    def test_missing_quantity_defaults_to_one(self, client):
        data = client.post(f"{CART_URL}/add", json={"sku": "croissant-01"}).json()
        assert data["item_count"] == 1

    def test_zero_quantity_defaults_to_one(self, client):
        data = client.post(f"{CART_URL}/add", json={"sku": "croissant-01", "qty": 0}).json()
        assert data["item_count"] == 1

    def test_quantity_is_clamped(self, client):
        data = client.post(f"{CART_URL}/add", json={"sku": "croissant-01", "qty": 5000}).json()
        assert data["item_count"] == 999

        data = client.post(f"{CART_URL}/update", json={"sku": "croissant-01", "qty": -4}).json()
        assert data["item_count"] == 1

    def test_fractional_quantity_is_truncated(self, client):
        data = client.post(f"{CART_URL}/update", json={"sku": "croissant-01", "qty": 2.8}).json()
        assert data["item_count"] == 2

    def test_update_changes_quantity(self, client):
        _set_cart_cookie(client, ("muffin-01", 2), ("sourdough-01", 1))

        data = client.post(f"{CART_URL}/update", json={"sku": "muffin-01", "qty": 6}).json()

        assert [(line["sku"], line["qty"]) for line in data["items"]] == [("muffin-01", 6), ("sourdough-01", 1)]


class TestRemoveAndClear:
    """Tests for POST /cart/remove and DELETE /cart."""

    def test_remove_drops_line(self, client):
        _set_cart_cookie(client, ("muffin-01", 2), ("sourdough-01", 1))

        data = client.post(f"{CART_URL}/remove", json={"sku": "muffin-01"}).json()

        assert [line["sku"] for line in data["items"]] == ["sourdough-01"]
        assert data["item_count"] == 1

    def test_remove_absent_sku_is_not_an_error(self, client):
        _set_cart_cookie(client, ("muffin-01", 2))

        response = client.post(f"{CART_URL}/remove", json={"sku": "ghost-01"})

        assert response.status_code == 200
        assert response.json()["item_count"] == 2

    def test_delete_expires_cookie(self, client):
        _set_cart_cookie(client, ("muffin-01", 2))

        response = client.delete(CART_URL)

        assert response.status_code == 204
        cookie = response.headers["set-cookie"]
        assert cookie.startswith("wa_cart=")
        assert "Max-Age=0" in cookie


class TestMissingSecret:
    """Cart routes refuse to work without a signing secret."""

    def test_cart_routes_return_500(self, client, products_path):
        app.dependency_overrides[deps.get_settings] = lambda: Settings(
            COOKIE_SIGNING_SECRET=None,
            DATABASE_URL=None,
            PRODUCTS_JSON_PATH=products_path,
        )

        assert client.get(CART_URL).status_code == 500
        response = client.post(f"{CART_URL}/add", json={"sku": "muffin-01", "qty": 1})
        assert response.status_code == 500
        assert response.json() == {"detail": "Server is not configured"}
