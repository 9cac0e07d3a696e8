"""
Tests for the admin endpoints and the public product endpoints
"""

ADMIN_URL = "/api/v1/admin"
PRODUCTS_URL = "/api/v1/products"

NEW_PRODUCT = {
    "sku": "scone-01",
    "name": "Cranberry Orange Scone",
    "description": "<p>Tender crumb</p>",
    "price_display": "$3.75",
}


class TestPublicProducts:
    """Tests for GET /products."""

    def test_list_products(self, client):
        response = client.get(PRODUCTS_URL)

        assert response.status_code == 200
        assert [p["sku"] for p in response.json()] == ["muffin-01", "croissant-01", "cake-choc-01", "sourdough-01"]

    def test_get_product_by_slug(self, client):
        response = client.get(f"{PRODUCTS_URL}/butter-croissant")

        assert response.status_code == 200
        assert response.json()["sku"] == "croissant-01"

    def test_unknown_slug_returns_404(self, client):
        response = client.get(f"{PRODUCTS_URL}/no-such-cake")

        assert response.status_code == 404
        assert response.json()["detail"] == "Product not found"


class TestAdminAuth:
    """All admin routes require HTTP Basic credentials."""

    def test_missing_credentials_return_401(self, client):
        response = client.get(f"{ADMIN_URL}/products")

        assert response.status_code == 401
        assert response.headers["www-authenticate"].startswith("Basic")

    def test_wrong_credentials_return_401(self, client):
        response = client.get(f"{ADMIN_URL}/products", auth=("baker", "sugar"))
        assert response.status_code == 401

    def test_valid_credentials(self, client, admin_auth):
        response = client.get(f"{ADMIN_URL}/products", auth=admin_auth)

        assert response.status_code == 200
        assert len(response.json()) == 4


class TestAdminProducts:
    """Product management through the admin API."""

    def test_create_product(self, client, admin_auth):
        response = client.post(f"{ADMIN_URL}/products", json=NEW_PRODUCT, auth=admin_auth)

        assert response.status_code == 201
        data = response.json()
        assert data["slug"] == "cranberry-orange-scone"
        assert client.get(f"{PRODUCTS_URL}/cranberry-orange-scone").status_code == 200

    def test_new_product_can_be_added_to_cart(self, client, admin_auth):
        client.post(f"{ADMIN_URL}/products", json=NEW_PRODUCT, auth=admin_auth)

        response = client.post("/api/v1/cart/add", json={"sku": "scone-01", "qty": 2})

        assert response.status_code == 200
        assert response.json()["item_count"] == 2

    def test_duplicate_sku_returns_409(self, client, admin_auth):
        response = client.post(
            f"{ADMIN_URL}/products", json={**NEW_PRODUCT, "sku": "muffin-01"}, auth=admin_auth
        )
        assert response.status_code == 409

    def test_blank_sku_is_rejected(self, client, admin_auth):
        response = client.post(f"{ADMIN_URL}/products", json={**NEW_PRODUCT, "sku": "  "}, auth=admin_auth)
        assert response.status_code == 422

    def test_read_and_update_product(self, client, admin_auth, seed_products):
        product_id = seed_products[1]["id"]

        assert client.get(f"{ADMIN_URL}/products/{product_id}", auth=admin_auth).json()["sku"] == "sourdough-01"

        response = client.put(
            f"{ADMIN_URL}/products/{product_id}",
            json={"sku": "sourdough-01", "name": "Country Sourdough Loaf", "price_display": "$9.50"},
            auth=admin_auth,
        )

        assert response.status_code == 200
        assert response.json()["price_display"] == "$9.50"

    def test_update_missing_product_returns_404(self, client, admin_auth):
        response = client.put(f"{ADMIN_URL}/products/nope", json=NEW_PRODUCT, auth=admin_auth)
        assert response.status_code == 404

    def test_read_missing_product_returns_404(self, client, admin_auth):
        assert client.get(f"{ADMIN_URL}/products/nope", auth=admin_auth).status_code == 404

    def test_deleted_product_drops_out_of_cart(self, client, admin_auth, seed_products):
        client.post("/api/v1/cart/add", json={"sku": "muffin-01", "qty": 2})
        client.post("/api/v1/cart/add", json={"sku": "croissant-01", "qty": 1})

        response = client.delete(f"{ADMIN_URL}/products/{seed_products[0]['id']}", auth=admin_auth)

        assert response.status_code == 204
        assert client.get("/api/v1/cart/badge").json() == {"item_count": 1}


class TestAdminInquiries:
    def test_without_database_returns_503(self, client, admin_auth):
        response = client.get(f"{ADMIN_URL}/inquiries", auth=admin_auth)
        assert response.status_code == 503
