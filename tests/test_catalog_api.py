"""Catalog endpoints: categories, products and sample data."""


class TestInitData:
    def test_seeds_sample_catalog(self, client):
        response = client.post("/api/init-data")

        assert response.status_code == 200
        assert response.json() == {"message": "Sample data initialized"}

        categories = client.get("/api/categories").json()
        assert [c["slug"] for c in categories] == ["fruits", "vegetables"]
        assert len(client.get("/api/products").json()) == 8

    def test_is_idempotent(self, client):
        client.post("/api/init-data")
        client.post("/api/init-data")

        assert len(client.get("/api/categories").json()) == 2
        assert len(client.get("/api/products").json()) == 8


class TestCategories:
    def test_create_requires_authentication(self, client):
        response = client.post("/api/categories", json={"name": "Dairy", "slug": "dairy"})

        assert response.status_code == 401
        assert response.json() == {"message": "Authentication required"}

    def test_create_category(self, client, auth):
        response = client.post("/api/categories", json={"name": "Dairy", "slug": "dairy"}, headers=auth)

        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "Dairy"
        assert body["slug"] == "dairy"

    def test_duplicate_slug_rejected(self, client, auth, catalog):
        response = client.post("/api/categories", json={"name": "More fruit", "slug": "fruits"}, headers=auth)

        assert response.status_code == 400
        assert "fruits" in response.json()["message"]

    def test_malformed_slug_is_a_validation_error(self, client, auth):
        response = client.post("/api/categories", json={"name": "Dairy", "slug": "Dairy Stuff"}, headers=auth)

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Invalid request data"
        assert body["errors"][0]["field"] == "slug"


class TestProducts:
    def test_products_include_category(self, client, catalog):
        apples = catalog["Red Apples"]

        assert apples["price"] == "3.99"
        assert apples["unit"] == "kg"
        assert apples["is_organic"] is True
        assert apples["category"]["slug"] == "fruits"

    def test_filter_by_category(self, client, catalog):
        vegetables = next(c for c in client.get("/api/categories").json() if c["slug"] == "vegetables")

        response = client.get("/api/products", params={"category": vegetables["id"]})

        names = {p["name"] for p in response.json()}
        assert names == {"Tomatoes", "Lettuce", "Carrots", "Broccoli"}

    def test_all_or_non_numeric_category_returns_everything(self, client, catalog):
        assert len(client.get("/api/products", params={"category": "all"}).json()) == 8
        assert len(client.get("/api/products", params={"category": "fruit"}).json()) == 8

    def test_unknown_category_returns_empty_list(self, client, catalog):
        assert client.get("/api/products", params={"category": 999}).json() == []

    def test_get_product(self, client, catalog):
        product_id = catalog["Lettuce"]["id"]

        response = client.get(f"/api/products/{product_id}")

        assert response.status_code == 200
        assert response.json()["unit"] == "head"

    def test_missing_product_is_not_found(self, client, catalog):
        response = client.get("/api/products/9999")

        assert response.status_code == 404
        assert response.json() == {"message": "Product not found"}

    def test_malformed_product_id(self, client):
        response = client.get("/api/products/abc")

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid request data"

    def test_out_of_range_product_id_is_a_validation_error(self, client, catalog):
        response = client.get(f"/api/products/{2**64}")

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "path.product_id"

    def test_out_of_range_category_returns_empty_list(self, client, catalog):
        assert client.get("/api/products", params={"category": 2**64}).json() == []


class TestProductSearch:
    def _names(self, client, **params):
        response = client.get("/api/products", params=params)
        assert response.status_code == 200
        return {p["name"] for p in response.json()}

    def test_matches_name_case_insensitively(self, client, catalog):
        assert self._names(client, search="apple") == {"Red Apples"}

    def test_matches_category_name(self, client, catalog):
        assert self._names(client, search="VEGETABLES") == {"Tomatoes", "Lettuce", "Carrots", "Broccoli"}

    def test_matches_description(self, client, catalog):
        assert self._names(client, search="vitamin") == {"Oranges", "Broccoli"}

    def test_combines_with_category_filter(self, client, catalog):
        fruits = next(c for c in client.get("/api/categories").json() if c["slug"] == "fruits")

        names = self._names(client, search="sweet", category=fruits["id"])

        assert names == {"Red Apples", "Bananas", "Strawberries"}

    def test_blank_search_returns_everything(self, client, catalog):
        assert len(self._names(client, search="  ")) == 8

    def test_no_match_returns_empty_list(self, client, catalog):
        assert self._names(client, search="durian") == set()


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
