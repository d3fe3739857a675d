"""Placing orders and order history."""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from freshmarket.data.database import SessionLocal
from freshmarket.data.models import CartItemModel, OrderItemModel, OrderModel, ProductModel
from freshmarket.main import app
from freshmarket.repos.order_repo import OrderRepo
from freshmarket.services.order_service import OrderService


def _fill_cart(client, headers, catalog, lines):
    for name, quantity in lines:
        response = client.post(
            "/api/cart", json={"product_id": catalog[name]["id"], "quantity": quantity}, headers=headers
        )
        assert response.status_code == 200


def _place(client, headers, payment_method="bizum", address="Calle Mayor 1, Madrid"):
    return client.post(
        "/api/orders",
        json={"payment_method": payment_method, "delivery_address": address},
        headers=headers,
    )


class TestCreateOrder:
    def test_order_totals_and_items(self, client, auth, catalog):
        _fill_cart(client, auth, catalog, [("Red Apples", 2), ("Strawberries", 1)])

        response = _place(client, auth)

        assert response.status_code == 201
        order = response.json()
        assert order["status"] == "pending"
        assert order["payment_method"] == "bizum"
        assert order["delivery_address"] == "Calle Mayor 1, Madrid"
        assert Decimal(order["subtotal"]) == Decimal("14.97")
        assert Decimal(order["delivery_fee"]) == Decimal("5.99")
        assert Decimal(order["discount"]) == Decimal("0.75")
        assert Decimal(order["total"]) == Decimal("20.21")

        lines = {i["product"]["name"]: (i["quantity"], Decimal(i["price"])) for i in order["items"]}
        assert lines == {
            "Red Apples": (2, Decimal("3.99")),
            "Strawberries": (1, Decimal("6.99")),
        }

    def test_free_delivery_over_threshold(self, client, auth, catalog):
        _fill_cart(client, auth, catalog, [("Strawberries", 10)])

        order = _place(client, auth, payment_method="card").json()

        assert Decimal(order["subtotal"]) == Decimal("69.90")
        assert Decimal(order["delivery_fee"]) == Decimal("0.00")
        assert Decimal(order["discount"]) == Decimal("3.50")
        assert Decimal(order["total"]) == Decimal("66.40")

    def test_cart_is_cleared(self, client, auth, catalog, count_rows):
        _fill_cart(client, auth, catalog, [("Bananas", 1), ("Broccoli", 2)])

        order = _place(client, auth).json()

        assert client.get("/api/cart", headers=auth).json() == []
        assert count_rows(OrderModel) == 1
        assert count_rows(OrderItemModel, order_id=order["id"]) == 2

    def test_empty_cart_rejected_before_any_write(self, client, auth, catalog, count_rows):
        response = _place(client, auth)

        assert response.status_code == 400
        assert response.json() == {"message": "Cart is empty"}
        assert count_rows(OrderModel) == 0

    def test_unknown_payment_method(self, client, auth, catalog):
        _fill_cart(client, auth, catalog, [("Bananas", 1)])

        response = _place(client, auth, payment_method="cash")

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "payment_method"

    def test_requires_authentication(self, client, catalog):
        assert _place(client, {}).status_code == 401

    def test_prices_are_snapshots(self, client, auth, catalog):
        _fill_cart(client, auth, catalog, [("Tomatoes", 2)])
        order = _place(client, auth).json()

        with SessionLocal() as session:
            product = session.get(ProductModel, catalog["Tomatoes"]["id"])
            product.price = Decimal("9.99")
            session.commit()

        stored = client.get(f"/api/orders/{order['id']}", headers=auth).json()
        assert Decimal(stored["items"][0]["price"]) == Decimal("5.49")
        assert Decimal(stored["total"]) == Decimal(order["total"])
        assert client.get(f"/api/products/{catalog['Tomatoes']['id']}").json()["price"] == "9.99"


class TestAtomicity:
    @pytest.fixture()
    def failing_items(self, monkeypatch):
        def boom(self, order, items):
            raise RuntimeError("order_items insert failed")

        monkeypatch.setattr(OrderRepo, "_insert_items", boom)

    def test_failure_writes_nothing_and_keeps_cart(self, client, auth, catalog, failing_items, count_rows):
        _fill_cart(client, auth, catalog, [("Bananas", 1), ("Carrots", 3)])

        with SessionLocal() as session:
            with pytest.raises(RuntimeError):
                OrderService(session).create_order("user-1", "card")

        assert count_rows(OrderModel) == 0
        assert count_rows(OrderItemModel) == 0
        assert count_rows(CartItemModel, user_id="user-1") == 2

    def test_failure_surfaces_as_generic_500(self, auth, catalog, failing_items):
        client = TestClient(app, raise_server_exceptions=False)
        _fill_cart(client, auth, catalog, [("Bananas", 1)])

        response = _place(client, auth)

        assert response.status_code == 500
        assert response.json() == {"message": "Internal server error"}


class TestOrderHistory:
    def test_newest_first(self, client, auth, catalog):
        _fill_cart(client, auth, catalog, [("Bananas", 1)])
        first = _place(client, auth).json()
        _fill_cart(client, auth, catalog, [("Oranges", 1)])
        second = _place(client, auth).json()

        orders = client.get("/api/orders", headers=auth).json()

        assert [o["id"] for o in orders] == [second["id"], first["id"]]
        assert orders[0]["items"][0]["product"]["name"] == "Oranges"

    def test_history_is_per_user(self, client, auth, other_auth, catalog):
        _fill_cart(client, auth, catalog, [("Bananas", 1)])
        order = _place(client, auth).json()

        assert client.get("/api/orders", headers=other_auth).json() == []
        assert client.get(f"/api/orders/{order['id']}", headers=other_auth).status_code == 404

    def test_missing_order(self, client, auth):
        response = client.get("/api/orders/777", headers=auth)

        assert response.status_code == 404
        assert response.json() == {"message": "Order not found"}

    def test_out_of_range_order_id_is_a_validation_error(self, client, auth):
        response = client.get(f"/api/orders/{2**64}", headers=auth)

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid request data"
