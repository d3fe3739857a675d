"""Client data layer against the real app, through the TestClient."""

from decimal import Decimal

import pytest
import requests

from freshmarket.client.api_client import ApiError, ShopClient
from freshmarket.client.cart import ShopCart
from freshmarket.client.guest_cart import GuestCart


class AppSession:
    """Looks like requests.Session to ShopClient, forwards to the ASGI app."""

    def __init__(self, client):
        self.client = client

    def request(self, method, url, json=None, params=None, headers=None, timeout=None):
        return self.client.request(method, url, json=json, params=params, headers=headers)


@pytest.fixture()
def session(client):
    return AppSession(client)


@pytest.fixture()
def guest_api(session):
    return ShopClient(base_url="http://testserver", session=session)


@pytest.fixture()
def member_api(session, guest_api):
    guest_api.upsert_user("user-9", email="marta@example.com", first_name="Marta")
    return ShopClient(base_url="http://testserver", user_id="user-9", session=session)


@pytest.fixture()
def products(guest_api):
    guest_api.init_data()
    return {p["name"]: p for p in guest_api.products()}


class TestShopClient:
    def test_catalog(self, guest_api, products):
        fruits = next(c for c in guest_api.categories() if c["slug"] == "fruits")

        assert len(guest_api.products(category=fruits["id"])) == 4
        assert guest_api.product(products["Bananas"]["id"])["name"] == "Bananas"

    def test_product_search(self, guest_api, products):
        fruits = next(c for c in guest_api.categories() if c["slug"] == "fruits")

        assert [p["name"] for p in guest_api.products(search="broccoli")] == ["Broccoli"]
        assert guest_api.products(category=fruits["id"], search="broccoli") == []

    def test_not_found_raises_api_error(self, guest_api, products):
        with pytest.raises(ApiError) as exc:
            guest_api.product(9999)

        assert exc.value.status_code == 404
        assert exc.value.message == "Product not found"

    def test_validation_errors_are_exposed(self, guest_api):
        with pytest.raises(ApiError) as exc:
            guest_api.send_contact_message("A", "B", "bad", "other", "short")

        assert exc.value.status_code == 400
        assert {e["field"] for e in exc.value.errors} == {"email", "message"}

    def test_guest_cannot_read_server_cart(self, guest_api):
        with pytest.raises(ApiError) as exc:
            guest_api.cart()

        assert exc.value.status_code == 401

    def test_member_checkout_flow(self, member_api, products):
        assert member_api.current_user()["first_name"] == "Marta"

        member_api.add_to_cart(products["Broccoli"]["id"], 2)
        order = member_api.create_order("card", "Gran Via 5")

        assert order["status"] == "pending"
        assert member_api.cart() == []
        assert [o["id"] for o in member_api.orders()] == [order["id"]]
        assert member_api.order(order["id"])["total"] == order["total"]

    def test_contact(self, guest_api):
        body = guest_api.send_contact_message(
            "Pablo", "Ruiz", "pablo@example.com", "product", "Are your carrots organic?"
        )

        assert body["message"] == "Message sent successfully"


class TestShopCart:
    def test_guest_mode_stays_local(self, guest_api, products, tmp_path):
        cart = ShopCart(guest_api, GuestCart(tmp_path / "cart.json"))

        cart.add(products["Red Apples"], 2)
        cart.add(products["Red Apples"])

        assert cart.authenticated is False
        assert cart.count() == 3
        assert cart.totals().subtotal == Decimal("11.97")

        with pytest.raises(PermissionError):
            cart.checkout("bizum")

        cart.clear()
        assert cart.items() == []

    def test_member_mode_uses_server_cart(self, member_api, products, tmp_path):
        guest_cart = GuestCart(tmp_path / "cart.json")
        cart = ShopCart(member_api, guest_cart)

        item = cart.add(products["Strawberries"], 1)
        cart.update(item["id"], 3)

        assert cart.count() == 3
        assert guest_cart.items() == []

        totals = cart.totals()
        assert totals.subtotal == Decimal("20.97")
        assert totals.discount == Decimal("1.05")

        cart.update(item["id"], 0)
        assert cart.items() == []

    def test_guest_cart_is_not_merged_on_sign_in(self, guest_api, member_api, products, tmp_path):
        guest_cart = GuestCart(tmp_path / "cart.json")
        ShopCart(guest_api, guest_cart).add(products["Lettuce"], 1)

        signed_in = ShopCart(member_api, guest_cart)

        assert signed_in.items() == []
        assert guest_cart.count() == 1


class FlakySession:
    def __init__(self, failures):
        self.failures = failures
        self.calls = 0

    def request(self, method, url, **kwargs):
        self.calls += 1
        if self.calls <= self.failures:
            raise requests.ConnectionError("connection refused")
        return _OkResponse()


class _OkResponse:
    status_code = 200

    def json(self):
        return {"status": "ok"}


def test_transport_errors_are_retried():
    session = FlakySession(failures=2)
    api = ShopClient(base_url="http://shop.local", session=session)

    assert api.categories() == {"status": "ok"}
    assert session.calls == 3


def test_gives_up_after_three_attempts():
    session = FlakySession(failures=5)
    api = ShopClient(base_url="http://shop.local", session=session)

    with pytest.raises(requests.ConnectionError):
        api.categories()
    assert session.calls == 3
