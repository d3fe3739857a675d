# freshmarket/client/cart.py
from typing import Any, Dict, List

from freshmarket.client.api_client import ShopClient
from freshmarket.client.guest_cart import GuestCart
from freshmarket.domain.pricing import CartTotals


class ShopCart:
    """
    One cart interface for the storefront pages.

    Signed in (client has a user id): the server cart through the API.
    Otherwise: the local guest cart. The two are never merged.
    """

    def __init__(self, client: ShopClient, guest_cart: GuestCart | None = None):
        self.client = client
        self.guest_cart = guest_cart or GuestCart()

    @property
    def authenticated(self) -> bool:
        return self.client.authenticated

    def items(self) -> List[Dict[str, Any]]:
        if self.authenticated:
            return self.client.cart()
        return self.guest_cart.items()

    def add(self, product: Dict[str, Any], quantity: int = 1):
        if self.authenticated:
            return self.client.add_to_cart(product["id"], quantity)
        return self.guest_cart.add(product, quantity)

    def update(self, item_id, quantity: int):
        if not self.authenticated:
            return self.guest_cart.update(item_id, quantity)
        if quantity <= 0:
            return self.client.remove_cart_item(item_id)
        return self.client.update_cart_item(item_id, quantity)

    def remove(self, item_id):
        if self.authenticated:
            return self.client.remove_cart_item(item_id)
        return self.guest_cart.remove(item_id)

    def clear(self) -> None:
        if self.authenticated:
            self.client.clear_cart()
        else:
            self.guest_cart.clear()

    def count(self) -> int:
        return sum(i["quantity"] for i in self.items())

    def totals(self, discount_code: str | None = None) -> CartTotals:
        # cena czlonkowska liczy serwer, gosc liczy lokalnie ze snapshotow
        if self.authenticated:
            return CartTotals.from_dict(self.client.cart_totals())
        return self.guest_cart.totals(discount_code)

    def checkout(self, payment_method: str, delivery_address: str | None = None) -> Dict[str, Any]:
        if not self.authenticated:
            raise PermissionError("Sign in to place an order")
        return self.client.create_order(payment_method, delivery_address)
