# freshmarket/client/guest_cart.py
import json
import time
from decimal import Decimal
from pathlib import Path
from typing import Any, Callable, Dict, List

from freshmarket.domain.pricing import CartTotals, calculate_totals
from freshmarket.utils.settings import GUEST_CART_PATH
from freshmarket.utils.logging import get_logger

logger = get_logger(__name__)

GUEST_CART_KEY = "freshmarket_guest_cart"


def _snapshot(product: Dict[str, Any]) -> Dict[str, Any]:
    category = product.get("category") or {}
    return {
        "id": product["id"],
        "name": product["name"],
        "price": str(product["price"]),
        "unit": product.get("unit"),
        "image_url": product.get("image_url"),
        "category": {"name": category.get("name")},
    }


def _is_entry(item) -> bool:
    if not isinstance(item, dict) or not isinstance(item.get("product"), dict):
        return False
    quantity = item.get("quantity")
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        return False
    if "id" not in item or "product_id" not in item:
        return False
    try:
        Decimal(str(item["product"]["price"]))
    except (KeyError, ArithmeticError):
        return False
    return True


class GuestCart:
    """
    Cart of a visitor who is not signed in.

    Kept on the client only, as a JSON file under ``GUEST_CART_KEY``.
    One entry per product; the product is stored as a snapshot taken
    when it was first added. Nothing here is sent to the server cart
    when the visitor signs in.
    """

    def __init__(self, path: Path | str | None = None, clock: Callable[[], float] = time.time):
        self.path = Path(path) if path else GUEST_CART_PATH
        self.clock = clock

    def items(self) -> List[Dict[str, Any]]:
        if not self.path.exists():
            return []
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Unreadable guest cart {self.path}, treating as empty: {e}")
            return []

        if isinstance(data, dict):
            data = data.get(GUEST_CART_KEY, [])
        if not isinstance(data, list) or not all(_is_entry(i) for i in data):
            logger.warning(f"Malformed guest cart {self.path}, treating as empty")
            return []
        return data

    def save(self, items: List[Dict[str, Any]]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({GUEST_CART_KEY: items}), encoding="utf-8")

    def add(self, product: Dict[str, Any], quantity: int = 1) -> List[Dict[str, Any]]:
        if quantity <= 0:
            raise ValueError("Quantity must be greater than 0")

        cart = self.items()
        existing = next((i for i in cart if i["product_id"] == product["id"]), None)

        if existing:
            existing["quantity"] += quantity
        else:
            cart.append(
                {
                    "id": f"guest_{product['id']}_{int(self.clock() * 1000)}",
                    "product_id": product["id"],
                    "quantity": quantity,
                    "product": _snapshot(product),
                }
            )

        self.save(cart)
        return cart

    def update(self, item_id: str, quantity: int) -> List[Dict[str, Any]]:
        """Set the quantity of an entry; zero or less removes it."""
        cart = self.items()
        for index, item in enumerate(cart):
            if item["id"] == item_id:
                if quantity <= 0:
                    del cart[index]
                else:
                    item["quantity"] = quantity
                break

        self.save(cart)
        return cart

    def remove(self, item_id: str) -> List[Dict[str, Any]]:
        cart = [i for i in self.items() if i["id"] != item_id]
        self.save(cart)
        return cart

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()

    def count(self) -> int:
        return sum(i["quantity"] for i in self.items())

    def totals(self, discount_code: str | None = None) -> CartTotals:
        return calculate_totals(
            ((Decimal(i["product"]["price"]), i["quantity"]) for i in self.items()),
            authenticated=False,
            discount_code=discount_code,
        )
