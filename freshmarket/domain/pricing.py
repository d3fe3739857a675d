# freshmarket/domain/pricing.py
"""
Cart and order pricing shared by the API and the client data layer.

Rules:
- delivery is a flat fee, waived for signed-in customers from the
  free-delivery threshold up; an empty cart has no delivery
- signed-in customers get the member discount on the subtotal
- guests get a discount only with a valid promo code
- total = subtotal + delivery - discount
"""
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Tuple

from freshmarket.utils.settings import (
    DELIVERY_FEE,
    FREE_DELIVERY_THRESHOLD,
    MEMBER_DISCOUNT_PERCENT,
)

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

# promo codes available to guests, percent of subtotal
DISCOUNT_CODES = {
    "WELCOME10": Decimal("10"),
}


def to_money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


def _percent_of(amount: Decimal, percent: Decimal) -> Decimal:
    return to_money(amount * percent / Decimal("100"))


def lookup_discount_code(code: str | None) -> Decimal | None:
    if not code:
        return None
    return DISCOUNT_CODES.get(code.strip().upper())


@dataclass(frozen=True)
class CartTotals:
    subtotal: Decimal
    delivery_fee: Decimal
    discount: Decimal
    total: Decimal
    item_count: int
    has_discount: bool
    has_free_delivery: bool
    discount_code_valid: bool | None = None

    def as_dict(self) -> dict:
        return {
            "subtotal": self.subtotal,
            "delivery_fee": self.delivery_fee,
            "discount": self.discount,
            "total": self.total,
            "item_count": self.item_count,
            "has_discount": self.has_discount,
            "has_free_delivery": self.has_free_delivery,
            "discount_code_valid": self.discount_code_valid,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CartTotals":
        """Rebuild from an API response, where money comes as strings."""
        return cls(
            subtotal=Decimal(str(data["subtotal"])),
            delivery_fee=Decimal(str(data["delivery_fee"])),
            discount=Decimal(str(data["discount"])),
            total=Decimal(str(data["total"])),
            item_count=int(data["item_count"]),
            has_discount=bool(data["has_discount"]),
            has_free_delivery=bool(data["has_free_delivery"]),
            discount_code_valid=data.get("discount_code_valid"),
        )


def calculate_totals(
    lines: Iterable[Tuple[Decimal, int]],
    authenticated: bool,
    discount_code: str | None = None,
    delivery_fee: Decimal = DELIVERY_FEE,
    free_delivery_threshold: Decimal = FREE_DELIVERY_THRESHOLD,
    member_discount_percent: Decimal = MEMBER_DISCOUNT_PERCENT,
) -> CartTotals:
    """Price a list of ``(unit_price, quantity)`` lines."""
    subtotal = ZERO
    item_count = 0
    for unit_price, quantity in lines:
        if quantity < 0:
            raise ValueError("Quantity cannot be negative")
        subtotal += to_money(unit_price) * quantity
        item_count += quantity
    subtotal = to_money(subtotal)

    if item_count == 0:
        delivery = ZERO
    elif authenticated and subtotal >= free_delivery_threshold:
        delivery = ZERO
    else:
        delivery = to_money(delivery_fee)

    code_valid = None
    if authenticated:
        discount = _percent_of(subtotal, member_discount_percent)
    else:
        percent = lookup_discount_code(discount_code)
        if discount_code:
            code_valid = percent is not None
        discount = _percent_of(subtotal, percent) if percent is not None else ZERO

    total = to_money(subtotal + delivery - discount)

    return CartTotals(
        subtotal=subtotal,
        delivery_fee=delivery,
        discount=discount,
        total=total,
        item_count=item_count,
        has_discount=discount > ZERO,
        has_free_delivery=item_count > 0 and delivery == ZERO,
        discount_code_valid=code_valid,
    )
