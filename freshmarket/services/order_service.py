# freshmarket/services/order_service.py
from sqlalchemy.orm import Session

from freshmarket.data.models.order import OrderModel
from freshmarket.data.models.order_item import OrderItemModel
from freshmarket.domain.pricing import calculate_totals
from freshmarket.repos.cart_repo import CartRepo
from freshmarket.repos.order_repo import OrderRepo
from freshmarket.services.notification_service import NotificationService
from freshmarket.utils.logging import get_logger

logger = get_logger(__name__)

PAYMENT_METHODS = ("bizum", "card")


class OrderService:
    """
    Service for the order domain.
    Kept apart from CartService, it only reads the cart when placing an order.
    """

    def __init__(self, db: Session, notification_service: NotificationService | None = None):
        self.repo = OrderRepo(db)
        self.cart_repo = CartRepo(db)
        self.notification_service = notification_service or NotificationService()

    def create_order(self, user_id: str, payment_method: str, delivery_address: str | None = None) -> OrderModel:
        """
        Use Case: place an order from the customer's cart.

        1. Rejects an empty cart before any write
        2. Prices the cart (member pricing, the customer is signed in)
        3. Writes order + items and clears the cart in one transaction
        4. Sends the confirmation (async)
        """
        if payment_method not in PAYMENT_METHODS:
            raise ValueError(f"Unsupported payment method: {payment_method}")

        cart_items = self.cart_repo.get_cart_items(user_id)
        if not cart_items:
            raise ValueError("Cart is empty")

        totals = calculate_totals(
            ((i.product.price, i.quantity) for i in cart_items),
            authenticated=True,
        )

        order = OrderModel(
            user_id=user_id,
            status="pending",
            subtotal=totals.subtotal,
            delivery_fee=totals.delivery_fee,
            discount=totals.discount,
            total=totals.total,
            payment_method=payment_method,
            delivery_address=delivery_address,
        )
        # snapshot ceny z chwili zamowienia
        items = [
            OrderItemModel(
                product_id=i.product_id,
                quantity=i.quantity,
                price=i.product.price,
            )
            for i in cart_items
        ]

        created_order = self.repo.create_order(order, items)

        logger.info(
            f"Order {created_order.id} created for {user_id}: "
            f"{len(items)} items, total {created_order.total}"
        )

        try:
            self.notification_service.send_order_confirmation(user_id, created_order.id, str(created_order.total))
        except Exception as e:
            logger.warning(f"Failed to dispatch confirmation for order {created_order.id}: {e}")

        return created_order

    def list_orders(self, user_id: str) -> list[OrderModel]:
        """
        Use Case: order history, newest first.
        """
        return self.repo.get_user_orders(user_id)

    def get_order(self, order_id: int, user_id: str) -> OrderModel:
        order = self.repo.get_order(order_id)

        if not order or order.user_id != user_id:
            raise LookupError("Order not found")

        return order
