# freshmarket/repos/order_repo.py
from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from freshmarket.data.models.cart_item import CartItemModel
from freshmarket.data.models.order import OrderModel
from freshmarket.data.models.order_item import OrderItemModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_order(self, order: OrderModel, items: list[OrderItemModel]) -> OrderModel:
        """
        Zamowienie + pozycje + wyczyszczenie koszyka w jednej transakcji.
        Przy jakimkolwiek bledzie rollback, nic nie zostaje zapisane.
        """
        try:
            self.db.add(order)
            self.db.flush()  # potrzebne order.id

            self._insert_items(order, items)

            self.db.execute(
                delete(CartItemModel).where(CartItemModel.user_id == order.user_id)
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(order)
        return order

    def _insert_items(self, order: OrderModel, items: list[OrderItemModel]) -> None:
        for item in items:
            item.order_id = order.id
            self.db.add(item)
        self.db.flush()

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def get_user_orders(self, user_id: str) -> list[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .where(OrderModel.user_id == user_id)
                .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            ).scalars()
        )
