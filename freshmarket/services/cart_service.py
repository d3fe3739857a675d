from typing import Dict, Any, Iterable, Tuple
from sqlalchemy.orm import Session
from freshmarket.data.models.cart_item import CartItemModel
from freshmarket.domain.pricing import calculate_totals
from freshmarket.repos.cart_repo import CartRepo
from freshmarket.repos.catalog_repo import CatalogRepo
from freshmarket.utils.logging import get_logger

logger = get_logger(__name__)

class CartService:
    """
    Use cases for the signed-in customer's cart.
    commands (add, update, remove, clear) modify state
    queries (get, totals, quote) read only
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.catalog = CatalogRepo(db)

    #query - odczyt
    def get_cart(self, user_id: str) -> list[CartItemModel]:
        return self.repo.get_cart_items(user_id)

    def get_totals(self, user_id: str) -> Dict[str, Any]:
        items = self.repo.get_cart_items(user_id)
        totals = calculate_totals(
            ((i.product.price, i.quantity) for i in items),
            authenticated=True,
        )
        return totals.as_dict()

    def quote(self, lines: Iterable[Tuple[int, int]], discount_code: str | None = None) -> Dict[str, Any]:
        """
        Price a guest cart at current catalog prices.
        """
        lines = list(lines)
        products = self.catalog.get_products_by_ids([product_id for product_id, _ in lines])

        priced = []
        for product_id, quantity in lines:
            product = products.get(product_id)
            if not product:
                raise LookupError(f"Product {product_id} not found")
            priced.append((product.price, quantity))

        return calculate_totals(priced, authenticated=False, discount_code=discount_code).as_dict()

    #commands
    def add_item(self, user_id: str, product_id: int, quantity: int = 1) -> CartItemModel:
        # Walidacje
        if quantity <= 0:
            raise ValueError("Quantity must be greater than 0")

        product = self.catalog.get_product(product_id)
        if not product:
            raise LookupError("Product not found")

        try:
            # Sprawdz czy produkt juz jest w koszyku
            existing_item = self.repo.get_cart_item(user_id, product_id)

            if existing_item:
                logger.info(
                    f"Product {product_id} already in cart of {user_id}, quantity "
                    f"{existing_item.quantity} -> {existing_item.quantity + quantity}"
                )
                existing_item.quantity += quantity
                item = self.repo.add_cart_item(existing_item)
            else:
                logger.info(f"Adding product {product_id} to cart of {user_id}")
                item = self.repo.add_cart_item(
                    CartItemModel(
                        user_id=user_id,
                        product_id=product_id,
                        quantity=quantity,
                    )
                )

            self.repo.commit()
        except Exception as e:
            logger.error(f"Failed to add product {product_id} to cart of {user_id}: {e}")
            self.repo.rollback()
            raise

        return self.repo.refresh(item)

    def update_item(self, user_id: str, item_id: int, quantity: int) -> CartItemModel:
        if quantity < 1:
            raise ValueError("Quantity must be at least 1")

        item = self._owned_item(user_id, item_id)
        item.quantity = quantity
        self.repo.commit()

        logger.info(f"Cart item {item_id} of {user_id} set to quantity {quantity}")
        return self.repo.refresh(item)

    def remove_item(self, user_id: str, item_id: int) -> None:
        item = self._owned_item(user_id, item_id)
        self.repo.delete_cart_item(item)
        self.repo.commit()

        logger.info(f"Cart item {item_id} removed from cart of {user_id}")

    def clear_cart(self, user_id: str) -> int:
        removed = self.repo.clear_cart(user_id)
        self.repo.commit()

        logger.info(f"Cart of {user_id} cleared ({removed} rows)")
        return removed

    def _owned_item(self, user_id: str, item_id: int) -> CartItemModel:
        item = self.repo.get_item(item_id)
        # cudzy wiersz traktujemy jak nieistniejacy
        if not item or item.user_id != user_id:
            raise LookupError("Cart item not found")
        return item
