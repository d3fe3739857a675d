# freshmarket/services/catalog_service.py
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from freshmarket.data.models.category import CategoryModel
from freshmarket.data.models.product import ProductModel
from freshmarket.domain.schemas import MAX_ID, CategoryCreate
from freshmarket.repos.catalog_repo import CatalogRepo
from freshmarket.utils.logging import get_logger

logger = get_logger(__name__)


def parse_category_filter(category: str | None) -> int | None:
    """
    ``?category=`` accepts a numeric id; "all", empty or anything
    non-numeric means no filter.
    """
    if category is None:
        return None
    category = category.strip()
    if not category or category == "all":
        return None
    try:
        category_id = int(category)
    except ValueError:
        return None
    # id spoza zakresu kolumny nie pasuje do zadnej kategorii
    return category_id if 0 < category_id <= MAX_ID else 0


class CatalogService:
    """Read side of the shop: categories and products."""

    def __init__(self, db: Session):
        self.repo = CatalogRepo(db)

    def list_categories(self) -> list[CategoryModel]:
        return self.repo.get_categories()

    def create_category(self, payload: CategoryCreate) -> CategoryModel:
        if self.repo.get_category_by_slug(payload.slug):
            raise ValueError(f"Category with slug '{payload.slug}' already exists")

        try:
            created = self.repo.create_category(CategoryModel(name=payload.name, slug=payload.slug))
        except IntegrityError:
            self.repo.rollback()
            raise ValueError(f"Category with slug '{payload.slug}' already exists")

        logger.info(f"Created category {created.id} ({created.slug})")
        return created

    def list_products(self, category: str | None = None, search: str | None = None) -> list[ProductModel]:
        return self.repo.get_products(parse_category_filter(category), search)

    def get_product(self, product_id: int) -> ProductModel:
        product = self.repo.get_product(product_id)
        if not product:
            raise LookupError("Product not found")
        return product
