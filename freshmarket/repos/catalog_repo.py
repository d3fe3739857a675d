# freshmarket/repos/catalog_repo.py
from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from freshmarket.data.models.category import CategoryModel
from freshmarket.data.models.product import ProductModel


class CatalogRepo:
    def __init__(self, db: Session):
        self.db = db

    # kategorie
    def get_categories(self) -> list[CategoryModel]:
        return list(self.db.execute(select(CategoryModel).order_by(CategoryModel.id)).scalars())

    def get_category_by_slug(self, slug: str) -> CategoryModel | None:
        return self.db.execute(
            select(CategoryModel).where(CategoryModel.slug == slug)
        ).scalar_one_or_none()

    def create_category(self, category: CategoryModel) -> CategoryModel:
        self.db.add(category)
        self.db.commit()
        self.db.refresh(category)
        return category

    # produkty (zawsze z kategoria, relacja jest lazy="joined")
    def get_products(self, category_id: int | None = None, search: str | None = None) -> list[ProductModel]:
        stmt = select(ProductModel).order_by(ProductModel.id)
        if category_id is not None:
            stmt = stmt.where(ProductModel.category_id == category_id)
        if search and search.strip():
            # bez rozroznienia wielkosci liter: nazwa, opis albo nazwa kategorii
            pattern = f"%{search.strip()}%"
            stmt = stmt.join(CategoryModel, ProductModel.category_id == CategoryModel.id).where(
                or_(
                    ProductModel.name.ilike(pattern),
                    ProductModel.description.ilike(pattern),
                    CategoryModel.name.ilike(pattern),
                )
            )
        return list(self.db.execute(stmt).scalars())

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def get_products_by_ids(self, product_ids: list[int]) -> dict[int, ProductModel]:
        if not product_ids:
            return {}
        rows = self.db.execute(
            select(ProductModel).where(ProductModel.id.in_(product_ids))
        ).scalars()
        return {p.id: p for p in rows}

    def create_product(self, product: ProductModel, commit: bool = True) -> ProductModel:
        self.db.add(product)
        if commit:
            self.db.commit()
            self.db.refresh(product)
        return product

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
