# freshmarket/data/seed.py
from decimal import Decimal

from sqlalchemy.orm import Session

from freshmarket.data.models.category import CategoryModel
from freshmarket.data.models.product import ProductModel
from freshmarket.repos.catalog_repo import CatalogRepo
from freshmarket.utils.logging import get_logger

logger = get_logger(__name__)

_IMG = "https://images.unsplash.com/{}?ixlib=rb-4.0.3&auto=format&fit=crop&w=400&h=300"

SAMPLE_CATEGORIES = [
    {"name": "Fruits", "slug": "fruits"},
    {"name": "Vegetables", "slug": "vegetables"},
]

SAMPLE_PRODUCTS = {
    "fruits": [
        ("Red Apples", "Sweet and crispy organic apples, perfect for snacking", "3.99", "kg", "photo-1568702846914-96b305d2aaeb"),
        ("Bananas", "Naturally sweet and potassium-rich bananas", "2.49", "kg", "photo-1571771894821-ce9b6c11b08e"),
        ("Oranges", "Juicy Valencia oranges packed with vitamin C", "4.29", "kg", "photo-1547514701-42782101795e"),
        ("Strawberries", "Sweet and aromatic strawberries, locally grown", "6.99", "kg", "photo-1464965911861-746a04b4bca6"),
    ],
    "vegetables": [
        ("Tomatoes", "Vine-ripened tomatoes bursting with flavor", "5.49", "kg", "photo-1592924357228-91a4daadcfea"),
        ("Lettuce", "Crisp and fresh iceberg lettuce for salads", "2.99", "head", "photo-1622206151226-18ca2c9ab4a1"),
        ("Carrots", "Sweet and crunchy carrots rich in beta-carotene", "3.49", "kg", "photo-1598170845058-32b9d6a5da37"),
        ("Broccoli", "Nutritious green broccoli packed with vitamins", "4.99", "kg", "photo-1459411621453-7b03977f4bfc"),
    ],
}


def seed(db: Session) -> bool:
    """Load the sample catalog. Returns False when categories already exist."""
    repo = CatalogRepo(db)

    # not forcing: only seed if empty
    if repo.get_categories():
        return False

    try:
        for data in SAMPLE_CATEGORIES:
            category = CategoryModel(**data)
            db.add(category)
            db.flush()

            for name, description, price, unit, photo in SAMPLE_PRODUCTS[category.slug]:
                repo.create_product(
                    ProductModel(
                        name=name,
                        description=description,
                        price=Decimal(price),
                        unit=unit,
                        image_url=_IMG.format(photo),
                        category_id=category.id,
                        is_organic=True,
                        in_stock=True,
                    ),
                    commit=False,
                )
        repo.commit()
    except Exception:
        repo.rollback()
        raise

    logger.info(f"Seeded {len(SAMPLE_CATEGORIES)} categories and "
                f"{sum(len(p) for p in SAMPLE_PRODUCTS.values())} products")
    return True
