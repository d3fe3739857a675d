# freshmarket/api/routers/catalog.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from sqlalchemy.orm import Session

from freshmarket.api.deps import get_current_user
from freshmarket.data.database import get_db
from freshmarket.domain.schemas import MAX_ID, CategoryCreate, CategoryOut, ProductOut
from freshmarket.services.catalog_service import CatalogService

router = APIRouter(tags=["catalog"])


@router.get("/categories", response_model=List[CategoryOut])
def list_categories(db: Session = Depends(get_db)):
    return CatalogService(db).list_categories()


@router.post(
    "/categories",
    response_model=CategoryOut,
    status_code=201,
    dependencies=[Depends(get_current_user)],
)
def create_category(payload: CategoryCreate, db: Session = Depends(get_db)):
    svc = CatalogService(db)
    try:
        return svc.create_category(payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/products", response_model=List[ProductOut])
def list_products(
    category: str | None = Query(None, description="Category id, or 'all'"),
    search: str | None = Query(None, max_length=100, description="Name, description or category name"),
    db: Session = Depends(get_db),
):
    return CatalogService(db).list_products(category, search)


@router.get("/products/{product_id}", response_model=ProductOut)
def get_product(product_id: int = Path(..., ge=1, le=MAX_ID), db: Session = Depends(get_db)):
    svc = CatalogService(db)
    try:
        return svc.get_product(product_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
