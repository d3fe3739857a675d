#freshmarket/api/routers/carts.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.orm import Session

from freshmarket.api.deps import get_current_user
from freshmarket.data.database import get_db
from freshmarket.data.models.user import UserModel
from freshmarket.domain.schemas import (
    MAX_ID,
    CartItemIn,
    CartItemOut,
    CartItemUpdate,
    CartTotalsOut,
    MessageOut,
    QuoteIn,
)
from freshmarket.services.cart_service import CartService

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db=db)


@router.get("", response_model=List[CartItemOut])
def get_cart(
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return get_service(db).get_cart(user.id)


@router.post("", response_model=CartItemOut)
def add_item(
    payload: CartItemIn,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.add_item(user.id, payload.product_id, payload.quantity)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("", response_model=MessageOut)
def clear_cart(
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    get_service(db).clear_cart(user.id)
    return {"message": "Cart cleared"}


@router.get("/totals", response_model=CartTotalsOut)
def get_totals(
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return get_service(db).get_totals(user.id)


@router.post("/quote", response_model=CartTotalsOut)
def quote(payload: QuoteIn, db: Session = Depends(get_db)):
    """
    Prices a guest cart, no sign-in needed.
    """
    svc = get_service(db)
    try:
        return svc.quote(
            ((line.product_id, line.quantity) for line in payload.items),
            discount_code=payload.discount_code,
        )
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.put("/{item_id}", response_model=CartItemOut)
def update_item(
    payload: CartItemUpdate,
    item_id: int = Path(..., ge=1, le=MAX_ID),
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.update_item(user.id, item_id, payload.quantity)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{item_id}", response_model=MessageOut)
def remove_item(
    item_id: int = Path(..., ge=1, le=MAX_ID),
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        svc.remove_item(user.id, item_id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "Item removed from cart"}
