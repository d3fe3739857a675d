# freshmarket/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.orm import Session

from freshmarket.api.deps import get_current_user
from freshmarket.data.database import get_db
from freshmarket.data.models.user import UserModel
from freshmarket.domain.schemas import MAX_ID, OrderCreate, OrderOut
from freshmarket.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session):
    return OrderService(db)


@router.get("", response_model=List[OrderOut])
def list_orders(
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Order history of the signed-in customer, newest first.
    """
    return get_service(db).list_orders(user.id)


@router.post("", response_model=OrderOut, status_code=201)
def create_order(
    payload: OrderCreate,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Places an order from the current cart and empties the cart.
    Sends the confirmation asynchronously.
    """
    svc = get_service(db)
    try:
        return svc.create_order(user.id, payload.payment_method, payload.delivery_address)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int = Path(..., ge=1, le=MAX_ID),
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.get_order(order_id, user.id)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
