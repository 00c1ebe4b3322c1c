# retech/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from retech.data.database import get_db
from retech.domain.schemas import OrderCreate, OrderOut
from retech.services.order_service import OrderService
from retech.services.user_service import UserService

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session):
    return OrderService(db)


@router.post("/", response_model=OrderOut, status_code=201)
def create_order(
    payload: OrderCreate,
    user_id: int = Query(..., gt=0),
    db: Session = Depends(get_db),
):
    """
    Places an order from the submitted cart lines.
    A failure after the order row was written is reported as a plain 500.
    """
    svc = get_service(db)
    try:
        return svc.place_order(user_id, payload)
    except RuntimeError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/", response_model=List[OrderOut])
def list_orders(user_id: int = Query(..., gt=0), db: Session = Depends(get_db)):
    """Order history of the caller, newest first."""
    return get_service(db).list_orders(user_id)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    user_id: int = Query(..., gt=0),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.get_order(order_id, user_id, is_admin=UserService(db).is_admin(user_id))
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
