# retech/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from retech.data.database import get_db
from retech.domain.schemas import (
    CreateCartIn,
    CartItemUpsert,
    CartItemQuantity,
    CartOut,
)
from retech.services.cart_service import CartService

router = APIRouter(prefix="/carts", tags=["carts"])


def get_service(db: Session):
    return CartService(db=db)


@router.get("/me", response_model=CartOut)
def get_my_cart(user_id: int = Query(..., gt=0), db: Session = Depends(get_db)):
    cart = get_service(db).get_cart_for_user(user_id)
    if not cart:
        raise HTTPException(status_code=404, detail="Cart not found")
    return cart


@router.post("/", response_model=CartOut)
def create_cart(payload: CreateCartIn, db: Session = Depends(get_db)):
    return get_service(db).create_cart(payload.user_id)


@router.put("/{cart_id}/items/{product_id}", response_model=CartOut)
def upsert_item(
    cart_id: int,
    product_id: int,
    payload: CartItemUpsert,
    user_id: int = Query(..., gt=0),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.upsert_item(
            user_id=user_id,
            cart_id=cart_id,
            product_id=product_id,
            quantity=payload.quantity,
            price_at_add=payload.price_at_add,
        )
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/{cart_id}/items/{product_id}", response_model=CartOut)
def update_item(
    cart_id: int,
    product_id: int,
    payload: CartItemQuantity,
    user_id: int = Query(..., gt=0),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.update_quantity(user_id, cart_id, product_id, payload.quantity)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{cart_id}/items/{product_id}", response_model=CartOut)
def remove_item(
    cart_id: int,
    product_id: int,
    user_id: int = Query(..., gt=0),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.remove_item(user_id, cart_id, product_id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/{cart_id}/items", response_model=CartOut)
def clear_cart(
    cart_id: int,
    user_id: int = Query(..., gt=0),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.clear_cart(user_id, cart_id)
    except PermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
