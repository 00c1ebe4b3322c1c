# retech/api/routers/admin.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from retech.api.deps import require_admin
from retech.data.database import get_db
from retech.domain.order_status import InvalidStatusTransition
from retech.domain.schemas import (
    DashboardStats,
    OrderOut,
    OrderStatusUpdate,
    ProductCreate,
    ProductOut,
    ProductUpdate,
)
from retech.services.admin_service import AdminService
from retech.services.catalog_service import CatalogService
from retech.services.order_service import OrderService
from retech.services.order_status_service import OrderStatusService

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.get("/stats", response_model=DashboardStats)
def dashboard_stats(db: Session = Depends(get_db)):
    return AdminService(db).dashboard_stats()


@router.get("/products", response_model=List[ProductOut])
def list_products(db: Session = Depends(get_db)):
    """All products, unavailable ones included."""
    return CatalogService(db).list_all_products()


@router.post("/products", response_model=ProductOut, status_code=201)
def create_product(payload: ProductCreate, db: Session = Depends(get_db)):
    try:
        return CatalogService(db).create_product(payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch("/products/{product_id}", response_model=ProductOut)
def update_product(product_id: int, payload: ProductUpdate, db: Session = Depends(get_db)):
    svc = CatalogService(db)
    try:
        svc.get_product(product_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    try:
        return svc.update_product(product_id, payload)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.delete("/products/{product_id}", status_code=204)
def delete_product(product_id: int, db: Session = Depends(get_db)):
    try:
        CatalogService(db).delete_product(product_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=204)


@router.get("/orders", response_model=List[OrderOut])
def list_orders(db: Session = Depends(get_db)):
    return OrderService(db).list_all_orders()


@router.patch("/orders/{order_id}/status", response_model=OrderOut)
def update_order_status(order_id: int, payload: OrderStatusUpdate, db: Session = Depends(get_db)):
    try:
        return OrderStatusService(db).update_status(order_id, payload.status)
    except InvalidStatusTransition as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
