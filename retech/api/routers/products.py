# retech/api/routers/products.py
from decimal import Decimal
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from retech.data.database import get_db
from retech.domain.schemas import (
    FilterOptionsOut,
    ProductCategory,
    ProductCondition,
    ProductFilters,
    ProductOut,
    SortBy,
)
from retech.services.catalog_service import CatalogService

router = APIRouter(prefix="/products", tags=["products"])


def get_filters(
    categories: List[ProductCategory] = Query(default=[]),
    brands: List[str] = Query(default=[]),
    conditions: List[ProductCondition] = Query(default=[]),
    cities: List[str] = Query(default=[]),
    min_price: Optional[Decimal] = Query(None, ge=0),
    max_price: Optional[Decimal] = Query(None, ge=0),
    warranty_months: Optional[int] = Query(None, ge=0),
    in_stock_only: bool = False,
    search: str = "",
    sort_by: SortBy = "popular",
) -> ProductFilters:
    return ProductFilters(
        categories=categories,
        brands=brands,
        conditions=conditions,
        cities=cities,
        min_price=min_price,
        max_price=max_price,
        warranty_months=warranty_months,
        in_stock_only=in_stock_only,
        search=search.strip(),
        sort_by=sort_by,
    )


@router.get("/", response_model=List[ProductOut])
def list_products(filters: ProductFilters = Depends(get_filters), db: Session = Depends(get_db)):
    return CatalogService(db).list_products(filters)


@router.get("/filter-options", response_model=FilterOptionsOut)
def filter_options(db: Session = Depends(get_db)):
    return CatalogService(db).filter_options()


@router.get("/featured", response_model=List[ProductOut])
def featured_products(db: Session = Depends(get_db)):
    return CatalogService(db).featured_products()


@router.get("/by-slug/{slug}", response_model=ProductOut)
def get_product_by_slug(slug: str, db: Session = Depends(get_db)):
    try:
        return CatalogService(db).get_by_slug(slug)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    try:
        return CatalogService(db).get_product(product_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{product_id}/similar", response_model=List[ProductOut])
def similar_products(product_id: int, db: Session = Depends(get_db)):
    try:
        return CatalogService(db).similar_products(product_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
