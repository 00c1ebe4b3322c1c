# retech/repos/product_repo.py
from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy import select, func, or_, update, delete
from sqlalchemy.orm import Session

from retech.data.models.product import ProductModel
from retech.data.models.cart_item import CartItemModel
from retech.data.models.order_item import OrderItemModel
from retech.domain.schemas import ProductFilters


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    #query
    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def get_products(self, product_ids) -> Dict[int, ProductModel]:
        ids = {pid for pid in product_ids if pid is not None}
        if not ids:
            return {}
        rows = self.db.execute(select(ProductModel).where(ProductModel.id.in_(ids))).scalars().all()
        return {p.id: p for p in rows}

    def get_by_slug(self, slug: str) -> ProductModel | None:
        return self.db.execute(
            select(ProductModel).where(ProductModel.slug == slug)
        ).scalar_one_or_none()

    def list_available(self, filters: ProductFilters) -> List[ProductModel]:
        stmt = select(ProductModel).where(ProductModel.is_available.is_(True))

        if filters.categories:
            stmt = stmt.where(ProductModel.category.in_([c.value for c in filters.categories]))
        if filters.brands:
            stmt = stmt.where(ProductModel.brand.in_(filters.brands))
        if filters.conditions:
            stmt = stmt.where(ProductModel.condition.in_([c.value for c in filters.conditions]))
        if filters.cities:
            stmt = stmt.where(ProductModel.location_city.in_(filters.cities))
        if filters.min_price is not None:
            stmt = stmt.where(ProductModel.price >= filters.min_price)
        if filters.max_price is not None:
            stmt = stmt.where(ProductModel.price <= filters.max_price)
        if filters.warranty_months is not None:
            stmt = stmt.where(ProductModel.warranty_months >= filters.warranty_months)
        if filters.in_stock_only:
            stmt = stmt.where(ProductModel.stock_count > 0)
        if filters.search:
            pattern = f"%{filters.search}%"
            stmt = stmt.where(
                or_(
                    ProductModel.title.ilike(pattern),
                    ProductModel.brand.ilike(pattern),
                    ProductModel.model.ilike(pattern),
                )
            )

        if filters.sort_by == "newest":
            stmt = stmt.order_by(ProductModel.created_at.desc(), ProductModel.id.desc())
        elif filters.sort_by == "price_asc":
            stmt = stmt.order_by(ProductModel.price.asc())
        elif filters.sort_by == "price_desc":
            stmt = stmt.order_by(ProductModel.price.desc())
        else:
            # popular, nulls last
            stmt = stmt.order_by(ProductModel.rating_count.is_(None), ProductModel.rating_count.desc())

        return list(self.db.execute(stmt).scalars().all())

    def list_similar(self, product: ProductModel, limit: int = 8) -> List[ProductModel]:
        stmt = (
            select(ProductModel)
            .where(
                ProductModel.category == product.category,
                ProductModel.is_available.is_(True),
                ProductModel.id != product.id,
            )
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars().all())

    def list_featured(self, limit: int = 8) -> List[ProductModel]:
        stmt = (
            select(ProductModel)
            .where(ProductModel.is_available.is_(True), ProductModel.old_price.is_not(None))
            .order_by(ProductModel.rating_avg.is_(None), ProductModel.rating_avg.desc())
            .limit(limit)
        )
        return list(self.db.execute(stmt).scalars().all())

    def filter_options(self) -> Dict[str, Any]:
        rows = self.db.execute(
            select(ProductModel.brand, ProductModel.location_city, ProductModel.price)
            .where(ProductModel.is_available.is_(True))
        ).all()

        if not rows:
            return {"brands": [], "cities": [], "min_price": Decimal("0"), "max_price": Decimal("0")}

        prices = [r.price for r in rows]
        return {
            "brands": sorted({r.brand for r in rows}),
            "cities": sorted({r.location_city for r in rows}),
            "min_price": min(prices),
            "max_price": max(prices),
        }

    def list_all(self) -> List[ProductModel]:
        return list(
            self.db.execute(
                select(ProductModel).order_by(ProductModel.created_at.desc(), ProductModel.id.desc())
            ).scalars().all()
        )

    def count_products(self) -> int:
        return self.db.execute(select(func.count(ProductModel.id))).scalar_one()

    def count_in_stock(self) -> int:
        return self.db.execute(
            select(func.count(ProductModel.id)).where(
                ProductModel.is_available.is_(True),
                ProductModel.stock_count > 0,
            )
        ).scalar_one()

    #commands
    def create_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def update_product(self, product: ProductModel, changes: Dict[str, Any]) -> ProductModel:
        for field, value in changes.items():
            setattr(product, field, value)
        self.db.commit()
        self.db.refresh(product)
        return product

    def delete_product(self, product_id: int) -> None:
        # order lines keep their snapshots but lose the product reference
        self.db.execute(
            update(OrderItemModel)
            .where(OrderItemModel.product_id == product_id)
            .values(product_id=None)
        )
        self.db.execute(delete(CartItemModel).where(CartItemModel.product_id == product_id))
        self.db.execute(delete(ProductModel).where(ProductModel.id == product_id))
        self.db.commit()
