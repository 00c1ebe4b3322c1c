# retech/services/catalog_service.py
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from retech.data.models.product import ProductModel
from retech.domain.schemas import ProductCreate, ProductFilters, ProductUpdate
from retech.repos.product_repo import ProductRepo
from retech.utils.logging import get_logger

logger = get_logger(__name__)


class CatalogService:
    """Read side of the catalog for shoppers, plus product CRUD for the back-office."""

    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    #query
    def list_products(self, filters: ProductFilters) -> List[ProductModel]:
        return self.repo.list_available(filters)

    def get_product(self, product_id: int) -> ProductModel:
        product = self.repo.get_product(product_id)
        if not product:
            raise ValueError("Product not found")
        return product

    def get_by_slug(self, slug: str) -> ProductModel:
        product = self.repo.get_by_slug(slug)
        if not product:
            raise ValueError("Product not found")
        return product

    def similar_products(self, product_id: int) -> List[ProductModel]:
        return self.repo.list_similar(self.get_product(product_id))

    def featured_products(self) -> List[ProductModel]:
        return self.repo.list_featured()

    def filter_options(self) -> Dict[str, Any]:
        return self.repo.filter_options()

    def list_all_products(self) -> List[ProductModel]:
        return self.repo.list_all()

    #commands
    def create_product(self, payload: ProductCreate) -> ProductModel:
        if self.repo.get_by_slug(payload.slug):
            raise ValueError(f"Slug '{payload.slug}' is already taken")

        data = payload.model_dump()
        data["category"] = payload.category.value
        data["condition"] = payload.condition.value
        product = self.repo.create_product(ProductModel(**data))

        logger.info(f"Created product {product.id} ({product.slug})")
        return product

    def update_product(self, product_id: int, payload: ProductUpdate) -> ProductModel:
        product = self.get_product(product_id)
        changes = payload.model_dump(exclude_unset=True)

        if "slug" in changes and changes["slug"] != product.slug:
            if self.repo.get_by_slug(changes["slug"]):
                raise ValueError(f"Slug '{changes['slug']}' is already taken")
        for key in ("category", "condition"):
            if changes.get(key) is not None:
                changes[key] = changes[key].value

        updated = self.repo.update_product(product, changes)
        logger.info(f"Updated product {product_id}: {sorted(changes)}")
        return updated

    def delete_product(self, product_id: int) -> None:
        self.get_product(product_id)
        self.repo.delete_product(product_id)
        logger.info(f"Deleted product {product_id}")
