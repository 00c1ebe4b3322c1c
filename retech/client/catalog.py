# retech/client/catalog.py
from typing import Any, Dict, List


def _freeze(filters: Dict[str, Any]):
    return tuple(
        sorted((k, tuple(v) if isinstance(v, list) else v) for k, v in filters.items())
    )


class Catalog:
    def __init__(self, context):
        self.context = context

    def products(self, **filters) -> List[Dict[str, Any]]:
        return self.context.cache.fetch(
            ("products", _freeze(filters)), lambda: self.context.api.list_products(filters)
        )

    def product(self, slug: str) -> Dict[str, Any] | None:
        return self.context.cache.fetch(("product", slug), lambda: self.context.api.get_product_by_slug(slug))

    def view_product(self, slug: str) -> Dict[str, Any] | None:
        """Loads a product page and records it as recently viewed."""
        product = self.product(slug)
        if product is not None:
            self.context.recently_viewed.add_product(product)
        return product

    def similar(self, product_id: int) -> List[Dict[str, Any]]:
        return self.context.cache.fetch(
            ("similar-products", product_id), lambda: self.context.api.similar_products(product_id)
        )

    def featured(self) -> List[Dict[str, Any]]:
        return self.context.cache.fetch(("featured-products",), self.context.api.featured_products)

    def filter_options(self) -> Dict[str, Any]:
        return self.context.cache.fetch(("filter-options",), self.context.api.filter_options)
