# retech/client/local_store.py
from decimal import Decimal
from typing import List

from retech.client.storage import JsonStorage

CART_STORAGE_NAME = "retech-cart"
RECENTLY_VIEWED_STORAGE_NAME = "retech-recently-viewed"
RECENTLY_VIEWED_LIMIT = 10


class LocalCartStore:
    """
    Guest cart kept entirely on the device.
    Lines are {productId, quantity, priceAtAdd, product}; priceAtAdd is frozen
    when the line is created. No stock ceiling is applied here.
    """

    def __init__(self, storage: JsonStorage):
        self.storage = storage
        state = storage.get(CART_STORAGE_NAME) or {}
        self.items: List[dict] = list(state.get("items", []))

    def _persist(self):
        self.storage.set(CART_STORAGE_NAME, {"items": self.items})

    def _find(self, product_id):
        return next((i for i in self.items if i["productId"] == product_id), None)

    def add_item(self, product: dict, quantity: int = 1) -> None:
        existing = self._find(product["id"])
        if existing:
            existing["quantity"] += quantity
        else:
            self.items.append(
                {
                    "productId": product["id"],
                    "quantity": quantity,
                    "priceAtAdd": str(product["price"]),
                    "product": product,
                }
            )
        self._persist()

    def update_quantity(self, product_id, quantity: int) -> None:
        if quantity <= 0:
            self.remove_item(product_id)
            return
        existing = self._find(product_id)
        if existing:
            existing["quantity"] = quantity
            self._persist()

    def remove_item(self, product_id) -> None:
        self.items = [i for i in self.items if i["productId"] != product_id]
        self._persist()

    def clear_cart(self) -> None:
        self.items = []
        self._persist()

    def get_total(self) -> Decimal:
        return sum((Decimal(i["priceAtAdd"]) * i["quantity"] for i in self.items), Decimal("0"))

    def get_item_count(self) -> int:
        return sum(i["quantity"] for i in self.items)


class RecentlyViewedStore:
    """Most recently viewed products first, distinct, capped."""

    def __init__(self, storage: JsonStorage):
        self.storage = storage
        state = storage.get(RECENTLY_VIEWED_STORAGE_NAME) or {}
        self.products: List[dict] = list(state.get("products", []))

    def add_product(self, product: dict) -> None:
        rest = [p for p in self.products if p["id"] != product["id"]]
        self.products = [product, *rest][:RECENTLY_VIEWED_LIMIT]
        self.storage.set(RECENTLY_VIEWED_STORAGE_NAME, {"products": self.products})

    def clear_all(self) -> None:
        self.products = []
        self.storage.set(RECENTLY_VIEWED_STORAGE_NAME, {"products": []})
