# retech/client/server_cart.py
from typing import Any, Dict

from retech.client.query_cache import OptimisticUpdate
from retech.utils.logging import get_logger

logger = get_logger(__name__)


def next_quantity(existing: int, delta: int, stock_count: int | None) -> int:
    """Best-effort ceiling, the server clamps again on write."""
    wanted = existing + delta
    if stock_count is None:
        return wanted
    return min(wanted, stock_count)


class ServerCartAccessor:
    """
    Durable cart of the signed-in identity.

    Every mutation is applied to the cached cart first, then written
    remotely. A failed write restores the cached cart; a successful one
    invalidates it and the cart is fetched again.
    """

    def __init__(self, context):
        self.context = context

    @property
    def user_id(self) -> int | None:
        return self.context.identity.user_id

    @property
    def key(self):
        return ("cart", self.user_id)

    #query
    def fetch(self) -> Dict[str, Any] | None:
        if self.user_id is None:
            return None
        return self.context.cache.fetch(self.key, lambda: self.context.api.get_cart(self.user_id))

    def loaded(self) -> Dict[str, Any] | None:
        if self.user_id is None:
            return None
        return self.context.cache.get(self.key)

    def ensure(self) -> Dict[str, Any]:
        cart = self.fetch()
        if cart is None:
            cart = self.context.api.create_cart(self.user_id)
            self.context.cache.set(self.key, cart)
            logger.info(f"Created server cart {cart['id']} for user {self.user_id}")
        return cart

    def refresh(self) -> Dict[str, Any] | None:
        self.context.cache.invalidate(self.key)
        return self.fetch()

    #commands
    def add(self, product: Dict[str, Any], quantity: int = 1) -> Dict[str, Any] | None:
        cart = self._require_cart()
        product_id = product["id"]
        existing = self._line(cart, product_id)
        target = next_quantity(existing["quantity"] if existing else 0, quantity, product.get("stock_count"))
        if target <= 0:
            raise ValueError("Product is out of stock")

        def apply(current):
            if any(i["product_id"] == product_id for i in current["items"]):
                items = [
                    {**i, "quantity": target} if i["product_id"] == product_id else i
                    for i in current["items"]
                ]
            else:
                items = [
                    *current["items"],
                    {
                        "id": f"temp-{product_id}",
                        "cart_id": current["id"],
                        "product_id": product_id,
                        "quantity": target,
                        "price_at_add": product["price"],
                        "created_at": None,
                        "product": product,
                    },
                ]
            return {**current, "items": items}

        OptimisticUpdate(self.context.cache, self.key, apply).run(
            lambda: self.context.api.upsert_cart_item(
                self.user_id, cart["id"], product_id, target, product["price"]
            )
        )
        return self.fetch()

    def update(self, product_id: int, quantity: int) -> Dict[str, Any] | None:
        if quantity <= 0:
            return self.remove(product_id)

        cart = self._require_cart()

        def apply(current):
            return {
                **current,
                "items": [
                    {**i, "quantity": quantity} if i["product_id"] == product_id else i
                    for i in current["items"]
                ],
            }

        OptimisticUpdate(self.context.cache, self.key, apply).run(
            lambda: self.context.api.update_cart_item(self.user_id, cart["id"], product_id, quantity)
        )
        return self.fetch()

    def remove(self, product_id: int) -> Dict[str, Any] | None:
        cart = self._require_cart()

        def apply(current):
            return {**current, "items": [i for i in current["items"] if i["product_id"] != product_id]}

        OptimisticUpdate(self.context.cache, self.key, apply).run(
            lambda: self.context.api.delete_cart_item(self.user_id, cart["id"], product_id)
        )
        return self.fetch()

    def clear(self) -> Dict[str, Any] | None:
        cart = self._require_cart()

        OptimisticUpdate(self.context.cache, self.key, lambda current: {**current, "items": []}).run(
            lambda: self.context.api.clear_cart(self.user_id, cart["id"])
        )
        return self.fetch()

    #helpers
    def _require_cart(self) -> Dict[str, Any]:
        cart = self.fetch()
        if cart is None:
            raise RuntimeError("Server cart is not loaded")
        return cart

    @staticmethod
    def _line(cart: Dict[str, Any], product_id: int) -> Dict[str, Any] | None:
        return next((i for i in cart["items"] if i["product_id"] == product_id), None)
