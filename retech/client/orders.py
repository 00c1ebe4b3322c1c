# retech/client/orders.py
from typing import Any, Dict, List

from retech.domain.schemas import OrderStatus


class OrderHistory:
    """Signed-in buyer's orders."""

    def __init__(self, context):
        self.context = context

    def orders(self) -> List[Dict[str, Any]]:
        user_id = self.context.identity.user_id
        if user_id is None:
            return []
        return self.context.cache.fetch(("orders", user_id), lambda: self.context.api.list_orders(user_id))

    def order(self, order_id: int) -> Dict[str, Any]:
        user_id = self.context.identity.user_id
        return self.context.cache.fetch(
            ("order", user_id, order_id), lambda: self.context.api.get_order(user_id, order_id)
        )


class AdminBackOffice:
    """
    Back-office calls. `identity.is_admin` only decides what to show,
    the API rejects non-admins regardless.
    """

    def __init__(self, context):
        self.context = context

    @property
    def _user_id(self) -> int | None:
        return self.context.identity.user_id

    def orders(self) -> List[Dict[str, Any]]:
        return self.context.cache.fetch(("admin-orders",), lambda: self.context.api.admin_orders(self._user_id))

    def update_order_status(self, order_id: int, status: OrderStatus) -> Dict[str, Any]:
        order = self.context.api.update_order_status(self._user_id, order_id, OrderStatus(status).value)
        for prefix in (("admin-orders",), ("orders",), ("order",), ("products",)):
            self.context.cache.invalidate(prefix)
        return order

    def products(self) -> List[Dict[str, Any]]:
        return self.context.cache.fetch(
            ("admin-products",), lambda: self.context.api.admin_products(self._user_id)
        )

    def create_product(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        product = self.context.api.create_product(self._user_id, payload)
        self._invalidate_catalog()
        return product

    def update_product(self, product_id: int, changes: Dict[str, Any]) -> Dict[str, Any]:
        product = self.context.api.update_product(self._user_id, product_id, changes)
        self._invalidate_catalog()
        self.context.cache.invalidate(("product", product["slug"]))
        return product

    def delete_product(self, product_id: int) -> None:
        self.context.api.delete_product(self._user_id, product_id)
        self._invalidate_catalog()

    def stats(self) -> Dict[str, Any]:
        return self.context.api.admin_stats(self._user_id)

    def _invalidate_catalog(self):
        self.context.cache.invalidate(("products",))
        self.context.cache.invalidate(("admin-products",))
