# retech/client/cart.py
from decimal import Decimal
from typing import Any, Dict, List

from retech.client.server_cart import ServerCartAccessor


class StorefrontCart:
    """
    One cart for the UI: the server cart when the identity has a loaded one,
    the device-local guest cart otherwise.
    """

    def __init__(self, context):
        self.context = context
        self.server = ServerCartAccessor(context)

    def _server_cart(self) -> Dict[str, Any] | None:
        if not self.context.identity.authenticated:
            return None
        return self.server.fetch()

    def add_to_cart(self, product: Dict[str, Any], quantity: int = 1) -> None:
        if self._server_cart() is None:
            self.context.local_cart.add_item(product, quantity)
            return
        self.server.add(product, quantity)

    def update_quantity(self, product_id, quantity: int) -> None:
        if self._server_cart() is None:
            self.context.local_cart.update_quantity(product_id, quantity)
            return
        self.server.update(product_id, quantity)

    def remove_from_cart(self, product_id) -> None:
        if self._server_cart() is None:
            self.context.local_cart.remove_item(product_id)
            return
        self.server.remove(product_id)

    def clear_cart(self) -> None:
        if self._server_cart() is None:
            self.context.local_cart.clear_cart()
            return
        self.server.clear()

    def items(self) -> List[Dict[str, Any]]:
        cart = self._server_cart()
        if cart is not None:
            return cart["items"]
        return [
            {
                "id": line["productId"],
                "cart_id": "local",
                "product_id": line["productId"],
                "quantity": line["quantity"],
                "price_at_add": line["priceAtAdd"],
                "product": line.get("product"),
            }
            for line in self.context.local_cart.items
        ]

    def total(self) -> Decimal:
        return sum(
            (Decimal(str(i["price_at_add"])) * i["quantity"] for i in self.items()),
            Decimal("0"),
        )

    def item_count(self) -> int:
        return sum(i["quantity"] for i in self.items())

    def get_item_quantity(self, product_id) -> int:
        line = next((i for i in self.items() if i["product_id"] == product_id), None)
        return line["quantity"] if line else 0
