# retech/client/checkout.py
from decimal import Decimal
from typing import Any, Dict, List

from pydantic import ValidationError

from retech.client.cart import StorefrontCart
from retech.domain.pricing import OrderTotals, order_totals
from retech.domain.schemas import CheckoutForm, DeliveryType, OrderCreate, OrderItemIn
from retech.utils.logging import get_logger

logger = get_logger(__name__)


class CheckoutValidationError(ValueError):
    """Input problems found before anything is sent."""

    def __init__(self, messages: List[str]):
        self.messages = messages
        super().__init__("; ".join(messages))


def _messages(error: ValidationError) -> List[str]:
    out = []
    for err in error.errors():
        cause = (err.get("ctx") or {}).get("error")
        out.append(str(cause) if cause is not None else err["msg"])
    return out


class Checkout:
    def __init__(self, context, cart: StorefrontCart | None = None):
        self.context = context
        self.cart = cart or StorefrontCart(context)

    def summary(self, delivery_type: DeliveryType = DeliveryType.COURIER) -> OrderTotals:
        return order_totals(
            ((Decimal(str(i["price_at_add"])), i["quantity"]) for i in self.cart.items()),
            delivery_type,
        )

    def validate(self, form: Dict[str, Any]) -> CheckoutForm:
        try:
            return CheckoutForm(**form)
        except ValidationError as e:
            raise CheckoutValidationError(_messages(e)) from e

    def place_order(self, form: Dict[str, Any]) -> Dict[str, Any]:
        identity = self.context.identity
        if not identity.authenticated:
            raise CheckoutValidationError(["Must be logged in to create order"])

        details = self.validate(form)

        items = self.cart.items()
        if not items:
            raise CheckoutValidationError(["Your cart is empty"])

        # snapshots are taken from the cart as it is right now
        payload = OrderCreate(
            **details.model_dump(),
            items=[
                OrderItemIn(
                    product_id=i["product_id"],
                    title_snapshot=(i.get("product") or {}).get("title") or "Product",
                    price_snapshot=Decimal(str(i["price_at_add"])),
                    quantity=i["quantity"],
                )
                for i in items
            ],
        )

        order = self.context.api.create_order(identity.user_id, payload.model_dump(mode="json"))
        logger.info(f"Order {order['id']} placed by user {identity.user_id}")

        self.context.cache.invalidate(("orders",))
        self.context.cache.invalidate(("cart",))
        return order
