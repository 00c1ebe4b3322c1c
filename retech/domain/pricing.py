# retech/domain/pricing.py
from decimal import Decimal
from typing import Iterable, NamedTuple, Tuple

from retech.domain.schemas import DeliveryType
from retech.utils.settings import DELIVERY_FEE, FREE_DELIVERY_THRESHOLD

ZERO = Decimal("0.00")


class OrderTotals(NamedTuple):
    subtotal: Decimal
    delivery_fee: Decimal
    total: Decimal


def calculate_delivery_fee(subtotal: Decimal) -> Decimal:
    """Flat courier fee, waived for an empty basket or above the free delivery threshold."""
    if subtotal <= 0:
        return ZERO
    return ZERO if subtotal >= FREE_DELIVERY_THRESHOLD else DELIVERY_FEE


def calculate_subtotal(lines: Iterable[Tuple[Decimal, int]]) -> Decimal:
    return sum((Decimal(str(price)) * quantity for price, quantity in lines), ZERO)


def order_totals(lines: Iterable[Tuple[Decimal, int]], delivery_type: DeliveryType) -> OrderTotals:
    subtotal = calculate_subtotal(lines)
    fee = calculate_delivery_fee(subtotal) if DeliveryType(delivery_type) == DeliveryType.COURIER else ZERO
    return OrderTotals(subtotal=subtotal, delivery_fee=fee, total=subtotal + fee)
