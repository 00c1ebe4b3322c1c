# retech/domain/order_status.py
from typing import Dict, FrozenSet

from retech.domain.schemas import OrderStatus

# NEW -> PAID -> SHIPPED -> DONE, CANCELLED from any non-terminal state
TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.NEW: frozenset({OrderStatus.PAID, OrderStatus.CANCELLED}),
    OrderStatus.PAID: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DONE, OrderStatus.CANCELLED}),
    OrderStatus.DONE: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

TERMINAL = frozenset({OrderStatus.DONE, OrderStatus.CANCELLED})


class InvalidStatusTransition(ValueError):
    pass


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    return OrderStatus(target) in TRANSITIONS[OrderStatus(current)]


def ensure_transition(current: OrderStatus, target: OrderStatus) -> None:
    current, target = OrderStatus(current), OrderStatus(target)
    if current in TERMINAL:
        raise InvalidStatusTransition(f"Order is {current.value} and can no longer change status")
    if not can_transition(current, target):
        raise InvalidStatusTransition(f"Cannot move order from {current.value} to {target.value}")
