"""Status changes and restocking on cancellation."""

from decimal import Decimal

import pytest

from retech.data.models.order import OrderModel
from retech.data.models.order_item import OrderItemModel
from retech.domain.order_status import InvalidStatusTransition
from retech.domain.schemas import OrderStatus
from retech.repos.order_repo import OrderRepo
from retech.services.order_status_service import OrderStatusService


def _order(db, *lines, status="NEW"):
    repo = OrderRepo(db)
    order = repo.create_order(
        OrderModel(user_id=7, status=status, total=Decimal("100"), name="Ivan", phone="123", delivery_type="PICKUP")
    )
    repo.add_order_items(
        [
            OrderItemModel(
                order_id=order.id,
                product_id=pid,
                title_snapshot="Device",
                price_snapshot=Decimal("50"),
                quantity=qty,
            )
            for pid, qty in lines
        ]
    )
    return order


class TestUpdateStatus:
    def test_walks_the_lifecycle(self, db):
        order = _order(db)
        svc = OrderStatusService(db)

        for status in (OrderStatus.PAID, OrderStatus.SHIPPED, OrderStatus.DONE):
            assert svc.update_status(order.id, status).status == status.value

    def test_rejects_leaving_done(self, db):
        order = _order(db, status="DONE")
        with pytest.raises(InvalidStatusTransition):
            OrderStatusService(db).update_status(order.id, OrderStatus.CANCELLED)

    def test_rejects_skipping_states(self, db):
        order = _order(db)
        with pytest.raises(InvalidStatusTransition):
            OrderStatusService(db).update_status(order.id, OrderStatus.SHIPPED)

    def test_unknown_order(self, db):
        with pytest.raises(ValueError):
            OrderStatusService(db).update_status(4040, OrderStatus.PAID)


class TestRestock:
    def test_cancel_restores_only_lines_with_product(self, db, make_product, stock_of):
        a = make_product(stock_count=1)
        order = _order(db, (a.id, 2), (None, 1))

        OrderStatusService(db).update_status(order.id, OrderStatus.CANCELLED)

        assert stock_of(a.id) == 3

    def test_cancel_after_shipping_restocks(self, db, make_product, stock_of):
        a = make_product(stock_count=0)
        order = _order(db, (a.id, 1), status="SHIPPED")

        OrderStatusService(db).update_status(order.id, OrderStatus.CANCELLED)

        assert stock_of(a.id) == 1

    def test_cancel_without_items_is_noop(self, db):
        order = _order(db)
        updated = OrderStatusService(db).update_status(order.id, OrderStatus.CANCELLED)
        assert updated.status == "CANCELLED"

    def test_other_transitions_leave_stock_alone(self, db, make_product, stock_of):
        a = make_product(stock_count=4)
        order = _order(db, (a.id, 2), status="PAID")

        OrderStatusService(db).update_status(order.id, OrderStatus.SHIPPED)

        assert stock_of(a.id) == 4
