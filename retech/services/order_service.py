# retech/services/order_service.py
from typing import List

from sqlalchemy.orm import Session

from retech.data.models.order import OrderModel
from retech.data.models.order_item import OrderItemModel
from retech.domain.pricing import order_totals
from retech.domain.schemas import OrderCreate, OrderStatus, StockAdjustment
from retech.repos.order_repo import OrderRepo
from retech.services.cart_service import CartService
from retech.services.inventory_service import InventoryService
from retech.services.notification_service import NotificationService
from retech.utils.settings import CURRENCY
from retech.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Order placement and order history.
    Separate from CartService, it only reads the cart to clear it.
    """

    def __init__(self, db: Session, inventory: InventoryService | None = None):
        self.db = db
        self.repo = OrderRepo(db)
        self.inventory = inventory or InventoryService(db)
        self.carts = CartService(db)
        self.notification_service = NotificationService()

    def place_order(self, user_id: int, payload: OrderCreate) -> OrderModel:
        """
        Use case: turn the submitted cart lines into an order.

        1. computes subtotal, delivery fee and total from the snapshots
        2. creates the order in NEW
        3. creates the order lines
        4. decrements stock
        5. clears the buyer's cart

        Every step commits on its own. A failure after step 2 leaves the
        order row behind, nothing is compensated.
        """
        totals = order_totals(
            ((i.price_snapshot, i.quantity) for i in payload.items),
            payload.delivery_type,
        )

        order = None
        try:
            order = self.repo.create_order(
                OrderModel(
                    user_id=user_id,
                    status=OrderStatus.NEW.value,
                    total=totals.total,
                    currency=CURRENCY,
                    delivery_type=payload.delivery_type.value,
                    name=payload.name,
                    phone=payload.phone,
                    city=payload.city,
                    address=payload.address,
                    comment=payload.comment,
                )
            )
            logger.info(
                "Order created",
                order_id=order.id,
                user_id=user_id,
                subtotal=str(totals.subtotal),
                delivery_fee=str(totals.delivery_fee),
                total=str(totals.total),
            )

            self.repo.add_order_items(
                [
                    OrderItemModel(
                        order_id=order.id,
                        product_id=i.product_id,
                        title_snapshot=i.title_snapshot,
                        price_snapshot=i.price_snapshot,
                        quantity=i.quantity,
                    )
                    for i in payload.items
                ]
            )

            self.inventory.adjust_stock(
                [StockAdjustment(product_id=i.product_id, quantity=i.quantity) for i in payload.items],
                increase=False,
            )

            self.carts.clear_user_cart(user_id)

        except Exception as e:
            self.db.rollback()
            if order is not None:
                logger.error(f"Order {order.id} left partially created: {e}")
            else:
                logger.error(f"Order creation failed for user {user_id}: {e}")
            raise RuntimeError("Failed to create order") from e

        self._notify(user_id, order.id, OrderStatus.NEW)
        return self.repo.get_order(order.id)

    def get_order(self, order_id: int, user_id: int, is_admin: bool = False) -> OrderModel:
        order = self.repo.get_order(order_id)

        if not order:
            raise ValueError("Order does not exist")

        if order.user_id != user_id and not is_admin:
            raise PermissionError("No access to this order")

        return order

    def list_orders(self, user_id: int) -> List[OrderModel]:
        return self.repo.list_orders(user_id=user_id)

    def list_all_orders(self) -> List[OrderModel]:
        return self.repo.list_orders()

    def _notify(self, user_id: int | None, order_id: int, status: OrderStatus):
        try:
            self.notification_service.send_order_notification(user_id, order_id, status.value)
        except Exception as e:
            logger.warning(f"Failed to queue notification for order {order_id}: {e}")
