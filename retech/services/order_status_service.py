# retech/services/order_status_service.py
from sqlalchemy.orm import Session

from retech.data.models.order import OrderModel
from retech.domain.order_status import ensure_transition
from retech.domain.schemas import OrderStatus, StockAdjustment
from retech.repos.order_repo import OrderRepo
from retech.services.inventory_service import InventoryService
from retech.services.notification_service import NotificationService
from retech.utils.logging import get_logger

logger = get_logger(__name__)


class OrderStatusService:
    """
    Moves an order through NEW -> PAID -> SHIPPED -> DONE, or into CANCELLED.
    Only entering CANCELLED touches inventory (restock).
    """

    def __init__(self, db: Session, inventory: InventoryService | None = None):
        self.repo = OrderRepo(db)
        self.inventory = inventory or InventoryService(db)
        self.notification_service = NotificationService()

    def update_status(self, order_id: int, status: OrderStatus) -> OrderModel:
        status = OrderStatus(status)
        order = self.repo.get_order(order_id)
        if not order:
            raise ValueError("Order does not exist")

        previous = OrderStatus(order.status)
        ensure_transition(previous, status)

        updated = self.repo.update_order_status(order_id, status.value)
        logger.info(f"Order {order_id}: {previous.value} -> {status.value}")

        if status == OrderStatus.CANCELLED:
            self.restock(order_id)

        try:
            self.notification_service.send_order_notification(updated.user_id, order_id, status.value)
        except Exception as e:
            logger.warning(f"Failed to queue notification for order {order_id}: {e}")

        return self.repo.get_order(order_id)

    def restock(self, order_id: int) -> None:
        # re-read the lines, the order may have been loaded before they were written
        items = self.repo.get_order_items(order_id)
        adjustments = [
            StockAdjustment(product_id=i.product_id, quantity=i.quantity)
            for i in items
            if i.product_id is not None
        ]

        if not adjustments:
            logger.info(f"Order {order_id}: nothing to restock")
            return

        self.inventory.adjust_stock(adjustments, increase=True)
