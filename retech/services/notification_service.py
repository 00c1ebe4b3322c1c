# retech/services/notification_service.py
from retech.celery_worker import celery_app
from retech.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Order notifications.
    Queued on Celery so placing an order never waits for delivery.
    """

    @staticmethod
    def send_order_notification(user_id: int | None, order_id: int, status: str):
        send_order_notification_task.delay(user_id, order_id, status)


@celery_app.task(name="retech.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: int | None, order_id: int, status: str):
    """
    A real deployment would hand this to an email/SMS gateway.
    For now it only logs.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: order {order_id} is {status}")

    return {"user_id": user_id, "order_id": order_id, "status": status}
