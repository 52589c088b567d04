# app/services/notification_service.py
from uuid import UUID

from kombu.exceptions import OperationalError

from app.celery_worker import celery_app
from app.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Serwis do wysylania powiadomien o zamowieniach.
    Uzywa Celery do asynchronicznego przetwarzania.
    Wolany dopiero po commicie, wiec niedostepny broker nie cofa zamowienia.
    """

    @staticmethod
    def send_order_placed(user_id: UUID, order_id: UUID):
        try:
            send_order_placed_task.delay(str(user_id), str(order_id))
        except OperationalError:
            logger.exception(f"Could not enqueue order-placed notification for order {order_id}")

    @staticmethod
    def send_status_changed(user_id: UUID, order_id: UUID, old_status: str, new_status: str):
        try:
            send_status_changed_task.delay(str(user_id), str(order_id), old_status, new_status)
        except OperationalError:
            logger.exception(f"Could not enqueue status-changed notification for order {order_id}")


@celery_app.task(name="app.services.notification_service.send_order_placed_task")
def send_order_placed_task(user_id: str, order_id: str):
    """
    Celery task - w prawdziwym systemie wyslalby email/SMS/push.
    Teraz tylko loguje.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: Order {order_id} has been placed")
    return {"user_id": user_id, "order_id": order_id, "status": "sent"}


@celery_app.task(name="app.services.notification_service.send_status_changed_task")
def send_status_changed_task(user_id: str, order_id: str, old_status: str, new_status: str):
    logger.info(
        f"[NOTIFICATION] User {user_id}: Order {order_id} moved from {old_status} to {new_status}"
    )
    return {"user_id": user_id, "order_id": order_id, "status": "sent"}
