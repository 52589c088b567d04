# app/services/order_service.py
from uuid import UUID

from app.data.models.order import OrderModel
from app.data.unit_of_work import UnitOfWork
from app.domain.enums import OrderStatus
from app.domain.errors import NotFound
from app.services.notification_service import NotificationService
from app.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Historia zamowien i zmiany statusu.
    Tworzenie zamowien jest w CheckoutService.
    """

    def __init__(self, uow: UnitOfWork, notification_service: NotificationService | None = None):
        self.uow = uow
        self.notification_service = notification_service or NotificationService()

    def get_user_orders(self, user_id: UUID) -> list[OrderModel]:
        """Use Case: Zamowienia uzytkownika, najnowsze pierwsze (Query)."""
        with self.uow.transaction():
            return self.uow.orders.list_user_orders(user_id)

    def get_order_by_id(self, order_id: UUID, user_id: UUID) -> OrderModel:
        """
        Use Case: Pobranie zamowienia (Query).
        Cudze zamowienie wyglada tak samo jak nieistniejace.
        """
        with self.uow.transaction():
            order = self.uow.orders.get_user_order(order_id, user_id)
            if not order:
                raise NotFound("Order", order_id)
            return order

    def update_order_status(self, order_id: UUID, status: OrderStatus) -> OrderModel:
        """
        Use Case: Zmiana statusu (tylko admin, rola sprawdzana w API).
        Dowolny status -> dowolny status, bez grafu przejsc.
        """
        status = OrderStatus(status)

        with self.uow.transaction():
            order = self.uow.orders.get_order(order_id)
            if not order:
                raise NotFound("Order", order_id)

            old_status = order.status
            self.uow.orders.update_order_status(order, status.value)

        logger.info(f"Order {order.id} status {old_status} -> {status.value}")

        if old_status != status.value:
            self.notification_service.send_status_changed(
                order.user_id, order.id, old_status, status.value
            )

        return order
