# app/services/checkout_service.py
from decimal import Decimal
from uuid import UUID

from app.data.models.order import OrderModel
from app.data.models.order_item import OrderItemModel
from app.data.unit_of_work import UnitOfWork
from app.domain.enums import OrderStatus
from app.domain.errors import EmptyCart, ProductUnavailable, InsufficientStock
from app.services.notification_service import NotificationService
from app.utils.money import ZERO, to_money
from app.utils.logging import get_logger

logger = get_logger(__name__)


class CheckoutService:
    """
    Zamiana aktywnego koszyka w zamowienie.
    Separacja od CartService i OrderService: to jedyne miejsce,
    ktore dekrementuje stan magazynowy.
    """

    def __init__(self, uow: UnitOfWork, notification_service: NotificationService | None = None):
        self.uow = uow
        self.notification_service = notification_service or NotificationService()

    def create_order_from_cart(self, user_id: UUID) -> OrderModel:
        """
        Use Case: Tworzenie zamowienia z koszyka.

        1. Pobiera aktywny koszyk z pozycjami (pusty -> EmptyCart)
        2. Dla kazdej pozycji, w kolejnosci dodania, blokuje wiersz produktu
           i sprawdza dostepnosc oraz stan (pierwszy blad przerywa)
        3. Warunkowo dekrementuje stany i liczy total z cen z koszyka
        4. Tworzy zamowienie i pozycje ze snapshotem nazwy i ceny
        5. Oznacza koszyk jako converted (warunkowo, drugi checkout -> ConstraintViolation)
        6. Po commicie wysyla powiadomienie (async)

        Kroki 1-5 sa jedna transakcja, kazdy blad cofa wszystko.
        """
        with self.uow.transaction():
            #blokada koszyka, rownolegly checkout tego samego koszyka czeka tutaj
            cart = self.uow.carts.get_active_cart(user_id, for_update=True)
            items = self.uow.carts.get_cart_items(cart.id) if cart else []

            if not items:
                raise EmptyCart()

            logger.info(f"Checkout of cart {cart.id} for user {user_id} ({len(items)} lines)")

            #walidacja w chwili commita, bez wartosci zapamietanych przy add_item
            products = {}
            for item in items:
                product = self.uow.products.get_for_update(item.product_id)
                if not product or product.is_deleted:
                    name = product.name if product else str(item.product_id)
                    logger.info(f"Checkout of cart {cart.id} aborted: {name} unavailable")
                    raise ProductUnavailable(name)
                if product.stock < item.quantity:
                    logger.info(f"Checkout of cart {cart.id} aborted: insufficient stock for {product.name}")
                    raise InsufficientStock(product.name)
                products[item.id] = product

            total = ZERO
            for item in items:
                product = products[item.id]
                #0 wierszy = ktos wykupil towar miedzy odczytem a zapisem
                if not self.uow.products.decrement_stock(product, item.quantity):
                    logger.warning(f"Lost stock race on product {product.id} during checkout of cart {cart.id}")
                    raise InsufficientStock(product.name)
                total += Decimal(item.unit_price) * item.quantity

            order = self.uow.orders.create_order(
                OrderModel(
                    user_id=user_id,
                    total_price=to_money(total),
                    status=OrderStatus.PLACED.value,
                )
            )

            for item in items:
                order.items.append(
                    OrderItemModel(
                        product_id=item.product_id,
                        quantity=item.quantity,
                        unit_price=item.unit_price,
                        product_name=products[item.id].name,
                    )
                )

            self.uow.carts.mark_converted(cart)

        logger.info(f"Order {order.id} created from cart {cart.id}, total {order.total_price}")

        self.notification_service.send_order_placed(user_id, order.id)

        return order
