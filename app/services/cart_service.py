# app/services/cart_service.py
from decimal import Decimal
from typing import Dict, Any
from uuid import UUID

from app.data.models.cart import CartModel
from app.data.models.cart_item import CartItemModel
from app.data.unit_of_work import UnitOfWork
from app.domain.errors import NotFound, InsufficientStock, InvalidQuantity
from app.utils.money import ZERO, to_money, line_total
from app.utils.retry import active_cart_retry
from app.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Use case'y dla domeny cart.
    commands (add, update, remove, clear) modyfikuja aktywny koszyk
    query (get) tylko odczyt, ale tworzy koszyk jesli go nie ma
    Kazda komenda zwraca widok koszyka z przeliczonym totalem.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    #query
    def get_or_create_active_cart(self, user_id: UUID) -> CartModel:
        with self.uow.transaction():
            return self._get_or_create(user_id)

    def get_cart_with_items(self, user_id: UUID) -> Dict[str, Any]:
        with self.uow.transaction():
            cart = self._get_or_create(user_id)
            return self._cart_view(cart)

    #commands
    def add_item(self, user_id: UUID, product_id: UUID, quantity: int) -> Dict[str, Any]:
        if quantity < 1:
            raise InvalidQuantity(quantity)

        with self.uow.transaction():
            cart = self._get_or_create(user_id)

            product = self.uow.products.get_active(product_id)
            if not product:
                raise NotFound("Product", product_id)

            #sprawdzenie chwilowe, bez rezerwacji, checkout sprawdza ponownie
            if product.stock < quantity:
                raise InsufficientStock(product.name)

            existing = self.uow.carts.get_cart_item_by_product(cart.id, product_id)
            if existing:
                logger.info(
                    f"Product {product_id} already in cart {cart.id}, quantity "
                    f"{existing.quantity} -> {existing.quantity + quantity}"
                )
                #cena z pierwszego dodania zostaje
                existing.quantity += quantity
                self.uow.session.flush()
            else:
                logger.info(f"Adding product {product_id} to cart {cart.id}")
                self.uow.carts.add_cart_item(
                    CartItemModel(
                        cart_id=cart.id,
                        product_id=product_id,
                        quantity=quantity,
                        unit_price=product.price,
                    )
                )

            return self._cart_view(cart)

    def update_item(self, user_id: UUID, item_id: UUID, quantity: int) -> Dict[str, Any]:
        with self.uow.transaction():
            cart = self._get_or_create(user_id)
            item = self._get_item(cart, item_id)

            if quantity <= 0:
                logger.info(f"Quantity 0 for item {item_id}, removing it from cart {cart.id}")
                self.uow.carts.delete_cart_item(item)
            else:
                product = self.uow.products.get(item.product_id)
                if product.stock < quantity:
                    raise InsufficientStock(product.name)
                item.quantity = quantity
                self.uow.session.flush()

            return self._cart_view(cart)

    def remove_item(self, user_id: UUID, item_id: UUID) -> Dict[str, Any]:
        with self.uow.transaction():
            cart = self._get_or_create(user_id)
            item = self._get_item(cart, item_id)

            logger.info(f"Removing item {item_id} from cart {cart.id}")
            self.uow.carts.delete_cart_item(item)

            return self._cart_view(cart)

    def clear(self, user_id: UUID) -> Dict[str, Any]:
        with self.uow.transaction():
            cart = self._get_or_create(user_id)
            removed = self.uow.carts.clear_cart(cart.id)

            logger.info(f"Cleared cart {cart.id}, removed {removed} items")

            return self._cart_view(cart)

    # =====================================================
    # helpers (bez commita, dzialaja w transakcji wolajacego)
    # =====================================================
    @active_cart_retry()
    def _get_or_create(self, user_id: UUID) -> CartModel:
        cart = self.uow.carts.get_active_cart(user_id)
        if cart:
            return cart

        #przy rownoleglym pierwszym uzyciu unikalny indeks odrzuci drugi insert,
        #retry zamienia to w ponowny odczyt
        cart = self.uow.carts.create_cart(user_id)
        logger.info(f"Created new cart {cart.id} for user {user_id}")
        return cart

    def _get_item(self, cart: CartModel, item_id: UUID) -> CartItemModel:
        item = self.uow.carts.get_cart_item(cart.id, item_id)
        if not item:
            raise NotFound("Cart item", item_id)
        return item

    def _cart_view(self, cart: CartModel) -> Dict[str, Any]:
        items = self.uow.carts.get_cart_items(cart.id)
        total = sum((Decimal(i.unit_price) * i.quantity for i in items), ZERO)

        #dict przeksztalcany w jsona
        return {
            "id": cart.id,
            "user_id": cart.user_id,
            "status": cart.status,
            "items": [
                {
                    "id": i.id,
                    "product_id": i.product_id,
                    "quantity": i.quantity,
                    "unit_price": to_money(i.unit_price),
                    "line_total": line_total(i.unit_price, i.quantity),
                    "product": {
                        "id": i.product.id,
                        "name": i.product.name,
                        "price": to_money(i.product.price),
                    }
                    if i.product
                    else None,
                }
                for i in items
            ],
            "total_price": to_money(total),
        }
