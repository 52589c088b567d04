# app/repos/cart_repo.py
from uuid import UUID

from sqlalchemy import select, delete, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from app.data.models.cart import CartModel
from app.data.models.cart_item import CartItemModel
from app.domain.enums import CartStatus
from app.domain.errors import ConstraintViolation


class CartRepo:
    """Repozytorium nie commituje, granice transakcji wyznacza UnitOfWork."""

    def __init__(self, db: Session):
        self.db = db

    def get_active_cart(self, user_id: UUID, with_items: bool = False, for_update: bool = False) -> CartModel | None:
        stmt = select(CartModel).where(
            CartModel.user_id == user_id,
            CartModel.status == CartStatus.ACTIVE.value,
        )
        if with_items:
            stmt = stmt.options(
                selectinload(CartModel.items).selectinload(CartItemModel.product)
            )
        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)
        return self.db.execute(stmt).scalar_one_or_none()

    def create_cart(self, user_id: UUID) -> CartModel:
        cart = CartModel(user_id=user_id, status=CartStatus.ACTIVE.value)
        #savepoint, zeby przegrany wyscig nie unieważnil calej transakcji
        try:
            with self.db.begin_nested():
                self.db.add(cart)
        except IntegrityError as e:
            raise ConstraintViolation("User already has an active cart") from e
        return cart

    def get_cart_items(self, cart_id: UUID) -> list[CartItemModel]:
        return list(
            self.db.execute(
                select(CartItemModel)
                .where(CartItemModel.cart_id == cart_id)
                .options(selectinload(CartItemModel.product))
                .order_by(CartItemModel.created_at)
            ).scalars()
        )

    def get_cart_item(self, cart_id: UUID, item_id: UUID) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.id == item_id,
                CartItemModel.cart_id == cart_id,
            )
        ).scalar_one_or_none()

    def get_cart_item_by_product(self, cart_id: UUID, product_id: UUID) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.cart_id == cart_id,
                CartItemModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def add_cart_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        self.db.flush()
        return item

    def delete_cart_item(self, item: CartItemModel) -> None:
        self.db.delete(item)
        self.db.flush()

    def clear_cart(self, cart_id: UUID) -> int:
        res = self.db.execute(
            delete(CartItemModel).where(CartItemModel.cart_id == cart_id)
        )
        self.db.expire_all()
        return res.rowcount

    def mark_converted(self, cart: CartModel) -> None:
        """
        active -> converted dokladnie raz.
        UPDATE ... WHERE status = 'active', 0 wierszy = koszyk juz skonsumowany
        przez rownolegly checkout, wiec cala transakcja musi sie wycofac.
        """
        res = self.db.execute(
            update(CartModel)
            .where(
                CartModel.id == cart.id,
                CartModel.status == CartStatus.ACTIVE.value,
            )
            .values(status=CartStatus.CONVERTED.value)
            .execution_options(synchronize_session=False)
        )
        if res.rowcount != 1:
            raise ConstraintViolation("Cart has already been checked out")
        self.db.expire(cart, ["status"])
