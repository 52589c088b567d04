from decimal import Decimal
from unittest.mock import Mock

import pytest
from kombu.exceptions import OperationalError
from sqlalchemy import select, func, update

from app.data.models.cart import CartModel
from app.data.models.order import OrderModel
from app.data.models.order_item import OrderItemModel
from app.data.models.product import ProductModel
from app.data.unit_of_work import UnitOfWork
from app.domain.enums import CartStatus, OrderStatus
from app.domain.errors import ConstraintViolation, EmptyCart, InsufficientStock, ProductUnavailable
from app.services import notification_service
from app.services.checkout_service import CheckoutService
from app.services.notification_service import NotificationService


def count(db, model) -> int:
    return db.execute(select(func.count()).select_from(model)).scalar_one()


def test_checkout_single_line(cart_service, checkout_service, make_user, make_product, stock_of, db, notifier):
    user = make_user()
    p1 = make_product("P1", price="10.00", stock=5)
    cart = cart_service.get_or_create_active_cart(user.id)
    cart_service.add_item(user.id, p1.id, 2)

    order = checkout_service.create_order_from_cart(user.id)

    assert order.status == OrderStatus.PLACED.value
    assert order.total_price == Decimal("20.00")
    assert len(order.items) == 1
    item = order.items[0]
    assert (item.product_id, item.quantity, item.unit_price, item.product_name) == (
        p1.id, 2, Decimal("10.00"), "P1",
    )
    assert stock_of(p1) == 3
    assert db.get(CartModel, cart.id).status == CartStatus.CONVERTED.value
    notifier.send_order_placed.assert_called_once_with(user.id, order.id)


def test_checkout_uses_cart_snapshot_price_and_current_name(
    cart_service, checkout_service, make_user, make_product, db
):
    user = make_user()
    product = make_product("Old name", price="10.00", stock=5)
    cart_service.add_item(user.id, product.id, 3)

    product.price = Decimal("99.99")
    product.name = "New name"
    db.commit()

    order = checkout_service.create_order_from_cart(user.id)

    assert order.total_price == Decimal("30.00")
    assert order.items[0].unit_price == Decimal("10.00")
    assert order.items[0].product_name == "New name"


def test_checkout_insufficient_stock_has_no_side_effects(
    cart_service, checkout_service, make_user, make_product, stock_of, db, notifier
):
    user = make_user()
    p1 = make_product("P1", stock=5)
    cart_service.add_item(user.id, p1.id, 5)

    p1.stock = 3
    db.commit()

    with pytest.raises(InsufficientStock) as exc:
        checkout_service.create_order_from_cart(user.id)

    assert exc.value.product_name == "P1"
    assert stock_of(p1) == 3
    assert count(db, OrderModel) == 0
    assert cart_service.get_cart_with_items(user.id)["items"][0]["quantity"] == 5
    notifier.send_order_placed.assert_not_called()


def test_failure_on_later_line_rolls_back_everything(
    cart_service, checkout_service, make_user, make_product, stock_of, db
):
    user = make_user()
    first = make_product("First", stock=10)
    second = make_product("Second", stock=10)
    third = make_product("Third", stock=10)
    for product, qty in ((first, 2), (second, 3), (third, 4)):
        cart_service.add_item(user.id, product.id, qty)
    cart_before = cart_service.get_cart_with_items(user.id)

    third.stock = 1
    db.commit()

    with pytest.raises(InsufficientStock) as exc:
        checkout_service.create_order_from_cart(user.id)

    assert exc.value.product_name == "Third"
    assert [stock_of(p) for p in (first, second, third)] == [10, 10, 1]
    assert count(db, OrderModel) == 0
    assert count(db, OrderItemModel) == 0

    cart_after = cart_service.get_cart_with_items(user.id)
    assert cart_after["id"] == cart_before["id"]
    assert cart_after["status"] == CartStatus.ACTIVE.value
    assert [i["quantity"] for i in cart_after["items"]] == [2, 3, 4]


def test_first_violation_in_line_order_is_reported(
    cart_service, checkout_service, make_user, make_product, db
):
    user = make_user()
    gone = make_product("Gone", stock=5)
    short = make_product("Short", stock=5)
    cart_service.add_item(user.id, gone.id, 1)
    cart_service.add_item(user.id, short.id, 2)

    gone.mark_deleted()
    short.stock = 0
    db.commit()

    with pytest.raises(ProductUnavailable) as exc:
        checkout_service.create_order_from_cart(user.id)

    assert exc.value.product_name == "Gone"


def test_empty_cart(cart_service, checkout_service, make_user, db):
    user = make_user()

    with pytest.raises(EmptyCart):
        checkout_service.create_order_from_cart(user.id)

    cart_service.get_or_create_active_cart(user.id)
    with pytest.raises(EmptyCart):
        checkout_service.create_order_from_cart(user.id)

    assert count(db, OrderModel) == 0


def test_converted_cart_is_never_returned_again(cart_service, checkout_service, make_user, make_product):
    user = make_user()
    product = make_product(stock=5)
    old_cart = cart_service.get_or_create_active_cart(user.id)
    cart_service.add_item(user.id, product.id, 1)

    checkout_service.create_order_from_cart(user.id)

    new_cart = cart_service.get_or_create_active_cart(user.id)
    assert new_cart.id != old_cart.id
    assert new_cart.status == CartStatus.ACTIVE.value
    assert cart_service.get_cart_with_items(user.id)["items"] == []

    with pytest.raises(EmptyCart):
        checkout_service.create_order_from_cart(user.id)


def test_second_checkout_after_last_unit_sold_fails(
    cart_service, checkout_service, make_user, make_product, stock_of
):
    alice = make_user()
    bob = make_user()
    product = make_product("Last one", stock=1)
    cart_service.add_item(alice.id, product.id, 1)
    cart_service.add_item(bob.id, product.id, 1)

    checkout_service.create_order_from_cart(alice.id)

    with pytest.raises(InsufficientStock):
        checkout_service.create_order_from_cart(bob.id)

    assert stock_of(product) == 0


def other_checkout(session_factory):
    """Checkout w osobnej sesji, jak drugi request."""
    session = session_factory()
    return session, CheckoutService(UnitOfWork(session), notification_service=Mock(spec=NotificationService))


def test_two_customers_racing_for_last_unit(
    cart_service, checkout_service, uow, db, session_factory, make_user, make_product, stock_of, monkeypatch
):
    alice = make_user()
    bob = make_user()
    product = make_product("Last one", stock=1)
    cart_service.add_item(alice.id, product.id, 1)
    cart_service.add_item(bob.id, product.id, 1)

    #checkout alice przeczytal produkt ze stock=1 ...
    seen_by_alice = uow.products.get_for_update(product.id)
    assert seen_by_alice.stock == 1
    db.commit()

    #... a bob zdazyl kupic ostatnia sztuke w osobnej sesji
    session, bob_checkout = other_checkout(session_factory)
    try:
        bob_checkout.create_order_from_cart(bob.id)
    finally:
        session.close()

    monkeypatch.setattr(uow.products, "get_for_update", lambda product_id: seen_by_alice)

    with pytest.raises(InsufficientStock):
        checkout_service.create_order_from_cart(alice.id)

    assert stock_of(product) == 0
    assert count(db, OrderModel) == 1
    assert cart_service.get_cart_with_items(alice.id)["items"][0]["quantity"] == 1


def test_same_cart_checked_out_twice_creates_one_order(
    cart_service, checkout_service, uow, db, session_factory, make_user, make_product, stock_of, monkeypatch
):
    user = make_user()
    product = make_product("Popular", stock=10)
    cart_service.add_item(user.id, product.id, 2)

    #pierwszy request przeczytal aktywny koszyk ...
    seen_first = uow.carts.get_active_cart(user.id)
    db.commit()

    #... drugi request tego samego usera skonczyl checkout wczesniej
    session, second_checkout = other_checkout(session_factory)
    try:
        second_checkout.create_order_from_cart(user.id)
    finally:
        session.close()

    monkeypatch.setattr(uow.carts, "get_active_cart", lambda user_id, **kwargs: seen_first)

    with pytest.raises(ConstraintViolation):
        checkout_service.create_order_from_cart(user.id)

    assert count(db, OrderModel) == 1
    assert stock_of(product) == 8
    db.expire_all()
    assert db.get(CartModel, seen_first.id).status == CartStatus.CONVERTED.value


def test_mark_converted_refuses_already_converted_cart(uow, db, make_user):
    user = make_user()
    cart = uow.carts.create_cart(user.id)
    uow.carts.mark_converted(cart)
    db.commit()

    with pytest.raises(ConstraintViolation):
        uow.carts.mark_converted(cart)
    db.rollback()


def test_order_survives_unreachable_broker(cart_service, uow, db, make_user, make_product, stock_of, monkeypatch):
    user = make_user()
    product = make_product(stock=3)
    cart_service.add_item(user.id, product.id, 1)

    task = Mock()
    task.delay.side_effect = OperationalError("broker down")
    monkeypatch.setattr(notification_service, "send_order_placed_task", task)

    order = CheckoutService(uow).create_order_from_cart(user.id)

    task.delay.assert_called_once_with(str(user.id), str(order.id))
    db.expire_all()
    assert db.get(OrderModel, order.id) is not None
    assert stock_of(product) == 2
    assert cart_service.get_cart_with_items(user.id)["items"] == []


def test_lost_race_between_validation_and_decrement_aborts(
    cart_service, checkout_service, uow, make_user, make_product, stock_of, db, monkeypatch
):
    user = make_user()
    product = make_product("Contended", stock=2)
    cart_service.add_item(user.id, product.id, 2)

    real_decrement = uow.products.decrement_stock

    #inny checkout wykupuje towar tuz przed nasza dekrementacja
    def concurrent_decrement(prod, quantity):
        db.execute(update(ProductModel).where(ProductModel.id == prod.id).values(stock=1))
        return real_decrement(prod, quantity)

    monkeypatch.setattr(uow.products, "decrement_stock", concurrent_decrement)

    with pytest.raises(InsufficientStock):
        checkout_service.create_order_from_cart(user.id)

    assert stock_of(product) == 2
    assert count(db, OrderModel) == 0


def test_guarded_decrement(uow, make_product, stock_of):
    product = make_product(stock=3)

    assert uow.products.decrement_stock(product, 4) is False
    assert uow.products.decrement_stock(product, 3) is True
    uow.session.commit()

    assert stock_of(product) == 0
