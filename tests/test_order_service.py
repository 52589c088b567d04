from decimal import Decimal
from uuid import uuid4

import pytest

from app.domain.enums import OrderStatus
from app.domain.errors import NotFound


@pytest.fixture
def place_order(cart_service, checkout_service):
    def _place(user, product, quantity=1):
        cart_service.add_item(user.id, product.id, quantity)
        return checkout_service.create_order_from_cart(user.id)

    return _place


def test_user_orders_newest_first_and_scoped(order_service, place_order, make_user, make_product):
    alice = make_user()
    bob = make_user()
    product = make_product(stock=10)

    first = place_order(alice, product)
    second = place_order(alice, product, 2)
    place_order(bob, product)

    orders = order_service.get_user_orders(alice.id)

    assert [o.id for o in orders] == [second.id, first.id]
    assert orders[0].items[0].quantity == 2


def test_get_order_by_id_enforces_ownership(order_service, place_order, make_user, make_product):
    alice = make_user()
    mallory = make_user()
    order = place_order(alice, make_product())

    assert order_service.get_order_by_id(order.id, alice.id).id == order.id

    with pytest.raises(NotFound):
        order_service.get_order_by_id(order.id, mallory.id)

    with pytest.raises(NotFound):
        order_service.get_order_by_id(uuid4(), alice.id)


def test_order_items_keep_snapshot_after_product_changes(
    order_service, place_order, make_user, make_product, db
):
    user = make_user()
    product = make_product("Lamp", price="15.00", stock=3)
    order = place_order(user, product, 2)

    product.name = "Renamed lamp"
    product.price = Decimal("1.00")
    product.mark_deleted()
    db.commit()
    db.expire_all()

    stored = order_service.get_order_by_id(order.id, user.id)
    assert stored.items[0].product_name == "Lamp"
    assert stored.items[0].unit_price == Decimal("15.00")
    assert stored.total_price == Decimal("30.00")


def test_update_status_allows_any_transition(order_service, place_order, make_user, make_product, notifier):
    user = make_user()
    order = place_order(user, make_product())

    updated = order_service.update_order_status(order.id, OrderStatus.DELIVERED)
    assert updated.status == OrderStatus.DELIVERED.value

    #brak grafu przejsc: delivered -> placed tez przechodzi
    updated = order_service.update_order_status(order.id, OrderStatus.PLACED)
    assert updated.status == OrderStatus.PLACED.value

    assert notifier.send_status_changed.call_count == 2
    notifier.send_status_changed.assert_called_with(user.id, order.id, "delivered", "placed")


def test_update_status_same_value_does_not_notify(order_service, place_order, make_user, make_product, notifier):
    user = make_user()
    order = place_order(user, make_product())

    order_service.update_order_status(order.id, "placed")

    notifier.send_status_changed.assert_not_called()


def test_update_status_unknown_order(order_service):
    with pytest.raises(NotFound):
        order_service.update_order_status(uuid4(), OrderStatus.SHIPPED)


def test_update_status_rejects_unknown_value(order_service, place_order, make_user, make_product):
    order = place_order(make_user(), make_product())

    with pytest.raises(ValueError):
        order_service.update_order_status(order.id, "lost")
