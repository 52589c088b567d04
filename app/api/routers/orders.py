# app/api/routers/orders.py
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_uow, require_role, CurrentUser
from app.data.unit_of_work import UnitOfWork
from app.domain.enums import Role
from app.domain.errors import ShopError
from app.domain.schemas import OrderOut, OrderStatusIn
from app.services.checkout_service import CheckoutService
from app.services.order_service import OrderService

router = APIRouter(prefix="/api/orders", tags=["orders"])

customer = require_role(Role.CUSTOMER)
admin = require_role(Role.ADMIN)


@router.post("", response_model=OrderOut, status_code=201)
def create_order(
    user: CurrentUser = Depends(customer),
    uow: UnitOfWork = Depends(get_uow),
):
    """
    Tworzy zamowienie z aktywnego koszyka uzytkownika.
    Wysyla powiadomienie asynchronicznie.
    """
    try:
        return CheckoutService(uow).create_order_from_cart(user.id)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("", response_model=List[OrderOut])
def get_orders(
    user: CurrentUser = Depends(customer),
    uow: UnitOfWork = Depends(get_uow),
):
    return OrderService(uow).get_user_orders(user.id)


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: UUID,
    user: CurrentUser = Depends(customer),
    uow: UnitOfWork = Depends(get_uow),
):
    try:
        return OrderService(uow).get_order_by_id(order_id, user.id)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.put("/{order_id}/status", response_model=OrderOut, dependencies=[Depends(admin)])
def update_status(
    order_id: UUID,
    payload: OrderStatusIn,
    uow: UnitOfWork = Depends(get_uow),
):
    try:
        return OrderService(uow).update_order_status(order_id, payload.status)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
