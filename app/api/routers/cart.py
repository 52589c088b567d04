#app/api/routers/cart.py
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_uow, require_role, CurrentUser
from app.data.unit_of_work import UnitOfWork
from app.domain.enums import Role
from app.domain.errors import ShopError
from app.domain.schemas import ItemIn, ItemUpdate, CartOut
from app.services.cart_service import CartService

router = APIRouter(prefix="/api/cart", tags=["cart"])

#koszyk ma tylko klient, tak jak zamowienia
customer = require_role(Role.CUSTOMER)


@router.get("", response_model=CartOut)
def get_cart(
    user: CurrentUser = Depends(customer),
    uow: UnitOfWork = Depends(get_uow),
):
    return CartService(uow).get_cart_with_items(user.id)


@router.post("/items", response_model=CartOut, status_code=201)
def add_item(
    payload: ItemIn,
    user: CurrentUser = Depends(customer),
    uow: UnitOfWork = Depends(get_uow),
):
    try:
        return CartService(uow).add_item(user.id, payload.product_id, payload.quantity)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.put("/items/{item_id}", response_model=CartOut)
def update_item(
    item_id: UUID,
    payload: ItemUpdate,
    user: CurrentUser = Depends(customer),
    uow: UnitOfWork = Depends(get_uow),
):
    try:
        return CartService(uow).update_item(user.id, item_id, payload.quantity)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/items/{item_id}", response_model=CartOut)
def remove_item(
    item_id: UUID,
    user: CurrentUser = Depends(customer),
    uow: UnitOfWork = Depends(get_uow),
):
    try:
        return CartService(uow).remove_item(user.id, item_id)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/clear", response_model=CartOut)
def clear_cart(
    user: CurrentUser = Depends(customer),
    uow: UnitOfWork = Depends(get_uow),
):
    return CartService(uow).clear(user.id)
