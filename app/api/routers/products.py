# app/api/routers/products.py
from decimal import Decimal
from typing import Literal
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query

from app.api.deps import get_uow, get_current_user, require_role
from app.data.unit_of_work import UnitOfWork
from app.domain.enums import Role
from app.domain.errors import ShopError
from app.domain.schemas import ProductIn, ProductUpdate, ProductOut, ProductPage
from app.services.product_service import ProductService
from app.utils.settings import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

router = APIRouter(prefix="/api/products", tags=["products"])

admin_only = Depends(require_role(Role.ADMIN))
authenticated = Depends(get_current_user)


@router.post("", response_model=ProductOut, status_code=201, dependencies=[admin_only])
def create_product(payload: ProductIn, uow: UnitOfWork = Depends(get_uow)):
    try:
        return ProductService(uow).create_product(payload)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("", response_model=ProductPage, dependencies=[authenticated])
def list_products(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    category_id: UUID | None = None,
    name: str | None = None,
    min_price: Decimal | None = Query(None, ge=0),
    max_price: Decimal | None = Query(None, ge=0),
    sort_field: Literal["created_at", "name", "price", "stock"] = "created_at",
    sort_direction: Literal["asc", "desc"] = "desc",
    uow: UnitOfWork = Depends(get_uow),
):
    return ProductService(uow).list_products(
        page,
        limit,
        category_id=category_id,
        name=name,
        min_price=min_price,
        max_price=max_price,
        sort_field=sort_field,
        sort_direction=sort_direction,
    )


@router.get("/{product_id}", response_model=ProductOut, dependencies=[authenticated])
def get_product(product_id: UUID, uow: UnitOfWork = Depends(get_uow)):
    try:
        return ProductService(uow).get_product(product_id)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.put("/{product_id}", response_model=ProductOut, dependencies=[admin_only])
def update_product(product_id: UUID, payload: ProductUpdate, uow: UnitOfWork = Depends(get_uow)):
    try:
        return ProductService(uow).update_product(product_id, payload)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{product_id}", response_model=ProductOut, dependencies=[admin_only])
def delete_product(product_id: UUID, uow: UnitOfWork = Depends(get_uow)):
    try:
        return ProductService(uow).delete_product(product_id)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
