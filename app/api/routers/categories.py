# app/api/routers/categories.py
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query

from app.api.deps import get_uow, get_current_user, require_role
from app.data.unit_of_work import UnitOfWork
from app.domain.enums import Role
from app.domain.errors import ShopError
from app.domain.schemas import CategoryIn, CategoryOut, CategoryPage
from app.services.category_service import CategoryService
from app.utils.settings import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE

router = APIRouter(prefix="/api/categories", tags=["categories"])

admin_only = Depends(require_role(Role.ADMIN))
authenticated = Depends(get_current_user)


@router.post("", response_model=CategoryOut, status_code=201, dependencies=[admin_only])
def create_category(payload: CategoryIn, uow: UnitOfWork = Depends(get_uow)):
    return CategoryService(uow).create_category(payload)


@router.get("", response_model=CategoryPage, dependencies=[authenticated])
def list_categories(
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    uow: UnitOfWork = Depends(get_uow),
):
    return CategoryService(uow).list_categories(page, limit)


@router.get("/{category_id}", response_model=CategoryOut, dependencies=[authenticated])
def get_category(category_id: UUID, uow: UnitOfWork = Depends(get_uow)):
    try:
        return CategoryService(uow).get_category(category_id)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.put("/{category_id}", response_model=CategoryOut, dependencies=[admin_only])
def update_category(category_id: UUID, payload: CategoryIn, uow: UnitOfWork = Depends(get_uow)):
    try:
        return CategoryService(uow).update_category(category_id, payload)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.delete("/{category_id}", response_model=CategoryOut, dependencies=[admin_only])
def delete_category(category_id: UUID, uow: UnitOfWork = Depends(get_uow)):
    try:
        return CategoryService(uow).delete_category(category_id)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
