# app/api/routers/auth.py
from fastapi import APIRouter, Depends, HTTPException

from app.api.deps import get_uow
from app.data.unit_of_work import UnitOfWork
from app.domain.errors import ShopError
from app.domain.schemas import RegisterIn, LoginIn, RefreshIn, AuthOut, TokensOut
from app.services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthOut, status_code=201)
def register(payload: RegisterIn, uow: UnitOfWork = Depends(get_uow)):
    try:
        return AuthService(uow).register(payload)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/login", response_model=AuthOut)
def login(payload: LoginIn, uow: UnitOfWork = Depends(get_uow)):
    try:
        return AuthService(uow).login(payload.email, payload.password)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/refresh", response_model=TokensOut)
def refresh(payload: RefreshIn, uow: UnitOfWork = Depends(get_uow)):
    try:
        return AuthService(uow).refresh(payload.refresh_token)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
