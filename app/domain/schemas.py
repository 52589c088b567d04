# app/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, EmailStr
from typing import List
from decimal import Decimal
from datetime import datetime
from uuid import UUID

from app.domain.enums import Role, OrderStatus, CartStatus


# =====================================================
# AUTH
# =====================================================
class RegisterIn(BaseModel):
    """Schema dla rejestracji uzytkownika."""

    name: str | None = Field(None, max_length=120)
    email: EmailStr
    password: str = Field(..., min_length=6, description="Haslo (min. 6 znakow)")
    role: Role = Role.CUSTOMER


class LoginIn(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class RefreshIn(BaseModel):
    refresh_token: str = Field(..., min_length=1)


class UserRead(BaseModel):
    """Schema dla uzytkownika (response)."""

    id: UUID
    name: str | None = None
    email: str
    role: Role

    model_config = ConfigDict(from_attributes=True)


class TokensOut(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class AuthOut(TokensOut):
    user: UserRead


# =====================================================
# CATALOG
# =====================================================
class CategoryIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    description: str | None = None


class CategoryOut(BaseModel):
    id: UUID
    name: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CategoryPage(BaseModel):
    categories: List[CategoryOut]
    total_pages: int
    current_page: int
    total_categories: int


class ProductIn(BaseModel):
    """Schema dla tworzenia produktu."""

    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    stock: int = Field(..., ge=0, description="Stan magazynowy (>= 0)")
    category_id: UUID
    image_url: str | None = Field(None, max_length=500)


class ProductUpdate(BaseModel):
    """Schema dla aktualizacji produktu, wszystkie pola opcjonalne."""

    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    price: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    stock: int | None = Field(None, ge=0)
    category_id: UUID | None = None
    image_url: str | None = Field(None, max_length=500)


class CategoryRef(BaseModel):
    id: UUID
    name: str

    model_config = ConfigDict(from_attributes=True)


class ProductOut(BaseModel):
    id: UUID
    name: str
    description: str | None = None
    price: Decimal
    stock: int
    category_id: UUID
    image_url: str | None = None
    category: CategoryRef | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProductPage(BaseModel):
    products: List[ProductOut]
    total_pages: int
    current_page: int
    total_products: int


# =====================================================
# CART
# =====================================================
class ItemIn(BaseModel):
    """Schema dla dodawania produktu do koszyka."""

    product_id: UUID
    quantity: int = Field(..., ge=1, description="Ilosc produktu (musi byc >= 1)")


class ItemUpdate(BaseModel):
    """Ilosc 0 usuwa pozycje z koszyka."""

    quantity: int = Field(..., ge=0)


class CartProductOut(BaseModel):
    id: UUID
    name: str
    price: Decimal


class CartItemOut(BaseModel):
    """Schema dla produktu w koszyku (response)."""

    id: UUID
    product_id: UUID
    quantity: int
    unit_price: Decimal
    line_total: Decimal
    product: CartProductOut | None = None


class CartOut(BaseModel):
    """Schema dla koszyka (response)."""

    id: UUID
    user_id: UUID
    status: CartStatus
    items: List[CartItemOut]
    total_price: Decimal


# =====================================================
# ORDERS
# =====================================================
class OrderItemOut(BaseModel):
    id: UUID
    product_id: UUID
    product_name: str
    quantity: int
    unit_price: Decimal

    model_config = ConfigDict(from_attributes=True)


class OrderOut(BaseModel):
    """Schema dla zamowienia (response)."""

    id: UUID
    user_id: UUID
    status: OrderStatus
    total_price: Decimal
    items: List[OrderItemOut]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OrderStatusIn(BaseModel):
    status: OrderStatus
