# app/domain/enums.py
from enum import Enum


class Role(str, Enum):
    ADMIN = "admin"
    CUSTOMER = "customer"


class Lifecycle(str, Enum):
    ACTIVE = "active"
    DELETED = "deleted"


class CartStatus(str, Enum):
    ACTIVE = "active"
    CONVERTED = "converted"


class OrderStatus(str, Enum):
    PLACED = "placed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
