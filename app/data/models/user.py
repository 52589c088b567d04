from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from app.data.database import Base
from app.data.mixins import UuidPkMixin, TimestampMixin, SoftDeleteMixin


class UserModel(UuidPkMixin, TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "users"

    name = Column(String(120), nullable=True)
    email = Column(String(255), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(16), nullable=False)

    carts = relationship("CartModel", back_populates="user")
    orders = relationship("OrderModel", back_populates="user")
