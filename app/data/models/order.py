from sqlalchemy import Column, ForeignKey, String, Numeric, Uuid
from sqlalchemy.orm import relationship

from app.data.database import Base
from app.data.mixins import UuidPkMixin, TimestampMixin
from app.domain.enums import OrderStatus


class OrderModel(UuidPkMixin, TimestampMixin, Base):
    __tablename__ = "orders"

    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)

    status = Column(String(16), nullable=False, default=OrderStatus.PLACED.value)  # placed, shipped, delivered, cancelled
    total_price = Column(Numeric(10, 2), nullable=False)

    user = relationship("UserModel", back_populates="orders")
    items = relationship(
        "OrderItemModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItemModel.created_at",
    )
