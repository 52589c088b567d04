#app/data/models/cart.py
from sqlalchemy import Column, ForeignKey, String, Index, Uuid, text
from sqlalchemy.orm import relationship

from app.data.database import Base
from app.data.mixins import UuidPkMixin, TimestampMixin
from app.domain.enums import CartStatus


class CartModel(UuidPkMixin, TimestampMixin, Base):
    __tablename__ = "carts"

    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String(16), nullable=False, default=CartStatus.ACTIVE.value)

    user = relationship("UserModel", back_populates="carts")
    items = relationship(
        "CartItemModel",
        back_populates="cart",
        cascade="all, delete-orphan",
        order_by="CartItemModel.created_at",
    )

    #najwyzej jeden aktywny koszyk na uzytkownika
    __table_args__ = (
        Index(
            "uq_carts_user_active",
            "user_id",
            unique=True,
            postgresql_where=text("status = 'active'"),
            sqlite_where=text("status = 'active'"),
        ),
    )
