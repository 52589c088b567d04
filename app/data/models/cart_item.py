from sqlalchemy import Column, Integer, ForeignKey, Numeric, CheckConstraint, Uuid
from sqlalchemy.orm import relationship

from app.data.database import Base
from app.data.mixins import UuidPkMixin, TimestampMixin


class CartItemModel(UuidPkMixin, TimestampMixin, Base):
    __tablename__ = "cart_items"

    cart_id = Column(Uuid, ForeignKey("carts.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Uuid, ForeignKey("products.id"), nullable=False)

    quantity = Column(Integer, nullable=False)
    #cena z chwili pierwszego dodania, nie sledzi pozniejszych zmian produktu
    unit_price = Column(Numeric(10, 2), nullable=False)

    cart = relationship("CartModel", back_populates="items")
    product = relationship("ProductModel")

    __table_args__ = (CheckConstraint("quantity >= 1", name="ck_cart_items_quantity_positive"),)
