from sqlalchemy import Column, Integer, ForeignKey, Numeric, String, Uuid
from sqlalchemy.orm import relationship

from app.data.database import Base
from app.data.mixins import UuidPkMixin, TimestampMixin


class OrderItemModel(UuidPkMixin, TimestampMixin, Base):
    __tablename__ = "order_items"

    order_id = Column(Uuid, ForeignKey("orders.id"), nullable=False, index=True)
    #slaba referencja, tylko do wyszukiwania
    product_id = Column(Uuid, ForeignKey("products.id"), nullable=False)

    quantity = Column(Integer, nullable=False)
    #zamrozone w chwili zlozenia zamowienia
    unit_price = Column(Numeric(10, 2), nullable=False)
    product_name = Column(String(200), nullable=False)

    order = relationship("OrderModel", back_populates="items")
