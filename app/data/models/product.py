#app/data/models/product.py
from sqlalchemy import Column, String, Text, Integer, Numeric, ForeignKey, CheckConstraint, Uuid
from sqlalchemy.orm import relationship

from app.data.database import Base
from app.data.mixins import UuidPkMixin, TimestampMixin, SoftDeleteMixin


class ProductModel(UuidPkMixin, TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "products"

    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    #stock zmienia tylko checkout (dekrementacja) albo admin przez update produktu
    stock = Column(Integer, nullable=False, default=0)
    image_url = Column(String(500), nullable=True)
    category_id = Column(Uuid, ForeignKey("categories.id"), nullable=False, index=True)

    category = relationship("CategoryModel", back_populates="products")

    __table_args__ = (CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),)
