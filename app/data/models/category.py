from sqlalchemy import Column, String, Text
from sqlalchemy.orm import relationship

from app.data.database import Base
from app.data.mixins import UuidPkMixin, TimestampMixin, SoftDeleteMixin


class CategoryModel(UuidPkMixin, TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "categories"

    name = Column(String(120), nullable=False)
    description = Column(Text, nullable=True)

    products = relationship("ProductModel", back_populates="category")
