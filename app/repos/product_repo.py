# app/repos/product_repo.py
from decimal import Decimal
from uuid import UUID

from sqlalchemy import select, update, func
from sqlalchemy.orm import Session, joinedload

from app.data.models.category import CategoryModel
from app.data.models.product import ProductModel
from app.domain.enums import Lifecycle

SORTABLE_FIELDS = {
    "created_at": ProductModel.created_at,
    "name": ProductModel.name,
    "price": ProductModel.price,
    "stock": ProductModel.stock,
}


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get(self, product_id: UUID) -> ProductModel | None:
        return self.db.get(ProductModel, product_id, populate_existing=True)

    def get_active(self, product_id: UUID) -> ProductModel | None:
        return self.db.execute(
            select(ProductModel).where(
                ProductModel.id == product_id,
                ProductModel.lifecycle == Lifecycle.ACTIVE.value,
            )
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def get_visible(self, product_id: UUID) -> ProductModel | None:
        """Produkt aktywny w aktywnej kategorii (widok katalogu)."""
        return self.db.execute(
            select(ProductModel)
            .join(ProductModel.category)
            .where(
                ProductModel.id == product_id,
                ProductModel.lifecycle == Lifecycle.ACTIVE.value,
                CategoryModel.lifecycle == Lifecycle.ACTIVE.value,
            )
            .options(joinedload(ProductModel.category))
        ).scalar_one_or_none()

    def get_for_update(self, product_id: UUID) -> ProductModel | None:
        #blokada wiersza + swiezy odczyt, bez ufania wartosciom z identity map
        return self.db.execute(
            select(ProductModel)
            .where(ProductModel.id == product_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

    def decrement_stock(self, product: ProductModel, quantity: int) -> bool:
        """
        Warunkowa dekrementacja stanu.
        UPDATE ... SET stock = stock - q WHERE id = ... AND stock >= q
        0 zmienionych wierszy oznacza przegrany wyscig o ostatnie sztuki.
        """
        res = self.db.execute(
            update(ProductModel)
            .where(
                ProductModel.id == product.id,
                ProductModel.stock >= quantity,
                ProductModel.lifecycle == Lifecycle.ACTIVE.value,
            )
            .values(stock=ProductModel.stock - quantity)
            .execution_options(synchronize_session=False)
        )
        #wartosc w identity map jest juz nieaktualna
        self.db.expire(product, ["stock"])
        return res.rowcount == 1

    def list_visible(
        self,
        offset: int,
        limit: int,
        category_id: UUID | None = None,
        name: str | None = None,
        min_price: Decimal | None = None,
        max_price: Decimal | None = None,
        sort_field: str = "created_at",
        sort_direction: str = "desc",
    ) -> tuple[list[ProductModel], int]:
        conditions = [
            ProductModel.lifecycle == Lifecycle.ACTIVE.value,
            CategoryModel.lifecycle == Lifecycle.ACTIVE.value,
        ]
        if category_id is not None:
            conditions.append(ProductModel.category_id == category_id)
        if name:
            conditions.append(ProductModel.name.ilike(f"%{name}%"))
        if min_price is not None:
            conditions.append(ProductModel.price >= min_price)
        if max_price is not None:
            conditions.append(ProductModel.price <= max_price)

        column = SORTABLE_FIELDS.get(sort_field, ProductModel.created_at)
        order = column.asc() if sort_direction == "asc" else column.desc()

        total = self.db.execute(
            select(func.count())
            .select_from(ProductModel)
            .join(ProductModel.category)
            .where(*conditions)
        ).scalar_one()
        rows = self.db.execute(
            select(ProductModel)
            .join(ProductModel.category)
            .where(*conditions)
            .options(joinedload(ProductModel.category))
            .order_by(order)
            .offset(offset)
            .limit(limit)
        ).scalars()
        return list(rows), total

    def add(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.flush()
        return product
