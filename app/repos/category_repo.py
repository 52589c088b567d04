from uuid import UUID

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from app.data.models.category import CategoryModel
from app.domain.enums import Lifecycle


class CategoryRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_active(self, category_id: UUID) -> CategoryModel | None:
        return self.db.execute(
            select(CategoryModel).where(
                CategoryModel.id == category_id,
                CategoryModel.lifecycle == Lifecycle.ACTIVE.value,
            )
        ).scalar_one_or_none()

    def list_active(self, offset: int, limit: int) -> tuple[list[CategoryModel], int]:
        where = CategoryModel.lifecycle == Lifecycle.ACTIVE.value
        total = self.db.execute(select(func.count()).select_from(CategoryModel).where(where)).scalar_one()
        rows = self.db.execute(
            select(CategoryModel)
            .where(where)
            .order_by(CategoryModel.created_at.desc())
            .offset(offset)
            .limit(limit)
        ).scalars()
        return list(rows), total

    def add(self, category: CategoryModel) -> CategoryModel:
        self.db.add(category)
        self.db.flush()
        return category
