# app/services/category_service.py
import math
from uuid import UUID

from app.data.models.category import CategoryModel
from app.data.unit_of_work import UnitOfWork
from app.domain.errors import NotFound
from app.domain.schemas import CategoryIn
from app.utils.logging import get_logger

logger = get_logger(__name__)


class CategoryService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    def create_category(self, payload: CategoryIn) -> CategoryModel:
        with self.uow.transaction():
            category = self.uow.categories.add(
                CategoryModel(name=payload.name, description=payload.description)
            )
        logger.info(f"Created category {category.id} ({category.name})")
        return category

    def list_categories(self, page: int, limit: int) -> dict:
        with self.uow.transaction():
            rows, total = self.uow.categories.list_active(offset=(page - 1) * limit, limit=limit)
        return {
            "categories": rows,
            "total_pages": math.ceil(total / limit),
            "current_page": page,
            "total_categories": total,
        }

    def get_category(self, category_id: UUID) -> CategoryModel:
        with self.uow.transaction():
            return self._get(category_id)

    def update_category(self, category_id: UUID, payload: CategoryIn) -> CategoryModel:
        with self.uow.transaction():
            category = self._get(category_id)
            category.name = payload.name
            category.description = payload.description
            self.uow.session.flush()
        return category

    def delete_category(self, category_id: UUID) -> CategoryModel:
        """Soft delete, produkty kategorii znikaja z katalogu razem z nia."""
        with self.uow.transaction():
            category = self._get(category_id)
            category.mark_deleted()
            self.uow.session.flush()
        logger.info(f"Soft-deleted category {category_id}")
        return category

    def _get(self, category_id: UUID) -> CategoryModel:
        category = self.uow.categories.get_active(category_id)
        if not category:
            raise NotFound("Category", category_id)
        return category
