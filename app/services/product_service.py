# app/services/product_service.py
import math
from decimal import Decimal
from uuid import UUID

from app.data.models.product import ProductModel
from app.data.unit_of_work import UnitOfWork
from app.domain.errors import NotFound
from app.domain.schemas import ProductIn, ProductUpdate
from app.utils.logging import get_logger

logger = get_logger(__name__)

NULLABLE_FIELDS = {"description", "image_url"}


class ProductService:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    def create_product(self, payload: ProductIn) -> ProductModel:
        with self.uow.transaction():
            self._require_category(payload.category_id)
            product = self.uow.products.add(ProductModel(**payload.model_dump()))
            #zaladuj kategorie do odpowiedzi
            self.uow.session.refresh(product, ["category"])
        logger.info(f"Created product {product.id} ({product.name}), stock {product.stock}")
        return product

    def list_products(
        self,
        page: int,
        limit: int,
        category_id: UUID | None = None,
        name: str | None = None,
        min_price: Decimal | None = None,
        max_price: Decimal | None = None,
        sort_field: str = "created_at",
        sort_direction: str = "desc",
    ) -> dict:
        with self.uow.transaction():
            rows, total = self.uow.products.list_visible(
                offset=(page - 1) * limit,
                limit=limit,
                category_id=category_id,
                name=name,
                min_price=min_price,
                max_price=max_price,
                sort_field=sort_field,
                sort_direction=sort_direction,
            )
        return {
            "products": rows,
            "total_pages": math.ceil(total / limit),
            "current_page": page,
            "total_products": total,
        }

    def get_product(self, product_id: UUID) -> ProductModel:
        with self.uow.transaction():
            return self._get(product_id)

    def update_product(self, product_id: UUID, payload: ProductUpdate) -> ProductModel:
        """
        Aktualizacja przez admina. Stan magazynowy ustawiany jest na
        zablokowanym wierszu, tak jak przy checkoucie.
        """
        changes = payload.model_dump(exclude_unset=True)
        #null dla pol wymaganych oznacza "bez zmian"
        changes = {
            k: v for k, v in changes.items()
            if v is not None or k in NULLABLE_FIELDS
        }

        with self.uow.transaction():
            self._get(product_id)
            product = self.uow.products.get_for_update(product_id)

            new_category = changes.get("category_id")
            if new_category and new_category != product.category_id:
                self._require_category(new_category)

            for field, value in changes.items():
                setattr(product, field, value)
            self.uow.session.flush()
            self.uow.session.refresh(product, ["category"])

        logger.info(f"Updated product {product_id}: {sorted(changes)}")
        return product

    def delete_product(self, product_id: UUID) -> ProductModel:
        with self.uow.transaction():
            product = self._get(product_id)
            product.mark_deleted()
            self.uow.session.flush()
        logger.info(f"Soft-deleted product {product_id}")
        return product

    def _get(self, product_id: UUID) -> ProductModel:
        product = self.uow.products.get_visible(product_id)
        if not product:
            raise NotFound("Product", product_id)
        return product

    def _require_category(self, category_id: UUID):
        if not self.uow.categories.get_active(category_id):
            raise NotFound("Category", category_id)
