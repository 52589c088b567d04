import os

# ustawione przed importem app.*, settings czyta env przy imporcie
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"
os.environ["CELERY_BROKER_URL"] = "memory://"
os.environ["CELERY_RESULT_BACKEND"] = "cache+memory://"
os.environ["JWT_ACCESS_SECRET"] = "test_access_secret"
os.environ["JWT_REFRESH_SECRET"] = "test_refresh_secret"

from decimal import Decimal
from unittest.mock import Mock

import pytest
from sqlalchemy.orm import sessionmaker

from app.data.database import build_engine, init_db
from app.data.models.category import CategoryModel
from app.data.models.product import ProductModel
from app.data.models.user import UserModel
from app.data.unit_of_work import UnitOfWork
from app.domain.enums import Role
from app.services.cart_service import CartService
from app.services.checkout_service import CheckoutService
from app.services.notification_service import NotificationService
from app.services.order_service import OrderService
from app.utils.security import hash_password


@pytest.fixture
def engine(tmp_path):
    eng = build_engine(f"sqlite+pysqlite:///{tmp_path / 'shop.db'}")
    init_db(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def uow(db):
    return UnitOfWork(db)


@pytest.fixture
def notifier():
    return Mock(spec=NotificationService)


@pytest.fixture
def cart_service(uow):
    return CartService(uow)


@pytest.fixture
def checkout_service(uow, notifier):
    return CheckoutService(uow, notification_service=notifier)


@pytest.fixture
def order_service(uow, notifier):
    return OrderService(uow, notification_service=notifier)


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(role: Role = Role.CUSTOMER, password: str = "secret123") -> UserModel:
        counter["n"] += 1
        user = UserModel(
            name=f"User {counter['n']}",
            email=f"user{counter['n']}@example.com",
            password_hash=hash_password(password),
            role=role.value,
        )
        db.add(user)
        db.commit()
        return user

    return _make


@pytest.fixture
def category(db):
    cat = CategoryModel(name="Electronics", description="Gadgets")
    db.add(cat)
    db.commit()
    return cat


@pytest.fixture
def make_product(db, category):
    def _make(name: str = "Keyboard", price: str = "10.00", stock: int = 5) -> ProductModel:
        product = ProductModel(
            name=name,
            price=Decimal(price),
            stock=stock,
            category_id=category.id,
        )
        db.add(product)
        db.commit()
        return product

    return _make


@pytest.fixture
def stock_of(db):
    """Aktualny stan z bazy, z pominieciem identity map."""

    def _stock(product) -> int:
        db.expire_all()
        return db.get(ProductModel, product.id).stock

    return _stock
