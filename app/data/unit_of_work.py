# app/data/unit_of_work.py
from contextlib import contextmanager

from sqlalchemy.orm import Session

from app.repos.cart_repo import CartRepo
from app.repos.category_repo import CategoryRepo
from app.repos.order_repo import OrderRepo
from app.repos.product_repo import ProductRepo
from app.repos.user_repo import UserRepo
from app.utils.logging import get_logger

logger = get_logger(__name__)


class UnitOfWork:
    """
    Jawny zakres transakcji przekazywany do serwisow.
    Repozytoria tylko flushuja, commit/rollback robi wylacznie transaction(),
    wywolywane w publicznych metodach serwisow.
    """

    def __init__(self, session: Session):
        self.session = session
        self.users = UserRepo(session)
        self.categories = CategoryRepo(session)
        self.products = ProductRepo(session)
        self.carts = CartRepo(session)
        self.orders = OrderRepo(session)

    @contextmanager
    def transaction(self):
        try:
            yield self
            self.session.commit()
        except Exception:
            logger.debug("Rolling back unit of work")
            self.session.rollback()
            raise
