# app/data/seed.py
from decimal import Decimal

from app.data.database import SessionLocal, init_db
from app.data.models.category import CategoryModel
from app.data.models.product import ProductModel
from app.data.models.user import UserModel
from app.domain.enums import Role
from app.utils.security import hash_password
from app.utils.settings import ADMIN_EMAIL, ADMIN_PASSWORD
from app.utils.logging import get_logger

logger = get_logger(__name__)

CATEGORIES = {
    "Electronics": "Electronic devices and gadgets",
    "Clothing": "Apparel and fashion items",
    "Books": "Books and educational materials",
    "Home & Kitchen": "Home appliances and kitchenware",
}

PRODUCTS = [
    ("Smartphone", "Latest model smartphone with advanced features", "699.99", 50, "Electronics"),
    ("Laptop", "High-performance laptop for work and gaming", "1299.99", 30, "Electronics"),
    ("T-Shirt", "Comfortable cotton t-shirt", "19.99", 100, "Clothing"),
    ("Jeans", "Classic blue denim jeans", "49.99", 75, "Clothing"),
    ("Python Cookbook", "Recipes for mastering Python", "39.99", 40, "Books"),
    ("Coffee Maker", "Drip coffee maker, 12 cups", "89.99", 25, "Home & Kitchen"),
]


def seed(session_factory=SessionLocal):
    db = session_factory()
    try:
        # not forcing: only seed if empty
        if db.query(UserModel).filter(UserModel.email == ADMIN_EMAIL).first():
            logger.info("Seed data already present, skipping")
            return

        db.add(
            UserModel(
                name="Admin User",
                email=ADMIN_EMAIL,
                password_hash=hash_password(ADMIN_PASSWORD),
                role=Role.ADMIN.value,
            )
        )

        categories = {}
        for name, description in CATEGORIES.items():
            categories[name] = CategoryModel(name=name, description=description)
            db.add(categories[name])

        for name, description, price, stock, category in PRODUCTS:
            db.add(
                ProductModel(
                    name=name,
                    description=description,
                    price=Decimal(price),
                    stock=stock,
                    category=categories[category],
                    image_url=f"https://placehold.co/800x600?text={name.replace(' ', '+')}",
                )
            )

        db.commit()
        logger.info(f"Seeded admin {ADMIN_EMAIL}, {len(CATEGORIES)} categories, {len(PRODUCTS)} products")
    finally:
        db.close()


if __name__ == "__main__":
    init_db()
    seed()
