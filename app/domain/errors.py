# app/domain/errors.py
"""
Zamkniety zbior bledow domenowych.
Kazdy blad niesie tylko pola potrzebne do komunikatu i kod HTTP,
na ktory mapuja go routery.
"""


class ShopError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(ShopError):
    status_code = 404

    def __init__(self, entity: str, entity_id=None):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found")


class InsufficientStock(ShopError):
    def __init__(self, product_name: str):
        self.product_name = product_name
        super().__init__(f"Insufficient stock for {product_name}")


class ProductUnavailable(ShopError):
    def __init__(self, product_name: str):
        self.product_name = product_name
        super().__init__(f"Product {product_name} is no longer available")


class EmptyCart(ShopError):
    def __init__(self):
        super().__init__("Cart is empty")


class ConstraintViolation(ShopError):
    status_code = 409

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class InvalidCredentials(ShopError):
    status_code = 401

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class InvalidQuantity(ShopError):
    def __init__(self, quantity: int):
        self.quantity = quantity
        super().__init__("Quantity must be at least 1")
