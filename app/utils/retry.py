# app/utils/retry.py
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from app.domain.errors import ConstraintViolation


#przegrany wyscig na unikalnym indeksie aktywnego koszyka powtarzamy jako odczyt
def active_cart_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.05, min=0.05, max=0.5),
        retry=retry_if_exception_type(ConstraintViolation),
    )
