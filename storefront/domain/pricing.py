# storefront/domain/pricing.py
from decimal import Decimal
from typing import Iterable, Tuple

from storefront.utils.settings import FREE_SHIPPING_THRESHOLD, SHIPPING_FEE

ZERO = Decimal("0.00")


def money(value) -> Decimal:
    return Decimal(str(value)).quantize(Decimal("0.01"))


def shipping_fee(subtotal: Decimal) -> Decimal:
    # darmowa wysylka dopiero POWYZEJ progu, rowno 1000 dalej placi
    if subtotal > FREE_SHIPPING_THRESHOLD:
        return ZERO
    return money(SHIPPING_FEE)


def calculate_order_total(items: Iterable[Tuple[Decimal, int]]) -> Tuple[Decimal, Decimal, Decimal]:
    """
    items: pary (cena jednostkowa, ilosc).
    Zwraca (subtotal, shipping, total).
    """
    subtotal = money(sum((Decimal(str(price)) * qty for price, qty in items), ZERO))
    shipping = shipping_fee(subtotal)
    return subtotal, shipping, subtotal + shipping
