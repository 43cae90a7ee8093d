from decimal import Decimal

from storefront.domain.pricing import calculate_order_total, shipping_fee


def test_two_items_below_free_shipping():
    assert calculate_order_total([(Decimal("300"), 2), (Decimal("150"), 1)]) == (
        Decimal("750.00"),
        Decimal("50.00"),
        Decimal("800.00"),
    )


def test_free_shipping_only_above_threshold():
    assert shipping_fee(Decimal("1000.00")) == Decimal("50.00")
    assert shipping_fee(Decimal("1000.01")) == Decimal("0.00")


def test_total_uses_exact_decimals():
    subtotal, shipping, total = calculate_order_total([(Decimal("333.33"), 3), (Decimal("0.02"), 1)])

    assert subtotal == Decimal("1000.01")
    assert shipping == Decimal("0.00")
    assert total == Decimal("1000.01")
