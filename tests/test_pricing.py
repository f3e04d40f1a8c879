from decimal import Decimal

import pytest

from utils.pricing import compute_subtotal, compute_total
from utils.promo import FIXED, PERCENTAGE, PromoDescriptor


def test_percentage_discount():
    discount = PromoDescriptor("SAVE10", Decimal("10"), PERCENTAGE)
    assert compute_total(100, 2, discount) == Decimal("180.00")


def test_fixed_discount_is_floored_at_zero():
    discount = PromoDescriptor("FLAT100", Decimal("100"), FIXED)
    assert compute_total(50, 1, discount) == Decimal("0.00")


def test_fixed_discount_subtracts_once_per_booking():
    discount = PromoDescriptor("FLAT100", Decimal("100"), FIXED)
    assert compute_total(Decimal("149"), 3, discount) == Decimal("347.00")


def test_no_discount_is_plain_multiplication():
    assert compute_total(Decimal("89.99"), 3) == Decimal("269.97")
    assert compute_subtotal(Decimal("89.99"), 3) == Decimal("269.97")


def test_total_rounds_to_cents():
    discount = PromoDescriptor("SAVE10", Decimal("10"), PERCENTAGE)
    # 33.33 * 0.9 = 29.997
    assert compute_total(Decimal("33.33"), 1, discount) == Decimal("30.00")


def test_float_prices_do_not_leak_binary_noise():
    assert compute_total(0.1, 3) == Decimal("0.30")


def test_unknown_discount_kind_is_rejected():
    with pytest.raises(ValueError):
        compute_total(100, 1, PromoDescriptor("ODD", Decimal("5"), "bogus"))
