from decimal import Decimal, ROUND_HALF_UP

from utils.promo import FIXED, PERCENTAGE

CENTS = Decimal("0.01")
ZERO = Decimal("0")


def _to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() keeps floats like 149.99 from turning into long binary expansions
    return Decimal(str(value))


def compute_subtotal(unit_price, guests: int) -> Decimal:
    return (_to_decimal(unit_price) * guests).quantize(CENTS, rounding=ROUND_HALF_UP)


def compute_total(unit_price, guests: int, discount=None) -> Decimal:
    """
    Total for ``guests`` seats at ``unit_price``, after an optional promo descriptor.
    Never negative; rounded to cents.
    """
    subtotal = _to_decimal(unit_price) * guests

    if discount is None:
        total = subtotal
    elif discount.kind == PERCENTAGE:
        total = subtotal * (1 - _to_decimal(discount.discount) / 100)
    elif discount.kind == FIXED:
        total = subtotal - _to_decimal(discount.discount)
    else:
        raise ValueError(f"Unknown discount kind: {discount.kind}")

    return max(ZERO, total).quantize(CENTS, rounding=ROUND_HALF_UP)
