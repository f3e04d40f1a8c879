from dataclasses import dataclass
from decimal import Decimal

from services.errors import PromoNotFound

PERCENTAGE = "percentage"
FIXED = "fixed"


@dataclass(frozen=True)
class PromoDescriptor:
    code: str
    discount: Decimal
    kind: str  # PERCENTAGE or FIXED

    def to_dict(self):
        return {"code": self.code, "discount": float(self.discount), "type": self.kind, "valid": True}


PROMO_CODES = {
    "SAVE10": PromoDescriptor("SAVE10", Decimal("10"), PERCENTAGE),
    "FLAT100": PromoDescriptor("FLAT100", Decimal("100"), FIXED),
}


def normalize_code(code) -> str:
    if code is None:
        return ""
    return str(code).strip().upper()


def lookup_promo(code):
    return PROMO_CODES.get(normalize_code(code))


def validate_promo(code) -> PromoDescriptor:
    promo = lookup_promo(code)
    if promo is None:
        raise PromoNotFound("Invalid promo code")
    return promo
