from flask import Blueprint, request, jsonify

from models import db
from services.catalog import CatalogService
from services.errors import InvalidRequest, PromoNotFound
from services.reservation_engine import parse_positive_int
from utils.pricing import compute_subtotal, compute_total
from utils.promo import lookup_promo, validate_promo

promo_bp = Blueprint("promo", __name__, url_prefix="/api")


def _json_object() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidRequest("Request body must be a JSON object")
    return data


@promo_bp.post("/promo/validate")
def validate():
    data = _json_object()
    try:
        promo = validate_promo(data.get("code"))
    except PromoNotFound as exc:
        return jsonify(valid=False, message=exc.message, kind=exc.kind), 404
    return jsonify(promo.to_dict()), 200


@promo_bp.post("/pricing/quote")
def quote():
    """Price a booking with the same formula the reservation engine stores."""
    data = _json_object()
    experience_id = parse_positive_int(data, "experience_id")
    guests = parse_positive_int(data, "guests")
    experience = CatalogService(db.session).get_experience(experience_id)

    promo = lookup_promo(data.get("promo_code"))
    subtotal = compute_subtotal(experience.price, guests)
    total = compute_total(experience.price, guests, promo)

    return jsonify(
        experience_id=experience.id,
        guests=guests,
        subtotal=float(subtotal),
        discount=float(subtotal - total),
        total=float(total),
        promo=promo.to_dict() if promo else None,
    ), 200
