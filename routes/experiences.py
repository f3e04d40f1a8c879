from datetime import date

from flask import Blueprint, request, jsonify

from models import db
from services.catalog import CatalogService
from services.errors import InvalidRequest
from services.slot_store import SlotStore

experiences_bp = Blueprint("experiences", __name__, url_prefix="/api/experiences")


@experiences_bp.get("")
def list_experiences():
    experiences = CatalogService(db.session).list_experiences()
    return jsonify([e.to_dict() for e in experiences]), 200


@experiences_bp.get("/<int:experience_id>")
def get_experience(experience_id: int):
    experience = CatalogService(db.session).get_experience(experience_id)
    return jsonify(experience.to_dict()), 200


@experiences_bp.get("/<int:experience_id>/slots")
def list_slots(experience_id: int):
    # optional filter: date (YYYY-MM-DD)
    date_str = request.args.get("date")
    on_date = None
    if date_str:
        try:
            on_date = date.fromisoformat(date_str)
        except ValueError:
            raise InvalidRequest("Invalid date. Use YYYY-MM-DD")

    CatalogService(db.session).get_experience(experience_id)
    slots = SlotStore(db.session).list_slots(experience_id, on_date)
    return jsonify([s.to_dict() for s in slots]), 200
