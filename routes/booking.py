from flask import Blueprint, request, jsonify

from models import db
from services.booking_store import BookingStore
from services.errors import BookitError
from services.reservation_engine import reserve
from utils.audit import log_event


bookings_bp = Blueprint("bookings", __name__, url_prefix="/api/bookings")


# ---------- CUSTOMERS: reserve seats (OVERSELL SAFE) ----------
@bookings_bp.post("")
def create_booking():
    data = request.get_json(silent=True)
    if data is None:
        data = {}

    try:
        booking = reserve(data)
    except BookitError as exc:
        log_event(
            exc.audit_action,
            actor_email=data.get("email") if isinstance(data, dict) else None,
            entity="slot",
            entity_id=data.get("slot_id") if isinstance(data, dict) else None,
            metadata={"reason": exc.message},
        )
        raise

    log_event(
        "BOOKING_CREATE",
        actor_email=booking.email,
        entity="booking",
        entity_id=booking.id,
        metadata={"slot_id": booking.slot_id, "guests": booking.guests},
    )
    return jsonify(
        success=True,
        booking=BookingStore(db.session).get_booking(booking.id),
        message="Booking created successfully",
    ), 201


# ---------- CUSTOMERS: booking confirmation ----------
@bookings_bp.get("/<int:booking_id>")
def get_booking(booking_id: int):
    return jsonify(BookingStore(db.session).get_booking(booking_id)), 200
