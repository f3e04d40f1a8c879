"""
Reservation engine: the only writer of bookings.

A reservation locks the slot row, checks remaining capacity, appends the
booking and decrements availability inside one transaction. Competing
reservations for the same slot queue on the lock, so there is no retry loop.
"""
import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Optional

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from models import db
from models.booking import Booking
from services.booking_store import BookingStore
from services.catalog import CatalogService
from services.errors import BookitError, InsufficientCapacity, InvalidRequest, ReservationFailed, SlotNotFound
from services.slot_store import SlotStore
from utils.pricing import compute_total
from utils.promo import lookup_promo

logger = logging.getLogger(__name__)

# largest value a BIGINT primary key column can hold
MAX_ID = 2 ** 63 - 1

REQUIRED_FIELDS = ("experience_id", "slot_id", "name", "email", "guests", "total_price")


@dataclass(frozen=True)
class ReservationRequest:
    experience_id: int
    slot_id: int
    name: str
    email: str
    phone: Optional[str]
    guests: int
    total_price: Decimal
    promo_code: Optional[str] = None


def parse_positive_int(data: dict, field: str) -> int:
    value = data.get(field)
    # bool is an int subclass; True must not pass as 1
    if isinstance(value, bool):
        raise InvalidRequest(f"{field} must be an integer")
    try:
        number = int(value)
    except (TypeError, ValueError, OverflowError):
        raise InvalidRequest(f"{field} must be an integer")
    if isinstance(value, float) and value != number:
        raise InvalidRequest(f"{field} must be an integer")
    if number < 1:
        raise InvalidRequest(f"{field} must be at least 1")
    if number > MAX_ID:
        raise InvalidRequest(f"{field} is too large")
    return number


def parse_request(data: dict, max_guests: Optional[int] = None) -> ReservationRequest:
    """Validate a raw payload. Raises InvalidRequest without touching the database."""
    if not isinstance(data, dict):
        raise InvalidRequest("Request body must be a JSON object")

    missing = [f for f in REQUIRED_FIELDS if data.get(f) is None or (isinstance(data.get(f), str) and not data.get(f).strip())]
    if missing:
        raise InvalidRequest("Missing required fields: " + ", ".join(missing))

    experience_id = parse_positive_int(data, "experience_id")
    slot_id = parse_positive_int(data, "slot_id")
    guests = parse_positive_int(data, "guests")
    if max_guests and guests > max_guests:
        raise InvalidRequest(f"At most {max_guests} guests per booking")

    name = str(data["name"]).strip()
    email = str(data["email"]).strip().lower()
    if "@" not in email or email.startswith("@") or email.endswith("@"):
        raise InvalidRequest("email is not valid")

    if isinstance(data["total_price"], bool):
        raise InvalidRequest("total_price must be a number")
    try:
        total_price = Decimal(str(data["total_price"]))
    except InvalidOperation:
        raise InvalidRequest("total_price must be a number")
    if not total_price.is_finite() or total_price < 0:
        raise InvalidRequest("total_price must be a non-negative number")

    phone = (str(data.get("phone") or "")).strip() or None
    promo_code = (str(data.get("promo_code") or "")).strip() or None

    return ReservationRequest(
        experience_id=experience_id,
        slot_id=slot_id,
        name=name,
        email=email,
        phone=phone,
        guests=guests,
        total_price=total_price,
        promo_code=promo_code,
    )


class ReservationEngine:
    def __init__(self, session, max_guests=None, lock_timeout_seconds=None):
        self.session = session
        self.max_guests = max_guests
        self.slots = SlotStore(session, lock_timeout_seconds=lock_timeout_seconds)
        self.bookings = BookingStore(session)
        self.catalog = CatalogService(session)

    def reserve(self, data: dict) -> Booking:
        req = parse_request(data, max_guests=self.max_guests)

        try:
            slot = self.slots.get_slot_for_update(req.slot_id)
            if slot.experience_id != req.experience_id:
                raise SlotNotFound("Slot not found for this experience")

            if slot.available < req.guests:
                raise InsufficientCapacity(
                    f"Not enough seats available: requested {req.guests}, {slot.available} left"
                )

            experience = self.catalog.get_experience(req.experience_id)
            promo = lookup_promo(req.promo_code) if req.promo_code else None
            if req.promo_code and promo is None:
                logger.info("Ignoring unknown promo code %r for slot %s", req.promo_code, req.slot_id)

            total = compute_total(experience.price, req.guests, promo)
            if total != req.total_price:
                logger.warning(
                    "Client total %s differs from computed total %s for slot %s; storing computed total",
                    req.total_price, total, req.slot_id,
                )

            booking = self.bookings.append(
                experience_id=req.experience_id,
                slot_id=req.slot_id,
                name=req.name,
                email=req.email,
                phone=req.phone,
                guests=req.guests,
                total_price=total,
                promo_code=promo.code if promo else None,
            )
            self.slots.decrement_availability(slot, req.guests)
            booking_id, remaining = booking.id, slot.available
            self.session.commit()
        except BookitError:
            self.session.rollback()
            raise
        except SQLAlchemyError as exc:
            self.session.rollback()
            logger.exception("Reservation on slot %s rolled back", req.slot_id)
            raise ReservationFailed("Could not complete the reservation, please retry") from exc

        logger.info(
            "Booking %s confirmed: slot %s, %s guest(s), %s remaining",
            booking_id, req.slot_id, req.guests, remaining,
        )
        return booking


def reserve(data: dict) -> Booking:
    """Reserve against the application's database session using its configured limits."""
    engine = ReservationEngine(
        db.session,
        max_guests=current_app.config.get("MAX_GUESTS_PER_BOOKING"),
        lock_timeout_seconds=current_app.config.get("SLOT_LOCK_TIMEOUT_SECONDS"),
    )
    return engine.reserve(data)
