from sqlalchemy import select

from models.booking import Booking
from models.experience import Experience
from models.slot import Slot, TIME_LABEL_FORMAT
from services.errors import BookingNotFound


class BookingStore:
    """Append-only booking log. There is no update or delete path."""

    def __init__(self, session):
        self.session = session

    def append(self, *, experience_id, slot_id, name, email, phone, guests, total_price, promo_code=None) -> Booking:
        booking = Booking(
            experience_id=experience_id,
            slot_id=slot_id,
            name=name,
            email=email,
            phone=phone,
            guests=guests,
            total_price=total_price,
            promo_code=promo_code,
            status="confirmed",
        )
        self.session.add(booking)
        # assign the id inside the reservation transaction
        self.session.flush()
        return booking

    def get_booking(self, booking_id: int) -> dict:
        row = self.session.execute(
            select(Booking, Experience.title, Experience.location, Slot.date, Slot.time)
            .join(Experience, Booking.experience_id == Experience.id)
            .join(Slot, Booking.slot_id == Slot.id)
            .where(Booking.id == booking_id)
        ).first()
        if row is None:
            raise BookingNotFound("Booking not found")

        booking, title, location, slot_date, slot_time = row
        out = booking.to_dict()
        out.update({
            "title": title,
            "location": location,
            "date": slot_date.isoformat(),
            "time": slot_time.strftime(TIME_LABEL_FORMAT),
        })
        return out

    def list_for_slot(self, slot_id: int):
        q = select(Booking).where(Booking.slot_id == slot_id).order_by(Booking.id.asc())
        return list(self.session.execute(q).scalars())
