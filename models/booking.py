from datetime import datetime
from models.db import db

class Booking(db.Model):
    __tablename__ = "bookings"

    id = db.Column(db.Integer, primary_key=True)

    experience_id = db.Column(db.Integer, db.ForeignKey("experiences.id"), nullable=False, index=True)
    slot_id = db.Column(db.Integer, db.ForeignKey("slots.id"), nullable=False, index=True)

    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(50), nullable=True)

    guests = db.Column(db.Integer, nullable=False)
    total_price = db.Column(db.Numeric(10, 2), nullable=False)  # recomputed server-side
    promo_code = db.Column(db.String(50), nullable=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)
    status = db.Column(db.String(50), nullable=False, default="confirmed")

    __table_args__ = (
        db.CheckConstraint("guests >= 1", name="ck_booking_guests_positive"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "experience_id": self.experience_id,
            "slot_id": self.slot_id,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "guests": self.guests,
            "total_price": float(self.total_price),
            "promo_code": self.promo_code,
            "booking_date": self.created_at.isoformat(),
            "status": self.status,
        }
