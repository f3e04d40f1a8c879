from models.db import db

TIME_LABEL_FORMAT = "%I:%M %p"

class Slot(db.Model):
    __tablename__ = "slots"

    id = db.Column(db.Integer, primary_key=True)

    experience_id = db.Column(db.Integer, db.ForeignKey("experiences.id"), nullable=False, index=True)
    date = db.Column(db.Date, nullable=False, index=True)
    time = db.Column(db.Time, nullable=False)

    total = db.Column(db.Integer, nullable=False)      # fixed at creation
    available = db.Column(db.Integer, nullable=False)  # only ever decremented by reservations

    __table_args__ = (
        # One slot per experience, day and start time
        db.UniqueConstraint("experience_id", "date", "time", name="uq_experience_slot"),
        db.CheckConstraint("available >= 0 AND available <= total", name="ck_slot_available_range"),
    )

    @property
    def time_label(self) -> str:
        return self.time.strftime(TIME_LABEL_FORMAT)

    def to_dict(self):
        return {
            "id": self.id,
            "experience_id": self.experience_id,
            "date": self.date.isoformat(),
            "time": self.time_label,
            "available": self.available,
            "total": self.total,
        }
