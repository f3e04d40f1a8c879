from datetime import datetime
from models.db import db

class Experience(db.Model):
    __tablename__ = "experiences"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    location = db.Column(db.String(255), nullable=False)

    price = db.Column(db.Numeric(10, 2), nullable=False)  # per guest
    rating = db.Column(db.Numeric(2, 1), nullable=True)
    reviews = db.Column(db.Integer, nullable=True)

    image = db.Column(db.Text, nullable=True)
    description = db.Column(db.Text, nullable=True)
    duration = db.Column(db.String(100), nullable=True)    # e.g. "6 hours"
    group_size = db.Column(db.String(100), nullable=True)  # e.g. "Up to 15 people"

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "location": self.location,
            "price": float(self.price),
            "rating": float(self.rating) if self.rating is not None else None,
            "reviews": self.reviews,
            "image": self.image,
            "description": self.description,
            "duration": self.duration,
            "group_size": self.group_size,
        }
