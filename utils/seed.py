import logging
from datetime import date, datetime, time, timedelta
from decimal import Decimal

from models import db
from models.experience import Experience
from services.slot_store import SlotStore

logger = logging.getLogger(__name__)

SAMPLE_EXPERIENCES = [
    {
        "title": "Sunset Desert Safari",
        "location": "Dubai, UAE",
        "price": Decimal("149"),
        "rating": Decimal("4.8"),
        "reviews": 324,
        "image": "https://images.unsplash.com/photo-1451337516015-6b6e9a44a8a3?w=800",
        "description": "Experience the thrill of dune bashing and traditional Bedouin camp",
        "duration": "6 hours",
        "group_size": "Up to 15 people",
    },
    {
        "title": "Northern Lights Tour",
        "location": "Reykjavik, Iceland",
        "price": Decimal("299"),
        "rating": Decimal("4.9"),
        "reviews": 512,
        "image": "https://images.unsplash.com/photo-1579033461380-adb47c3eb938?w=800",
        "description": "Chase the magical Aurora Borealis in the Icelandic wilderness",
        "duration": "8 hours",
        "group_size": "Up to 12 people",
    },
    {
        "title": "Bali Temple & Rice Terraces",
        "location": "Ubud, Bali",
        "price": Decimal("89"),
        "rating": Decimal("4.7"),
        "reviews": 287,
        "image": "https://images.unsplash.com/photo-1537996194471-e657df975ab4?w=800",
        "description": "Discover ancient temples and stunning rice paddies",
        "duration": "5 hours",
        "group_size": "Up to 20 people",
    },
    {
        "title": "Swiss Alps Hiking",
        "location": "Interlaken, Switzerland",
        "price": Decimal("199"),
        "rating": Decimal("4.9"),
        "reviews": 445,
        "image": "https://images.unsplash.com/photo-1531366936337-7c912a4589a7?w=800",
        "description": "Hike through pristine Alpine landscapes with expert guides",
        "duration": "7 hours",
        "group_size": "Up to 10 people",
    },
]

SAMPLE_TIMES = [time(9, 0), time(12, 0), time(15, 0), time(18, 0)]
SAMPLE_DAYS = 3
SLOT_CAPACITY = 15


def seed_sample_data(start: date = None) -> bool:
    """
    Insert sample experiences and slots if the catalog is empty.
    Returns True when data was inserted. Safe to call on every startup.
    """
    if Experience.query.first() is not None:
        return False

    start = start or (datetime.utcnow().date() + timedelta(days=1))
    store = SlotStore(db.session)

    for fields in SAMPLE_EXPERIENCES:
        experience = Experience(**fields)
        db.session.add(experience)
        db.session.flush()
        for offset in range(SAMPLE_DAYS):
            for at in SAMPLE_TIMES:
                # every seat starts free: no bookings exist yet
                store.create_slot(experience.id, start + timedelta(days=offset), at, SLOT_CAPACITY)

    db.session.commit()
    logger.info(
        "Seeded %d experiences with %d slots each",
        len(SAMPLE_EXPERIENCES), SAMPLE_DAYS * len(SAMPLE_TIMES),
    )
    return True
