from datetime import date, time
from decimal import Decimal

import pytest

from app import create_app
from config import Config
from models import db
from models.experience import Experience
from services.slot_store import SlotStore

SLOT_DAY = date(2026, 11, 10)


def build_app(db_path, **overrides):
    class TestConfig(Config):
        TESTING = True
        # a file, not :memory:, so threads get their own connections to one database
        SQLALCHEMY_DATABASE_URI = "sqlite:///" + str(db_path)
        SQLALCHEMY_ENGINE_OPTIONS = {"connect_args": {"check_same_thread": False}}
        SQLALCHEMY_ECHO = False
        SEED_SAMPLE_DATA = False
        MAX_GUESTS_PER_BOOKING = 10
        SLOT_LOCK_TIMEOUT_SECONDS = 30
        LOG_LEVEL = "WARNING"

    for key, value in overrides.items():
        setattr(TestConfig, key, value)
    return create_app(TestConfig)


@pytest.fixture
def app(tmp_path):
    app = build_app(tmp_path / "bookit-test.db")
    with app.app_context():
        db.create_all()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def experience_id(app):
    with app.app_context():
        experience = Experience(
            title="Harbour Kayak Tour",
            location="Sydney, Australia",
            price=Decimal("100.00"),
            rating=Decimal("4.6"),
            reviews=120,
            description="Paddle under the bridge at sunrise",
            duration="3 hours",
            group_size="Up to 15 people",
        )
        db.session.add(experience)
        db.session.commit()
        return experience.id


@pytest.fixture
def make_slot(app, experience_id):
    def _make(total=15, on_date=SLOT_DAY, at=time(9, 0), for_experience=None):
        with app.app_context():
            slot = SlotStore(db.session).create_slot(for_experience or experience_id, on_date, at, total)
            db.session.commit()
            return slot.id
    return _make


def booking_payload(experience_id, slot_id, **overrides):
    payload = {
        "experience_id": experience_id,
        "slot_id": slot_id,
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "phone": "+44 20 7946 0000",
        "guests": 1,
        "total_price": 100,
    }
    payload.update(overrides)
    return payload
