from datetime import date, time

import pytest
from sqlalchemy.exc import IntegrityError

from models import db
from models.slot import Slot
from services.errors import SlotConflict, SlotNotFound
from services.slot_store import SlotStore
from tests.conftest import SLOT_DAY


def test_list_slots_orders_by_date_then_time(app, experience_id, make_slot):
    later_day = make_slot(on_date=date(2026, 11, 11), at=time(9, 0))
    afternoon = make_slot(at=time(15, 0))
    morning = make_slot(at=time(9, 0))
    noon = make_slot(at=time(12, 0))

    with app.app_context():
        slots = SlotStore(db.session).list_slots(experience_id)
        assert [s.id for s in slots] == [morning, noon, afternoon, later_day]


def test_list_slots_filters_by_date(app, experience_id, make_slot):
    make_slot(on_date=date(2026, 11, 11))
    wanted = make_slot(on_date=SLOT_DAY)

    with app.app_context():
        slots = SlotStore(db.session).list_slots(experience_id, SLOT_DAY)
        assert [s.id for s in slots] == [wanted]


def test_list_slots_empty_is_not_an_error(app, experience_id):
    with app.app_context():
        assert SlotStore(db.session).list_slots(experience_id) == []
        assert SlotStore(db.session).list_slots(999) == []


def test_new_slot_starts_fully_available(app, make_slot):
    slot_id = make_slot(total=12)
    with app.app_context():
        slot = db.session.get(Slot, slot_id)
        assert (slot.total, slot.available) == (12, 12)
        assert slot.to_dict()["time"] == "09:00 AM"


def test_duplicate_slot_is_a_conflict(app, experience_id, make_slot):
    make_slot(at=time(18, 0))
    with app.app_context():
        with pytest.raises(SlotConflict):
            SlotStore(db.session).create_slot(experience_id, SLOT_DAY, time(18, 0), 10)


def test_get_slot_for_update_missing(app):
    with app.app_context():
        with pytest.raises(SlotNotFound):
            SlotStore(db.session).get_slot_for_update(404)
        db.session.rollback()


def test_decrement_under_lock(app, make_slot):
    slot_id = make_slot(total=5)
    with app.app_context():
        store = SlotStore(db.session)
        slot = store.get_slot_for_update(slot_id)
        store.decrement_availability(slot, 2)
        db.session.commit()

    with app.app_context():
        assert db.session.get(Slot, slot_id).available == 3


def test_available_cannot_go_negative_in_the_database(app, make_slot):
    slot_id = make_slot(total=1)
    with app.app_context():
        store = SlotStore(db.session)
        slot = store.get_slot_for_update(slot_id)
        with pytest.raises(IntegrityError):
            store.decrement_availability(slot, 2)
        db.session.rollback()
        assert db.session.get(Slot, slot_id).available == 1
