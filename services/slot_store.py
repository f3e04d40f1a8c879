from datetime import date as date_type, time as time_type

from sqlalchemy import select, text, update
from sqlalchemy.exc import IntegrityError

from models.slot import Slot
from services.errors import SlotConflict, SlotNotFound


class SlotStore:
    """Slot inventory bound to a caller-supplied session.

    The session is the transaction handle: a lock taken by
    ``get_slot_for_update`` lasts until that session commits or rolls back.
    """

    def __init__(self, session, lock_timeout_seconds=None):
        self.session = session
        self.lock_timeout_seconds = lock_timeout_seconds

    @property
    def dialect(self) -> str:
        return self.session.get_bind().dialect.name

    def list_slots(self, experience_id: int, on_date: date_type = None):
        q = select(Slot).where(Slot.experience_id == experience_id)
        if on_date is not None:
            q = q.where(Slot.date == on_date)
        q = q.order_by(Slot.date.asc(), Slot.time.asc())
        return list(self.session.execute(q).scalars())

    def get_slot_for_update(self, slot_id: int) -> Slot:
        if self.dialect == "sqlite":
            # No row locks in SQLite: a write on the row takes the database
            # write lock, which is held until the transaction ends.
            self.session.execute(
                update(Slot)
                .where(Slot.id == slot_id)
                .values(available=Slot.available)
                .execution_options(synchronize_session=False)
            )
        elif self.dialect == "postgresql" and self.lock_timeout_seconds:
            timeout_ms = int(self.lock_timeout_seconds * 1000)
            self.session.execute(text(f"SET LOCAL lock_timeout = '{timeout_ms}ms'"))

        slot = self.session.execute(
            select(Slot)
            .where(Slot.id == slot_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()
        if slot is None:
            raise SlotNotFound("Slot not found")
        return slot

    def decrement_availability(self, slot: Slot, amount: int) -> Slot:
        # caller holds the lock and has checked slot.available >= amount
        slot.available = slot.available - amount
        self.session.flush()
        return slot

    def create_slot(self, experience_id: int, on_date: date_type, at_time: time_type, total: int) -> Slot:
        if total < 0:
            raise ValueError("total must be >= 0")
        slot = Slot(experience_id=experience_id, date=on_date, time=at_time, total=total, available=total)
        self.session.add(slot)
        try:
            self.session.flush()
        except IntegrityError:
            self.session.rollback()
            raise SlotConflict("Slot already exists for that experience, date and time")
        return slot
