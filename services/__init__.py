from .errors import (
    BookitError,
    InvalidRequest,
    SlotNotFound,
    ExperienceNotFound,
    BookingNotFound,
    InsufficientCapacity,
    ReservationFailed,
    PromoNotFound,
    SlotConflict,
)
