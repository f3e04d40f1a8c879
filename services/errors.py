class BookitError(Exception):
    """Base class for failures that are reported to the client.

    ``kind`` is the machine-readable name, ``status_code`` the HTTP status the
    API answers with. The message is safe to show to a customer.
    """

    kind = "Error"
    status_code = 400
    audit_action = "BOOKING_FAIL"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_dict(self):
        return {"error": self.message, "kind": self.kind}


class InvalidRequest(BookitError):
    kind = "InvalidRequest"
    status_code = 400
    audit_action = "BOOKING_FAIL_INVALID_REQUEST"


class SlotNotFound(BookitError):
    kind = "SlotNotFound"
    status_code = 404
    audit_action = "BOOKING_FAIL_SLOT_NOT_FOUND"


class ExperienceNotFound(BookitError):
    kind = "ExperienceNotFound"
    status_code = 404
    audit_action = "BOOKING_FAIL_EXPERIENCE_NOT_FOUND"


class BookingNotFound(BookitError):
    kind = "BookingNotFound"
    status_code = 404
    audit_action = "BOOKING_FAIL_BOOKING_NOT_FOUND"


class PromoNotFound(BookitError):
    kind = "PromoNotFound"
    status_code = 404
    audit_action = "BOOKING_FAIL_PROMO_NOT_FOUND"


class InsufficientCapacity(BookitError):
    kind = "InsufficientCapacity"
    status_code = 409
    audit_action = "BOOKING_FAIL_INSUFFICIENT_CAPACITY"


class SlotConflict(BookitError):
    kind = "SlotConflict"
    status_code = 409
    audit_action = "BOOKING_FAIL_SLOT_CONFLICT"


class ReservationFailed(BookitError):
    """Infrastructure failure during the reservation write. Nothing was committed, retry is safe."""

    kind = "ReservationFailed"
    status_code = 503
    audit_action = "BOOKING_FAIL_RESERVATION_FAILED"
