from .db import db
from .audit_log import AuditLog
from .experience import Experience
from .slot import Slot
from .booking import Booking
