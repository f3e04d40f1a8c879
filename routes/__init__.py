from .health import health_bp
from .experiences import experiences_bp
from .booking import bookings_bp
from .promo import promo_bp
