from .client import ApiClient, ApiError
from .analytics import AnalyticsService
from .auth import AuthService
from .hotels import HotelService
from .bookings import BookingService, normalize_booking
from .vouchers import VoucherService
from .admin import AdminService, split_amenities
from .backend import Backend

__all__ = [
    "ApiClient",
    "ApiError",
    "AnalyticsService",
    "AuthService",
    "HotelService",
    "BookingService",
    "normalize_booking",
    "VoucherService",
    "AdminService",
    "split_amenities",
    "Backend",
]
