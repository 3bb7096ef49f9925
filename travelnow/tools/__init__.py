from .backend import (
    AdminService,
    AnalyticsService,
    ApiClient,
    ApiError,
    AuthService,
    Backend,
    BookingService,
    HotelService,
    VoucherService,
)
from .dates import add_days, get_todays_date, parse_date

__all__ = [
    "AdminService",
    "AnalyticsService",
    "ApiClient",
    "ApiError",
    "AuthService",
    "Backend",
    "BookingService",
    "HotelService",
    "VoucherService",
    "add_days",
    "get_todays_date",
    "parse_date",
]
