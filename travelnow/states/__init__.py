from .analytics import AnalyticsAction, AnalyticsEvent, AnalyticsStats
from .booking import (
    Booking,
    BookingHotel,
    BookingRoomType,
    BookingStatus,
    BreakdownLine,
    Cancellation,
    Contact,
    Guests,
    Payment,
    PaymentMethod,
    PaymentStatus,
    PricingBreakdown,
    Stay,
    Timings,
)
from .checkout import CardInfo, CheckoutState
from .hotel import Availability, Hotel, HotelRoom, HotelSearchResult, Review, RoomType
from .user import BACK_OFFICE_ROLES, USER_ADMIN_ROLES, Role, User
from .voucher import Voucher

__all__ = [
    "AnalyticsAction",
    "AnalyticsEvent",
    "AnalyticsStats",
    "Availability",
    "BACK_OFFICE_ROLES",
    "Booking",
    "BookingHotel",
    "BookingRoomType",
    "BookingStatus",
    "BreakdownLine",
    "Cancellation",
    "CardInfo",
    "CheckoutState",
    "Contact",
    "Guests",
    "Hotel",
    "HotelRoom",
    "HotelSearchResult",
    "Payment",
    "PaymentMethod",
    "PaymentStatus",
    "PricingBreakdown",
    "Review",
    "Role",
    "RoomType",
    "Stay",
    "Timings",
    "User",
    "USER_ADMIN_ROLES",
    "Voucher",
]
