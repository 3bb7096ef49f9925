from .admin import AdminService
from .analytics import AnalyticsService
from .auth import AuthService
from .bookings import BookingService
from .client import ApiClient
from .hotels import HotelService
from .vouchers import VoucherService


class Backend:
    """All backend services sharing one ApiClient (and so one token)."""

    def __init__(self, client: ApiClient):
        self.client = client
        self.analytics = AnalyticsService(client)
        self.auth = AuthService(client, analytics=self.analytics)
        self.hotels = HotelService(client, analytics=self.analytics)
        self.bookings = BookingService(client)
        self.vouchers = VoucherService(client)
        self.admin = AdminService(client)
