import logging
from datetime import date
from typing import Any, Dict, List, Optional

from travelnow.states import BACK_OFFICE_ROLES, Booking, BookingStatus, Role, User
from travelnow.tools import ApiError, Backend, get_todays_date

logger = logging.getLogger(__name__)


class AuthRequiredError(Exception):
    """The action needs a logged-in user, or a user with another role."""


def categorize(booking: Booking, today: Optional[date] = None) -> str:
    """cancelled, scheduled (stay already over) or current."""
    if booking.status == BookingStatus.CANCELLED:
        return "cancelled"
    today = today or get_todays_date()
    if booking.stay and booking.stay.check_out < today:
        return "scheduled"
    return "current"


def _sort_key(booking: Booking) -> str:
    if booking.created_at:
        return booking.created_at.isoformat()
    if booking.stay:
        return booking.stay.check_in.isoformat()
    return ""


class Session:
    """
    Everything one user of the client owns: the logged-in user and a cache of
    their bookings. Pass it explicitly to whatever needs it.
    """

    def __init__(self, backend: Backend):
        self.backend = backend
        self.user: Optional[User] = None
        self.bookings: List[Booking] = []

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def restore(self) -> Optional[User]:
        """Resume from a stored token. A rejected token is discarded."""
        if not self.backend.client.token:
            return None
        try:
            self.user = self.backend.auth.me()
        except ApiError as e:
            logger.warning("Stored session is no longer valid: %s", e)
            self.backend.auth.logout()
            self.user = None
        return self.user

    def login(self, email: str, password: str) -> Optional[User]:
        self.user = self.backend.auth.login(email, password)
        self.bookings = []
        return self.user

    def logout(self):
        self.backend.auth.logout()
        self.user = None
        self.bookings = []

    def require_user(self) -> User:
        if not self.user:
            raise AuthRequiredError("Please log in first")
        return self.user

    def require_role(self, *roles: Role) -> User:
        user = self.require_user()
        allowed = roles or BACK_OFFICE_ROLES
        if user.role not in allowed:
            raise AuthRequiredError(
                f"This action needs one of the roles: {', '.join(r.value for r in allowed)}"
            )
        return user

    # Bookings cache

    def refresh_bookings(self) -> List[Booking]:
        if not self.user:
            self.bookings = []
            return self.bookings
        self.bookings = self.backend.bookings.list()
        return self.bookings

    def add_booking(self, payload: Dict[str, Any]) -> Optional[Booking]:
        created = self.backend.bookings.create(payload)
        if created:
            self.bookings.insert(0, created)
        return created

    def remember(self, booking: Booking):
        for i, item in enumerate(self.bookings):
            if item.id == booking.id:
                self.bookings[i] = booking
                return
        self.bookings.insert(0, booking)

    def get_booking(self, booking_id: str) -> Optional[Booking]:
        return next((item for item in self.bookings if item.id == booking_id), None)

    def fetch_booking(self, booking_id: str) -> Optional[Booking]:
        if not booking_id:
            return None
        booking = self.backend.bookings.get(booking_id)
        if booking:
            self.remember(booking)
        return booking

    def cancel_booking(self, booking_id: str, reason: str = "") -> Optional[Booking]:
        if not booking_id:
            return None
        updated = self.backend.bookings.cancel(booking_id, reason[:200])
        if not updated:
            return None
        current = self.get_booking(updated.id or booking_id)
        if current:
            merged = {**current.model_dump(), **updated.model_dump(exclude_unset=True)}
            updated = Booking.model_validate(merged)
        self.remember(updated)
        return updated

    def grouped_bookings(self, today: Optional[date] = None) -> Dict[str, List[Booking]]:
        groups: Dict[str, List[Booking]] = {"current": [], "scheduled": [], "cancelled": []}
        for booking in sorted(self.bookings, key=_sort_key, reverse=True):
            groups[categorize(booking, today)].append(booking)
        return groups
