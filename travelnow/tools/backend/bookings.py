import logging
from datetime import date
from typing import Any, Dict, List, Optional

from travelnow.states import Availability, Booking

from .client import ApiClient

logger = logging.getLogger(__name__)


def normalize_booking(data: Any) -> Optional[Booking]:
    """Turn a raw booking document into a Booking, None for anything else."""
    if not isinstance(data, dict):
        return None
    document = {key: value for key, value in data.items() if key != "__v"}
    return Booking.model_validate(document)


class BookingService:
    """The current user's bookings and room availability"""

    def __init__(self, client: ApiClient):
        self.client = client

    def list(self) -> List[Booking]:
        data = self.client.get("/bookings") or {}
        items = data.get("bookings") if isinstance(data, dict) else None
        if not isinstance(items, list):
            return []
        bookings = [normalize_booking(item) for item in items]
        return [booking for booking in bookings if booking]

    def get(self, booking_id: str) -> Optional[Booking]:
        data = self.client.get(f"/bookings/{booking_id}") or {}
        return normalize_booking(data.get("booking"))

    def create(self, payload: Dict[str, Any]) -> Optional[Booking]:
        data = self.client.post("/bookings", payload) or {}
        booking = normalize_booking(data.get("booking"))
        if booking:
            logger.info("Booking %s created (%s)", booking.id, booking.status.value)
        return booking

    def cancel(self, booking_id: str, reason: str = "") -> Optional[Booking]:
        data = self.client.post(f"/bookings/{booking_id}/cancel", {"reason": reason}) or {}
        booking = normalize_booking(data.get("booking"))
        logger.info("Booking %s cancelled", booking_id)
        return booking

    def check_availability(
        self,
        hotel_id: str,
        check_in: date,
        check_out: date,
        room_type_id: Optional[str] = None,
    ) -> Availability:
        """
        Ask the backend which room types are free for the dates.

        With a room type the answer is about that type only, and its
        available/total counts are copied onto the result.
        """
        params = {
            "hotelId": hotel_id,
            "checkIn": check_in.isoformat(),
            "checkOut": check_out.isoformat(),
            "roomTypeId": room_type_id,
        }
        data = self.client.get("/bookings/check-availability", params=params) or {}
        availability = Availability.model_validate(data)

        if room_type_id:
            match = next(
                (rt for rt in availability.room_types if rt.id == room_type_id), None
            )
            if match is not None:
                if availability.available_rooms is None:
                    availability.available_rooms = match.available_rooms
                if availability.total_rooms is None:
                    availability.total_rooms = match.total_rooms
                if "available" not in data:
                    availability.available = match.is_available
        elif "available" not in data:
            availability.available = any(rt.is_available for rt in availability.room_types)

        return availability
