from typing import Any, Dict, List, Optional

from pydantic.alias_generators import to_camel

from travelnow.states import Booking, BookingStatus, Hotel, Role, User, Voucher

from .bookings import normalize_booking
from .client import ApiClient


def camelize(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {to_camel(key): value for key, value in fields.items() if value is not None}


def split_amenities(raw: str) -> List[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


class AdminService:
    """Back-office management of hotels, users, vouchers and bookings"""

    def __init__(self, client: ApiClient):
        self.client = client

    # Hotels

    def list_hotels(self) -> List[Hotel]:
        data = self.client.get("/admin/hotels") or {}
        return [Hotel.model_validate(hotel) for hotel in data.get("hotels", [])]

    def get_hotel(self, hotel_id: str) -> Hotel:
        data = self.client.get(f"/admin/hotels/{hotel_id}") or {}
        return Hotel.model_validate(data.get("hotel", data))

    def create_hotel(
        self,
        name: str,
        city: str,
        price_per_night: float,
        address: str = "",
        description: str = "",
        amenities: Optional[List[str]] = None,
        image_data_urls: Optional[List[str]] = None,
    ) -> Any:
        payload = {
            "name": name,
            "city": city,
            "address": address,
            "description": description,
            "pricePerNight": float(price_per_night or 0),
            "amenities": amenities or [],
            "imageDataUrls": image_data_urls or [],
        }
        return self.client.post("/admin/hotels", payload)

    def update_hotel(self, hotel_id: str, **fields: Any) -> Any:
        return self.client.put(f"/admin/hotels/{hotel_id}", camelize(fields))

    def delete_hotel(self, hotel_id: str) -> Any:
        return self.client.delete(f"/admin/hotels/{hotel_id}")

    def adjust_price(self, hotel: Hotel, delta: float) -> Optional[float]:
        """Quick price nudge. Returns the new price, None if it would drop to zero."""
        new_price = (hotel.price_per_night or 0) + delta
        if new_price <= 0:
            return None
        self.client.put(f"/admin/hotels/{hotel.id}", {"pricePerNight": new_price})
        return new_price

    # Users

    def list_users(self) -> List[User]:
        data = self.client.get("/admin/users") or {}
        return [User.model_validate(user) for user in data.get("users", [])]

    def create_user(self, full_name: str, email: str, password: str, role: Role = Role.USER) -> Any:
        return self.client.post(
            "/admin/users",
            {
                "fullName": full_name,
                "email": email,
                "password": password,
                "role": Role(role).value,
            },
        )

    def update_user(self, user_id: str, **fields: Any) -> Any:
        if "role" in fields and fields["role"] is not None:
            fields["role"] = Role(fields["role"]).value
        return self.client.put(f"/admin/users/{user_id}", camelize(fields))

    def promote_user(self, user_id: str) -> Any:
        return self.update_user(user_id, role=Role.ADMIN)

    def set_user_active(self, user_id: str, is_active: bool) -> Any:
        return self.update_user(user_id, is_active=is_active)

    def delete_user(self, user_id: str) -> Any:
        return self.client.delete(f"/admin/users/{user_id}")

    # Vouchers

    def list_vouchers(self) -> List[Voucher]:
        data = self.client.get("/admin/vouchers")
        if isinstance(data, dict):
            data = data.get("vouchers", [])
        return [Voucher.model_validate(voucher) for voucher in data or []]

    def create_voucher(self, code: str, discount_percentage: float, description: str = "") -> Any:
        voucher = Voucher(
            code=code.strip().upper(),
            discount_percentage=discount_percentage,
            description=description,
        )
        return self.client.post(
            "/admin/vouchers",
            voucher.model_dump(by_alias=True, include={"code", "discount_percentage", "description"}),
        )

    def update_voucher(self, voucher_id: str, **fields: Any) -> Any:
        return self.client.put(f"/admin/vouchers/{voucher_id}", camelize(fields))

    def delete_voucher(self, voucher_id: str) -> Any:
        return self.client.delete(f"/admin/vouchers/{voucher_id}")

    # Bookings

    def list_bookings(self, status: Optional[BookingStatus] = None) -> List[Booking]:
        params = {"status": BookingStatus(status).value} if status else None
        data = self.client.get("/admin/bookings", params=params) or {}
        bookings = [normalize_booking(item) for item in data.get("bookings", [])]
        return [booking for booking in bookings if booking]

    def update_booking_status(self, booking_id: str, status: BookingStatus) -> Optional[Booking]:
        data = self.client.put(
            f"/admin/bookings/{booking_id}", {"status": BookingStatus(status).value}
        ) or {}
        return normalize_booking(data.get("booking"))
