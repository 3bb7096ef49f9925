from datetime import date
from typing import List, Optional

from travelnow.states import AnalyticsAction, Hotel, HotelSearchResult, Review

from .analytics import AnalyticsService
from .client import ApiClient


class HotelService:
    """Public hotel catalogue: search, detail and reviews"""

    def __init__(self, client: ApiClient, analytics: Optional[AnalyticsService] = None):
        self.client = client
        self.analytics = analytics

    def search(
        self,
        destination: Optional[str] = None,
        check_in: Optional[date] = None,
        check_out: Optional[date] = None,
        guests: Optional[int] = None,
    ) -> HotelSearchResult:
        params = {
            "destination": destination.strip() if destination else None,
            "checkIn": check_in.isoformat() if check_in else None,
            "checkOut": check_out.isoformat() if check_out else None,
            "guests": guests,
        }
        data = self.client.get("/hotels/search", params=params)

        if isinstance(data, dict) and isinstance(data.get("hotels"), list):
            hotels = data["hotels"]
        elif isinstance(data, list):
            hotels = data
        else:
            hotels = []

        return HotelSearchResult(
            destination=destination,
            hotels=[Hotel.model_validate(hotel) for hotel in hotels],
        )

    def get(self, hotel_id: str) -> Hotel:
        data = self.client.get(f"/hotels/{hotel_id}")
        if isinstance(data, dict) and isinstance(data.get("hotel"), dict):
            data = data["hotel"]
        hotel = Hotel.model_validate(data)
        if self.analytics:
            self.analytics.track(AnalyticsAction.VIEW_HOTEL, hotelId=hotel_id)
        return hotel

    def reviews(self, hotel_id: str) -> List[Review]:
        data = self.client.get(f"/hotels/{hotel_id}/reviews")
        if isinstance(data, dict):
            data = data.get("reviews", [])
        return [Review.model_validate(review) for review in data or []]
