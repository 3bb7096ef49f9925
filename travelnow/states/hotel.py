from typing import List, Optional
from pydantic import Field

from .base import WireModel, id_field


class RoomType(WireModel):
    id: Optional[str] = id_field("Unique identifier for the room type")
    name: str = Field("", description="Name of the room type")
    description: Optional[str] = Field(None, description="Room description")
    price_per_night: Optional[float] = Field(
        None, description="Nightly price for one room"
    )
    max_guests: Optional[int] = Field(None, description="Room capacity")
    bed_type: Optional[str] = Field(None, description="Bed configuration")
    size: Optional[str] = Field(None, description="Room size in square meters")
    amenities: List[str] = Field(default_factory=list)
    total_rooms: Optional[int] = Field(None, description="Rooms of this type")
    available_rooms: Optional[int] = Field(
        None, description="Rooms still free for the queried dates"
    )
    available: Optional[bool] = Field(
        None, description="Availability flag from an availability query"
    )

    @property
    def is_available(self) -> bool:
        if self.available is not None:
            return self.available
        return (self.available_rooms or 0) > 0


class HotelRoom(WireModel):
    """Legacy room listing embedded in search results."""

    id: Optional[str] = id_field("Room identifier")
    name: str = ""
    price: Optional[float] = None
    size: Optional[str] = None
    bed_info: Optional[str] = None
    guests: Optional[str] = None
    extras: List[str] = Field(default_factory=list)


class Hotel(WireModel):
    id: Optional[str] = id_field("Unique identifier for the hotel")
    name: str = Field(description="Name of the hotel")
    city: Optional[str] = Field(None, description="City where the hotel is")
    address: Optional[str] = Field(None, description="Street address")
    description: Optional[str] = None
    price_per_night: Optional[float] = Field(
        None, description="Base nightly price of the hotel"
    )
    currency: str = Field("VND", description="Currency code for prices")
    stars: Optional[int] = Field(None, description="Star classification")
    rating: Optional[float] = Field(None, description="Average guest rating /5")
    review_count: Optional[int] = None
    amenities: List[str] = Field(default_factory=list)
    image_url: Optional[str] = None
    image_urls: List[str] = Field(default_factory=list)
    photos: List[str] = Field(default_factory=list)
    room_types: List[RoomType] = Field(default_factory=list)
    rooms: List[HotelRoom] = Field(default_factory=list)
    virtual_tour_url: Optional[str] = None
    check_in_time: Optional[str] = None
    check_out_time: Optional[str] = None

    @property
    def photo_list(self) -> List[str]:
        """Every distinct photo, the main image first."""
        ordered = []
        if self.image_url:
            ordered.append(self.image_url)
        ordered.extend(url for url in self.image_urls if url)
        ordered.extend(url for url in self.photos if url)
        return list(dict.fromkeys(ordered))


class Review(WireModel):
    id: Optional[str] = id_field("Review identifier")
    name: Optional[str] = None
    rating: Optional[float] = None
    comment: Optional[str] = None
    created_at: Optional[str] = None


class Availability(WireModel):
    available: bool = Field(False, description="Whether the request can be served")
    message: Optional[str] = Field(None, description="Server explanation")
    room_types: List[RoomType] = Field(default_factory=list)
    available_rooms: Optional[int] = None
    total_rooms: Optional[int] = None


class HotelSearchResult(WireModel):
    destination: Optional[str] = Field(None, description="Searched destination")
    hotels: List[Hotel] = Field(description="Hotels returned by the search")
