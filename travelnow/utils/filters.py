import math
from dataclasses import dataclass
from typing import Iterable, List, Optional

from travelnow.states import Hotel


@dataclass(frozen=True)
class PriceRange:
    id: str
    label: str
    min: float
    max: float

    def contains(self, price: float) -> bool:
        return self.min <= price < self.max


PRICE_RANGES = [
    PriceRange("all", "All prices", 0, math.inf),
    PriceRange("under-1m", "Under 1 million", 0, 1_000_000),
    PriceRange("1m-3m", "1 - 3 million", 1_000_000, 3_000_000),
    PriceRange("3m-5m", "3 - 5 million", 3_000_000, 5_000_000),
    PriceRange("above-5m", "Above 5 million", 5_000_000, math.inf),
]


def get_price_range(range_id: str) -> PriceRange:
    for price_range in PRICE_RANGES:
        if price_range.id == range_id:
            return price_range
    raise ValueError(f"Unknown price range: {range_id}")


def room_prices(hotel: Hotel) -> List[float]:
    prices = [room.price for room in hotel.rooms if room.price and room.price > 0]
    prices += [
        room_type.price_per_night
        for room_type in hotel.room_types
        if room_type.price_per_night and room_type.price_per_night > 0
    ]
    return prices


def min_price(hotel: Hotel) -> Optional[float]:
    prices = room_prices(hotel)
    if prices:
        return min(prices)
    return hotel.price_per_night


def hotel_stars(hotel: Hotel) -> int:
    if hotel.stars:
        return hotel.stars
    return math.floor((hotel.rating or 0) + 0.5)


def apply_filters(
    hotels: Iterable[Hotel],
    star: Optional[int] = None,
    amenities: Optional[List[str]] = None,
    price_range: Optional[PriceRange] = None,
) -> List[Hotel]:
    """Narrow a search result list the way the results sidebar does."""
    result = list(hotels)

    if star:
        result = [hotel for hotel in result if hotel_stars(hotel) == star]

    if amenities:
        result = [
            hotel
            for hotel in result
            if all(amenity in hotel.amenities for amenity in amenities)
        ]

    if price_range and price_range.id != "all":
        filtered = []
        for hotel in result:
            price = min_price(hotel)
            if price is not None and price_range.contains(price):
                filtered.append(hotel)
        result = filtered

    return result


def format_amount(value: float) -> str:
    # Vietnamese grouping uses dots.
    return f"{value:,.0f}".replace(",", ".")


def price_range_text(hotel: Hotel) -> str:
    prices = room_prices(hotel)
    if prices:
        low, high = min(prices), max(prices)
    elif hotel.price_per_night is not None:
        low = high = hotel.price_per_night
    else:
        return "—"

    if low == high:
        return f"{format_amount(low)} đ"
    return f"{format_amount(low)} - {format_amount(high)} đ"


def primary_image(hotel: Hotel) -> Optional[str]:
    for url in hotel.image_urls:
        if url:
            return url
    for url in hotel.photos:
        if url:
            return url
    return hotel.image_url
