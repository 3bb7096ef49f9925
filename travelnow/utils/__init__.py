from .filters import PRICE_RANGES, apply_filters, get_price_range, price_range_text, primary_image
from .pricing import (
    InvalidStayError,
    PricingError,
    adjust_check_out,
    compute_pricing,
    count_nights,
    quote_stay,
)
from .request_log import RequestLogTracker
from .token_store import MemoryTokenStore, TokenStore
from .utils import (
    format_currency,
    format_guests_summary,
    format_hotels,
    format_quote,
    format_room_types,
    print_booking,
)

__all__ = [
    "PRICE_RANGES",
    "apply_filters",
    "get_price_range",
    "price_range_text",
    "primary_image",
    "InvalidStayError",
    "PricingError",
    "adjust_check_out",
    "compute_pricing",
    "count_nights",
    "quote_stay",
    "RequestLogTracker",
    "MemoryTokenStore",
    "TokenStore",
    "format_currency",
    "format_guests_summary",
    "format_hotels",
    "format_quote",
    "format_room_types",
    "print_booking",
]
