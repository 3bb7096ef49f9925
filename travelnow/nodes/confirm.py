import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from travelnow.states import (
    AnalyticsAction,
    Booking,
    BookingHotel,
    BookingRoomType,
    BookingStatus,
    BreakdownLine,
    CheckoutState,
    Contact,
    Guests,
    Payment,
    PaymentMethod,
    PaymentStatus,
    Stay,
    Timings,
)
from travelnow.tools import ApiError, Backend
from travelnow.utils import format_currency, primary_image

from .common import ask, proceed
from .payment import card_digits

logger = logging.getLogger(__name__)


def build_booking_payload(state: CheckoutState, now: Optional[datetime] = None) -> Dict[str, Any]:
    """The POST /bookings body for a fully collected checkout."""
    now = now or datetime.now(timezone.utc)
    hotel = state.hotel
    room_type = state.room_type
    pricing = state.pricing
    method = state.payment_method or PaymentMethod.CARD
    paid_now = method == PaymentMethod.CARD

    booking = Booking(
        status=BookingStatus.CONFIRMED if paid_now else BookingStatus.PENDING,
        voucher_id=state.voucher.id if state.voucher else None,
        hotel=BookingHotel(
            id=hotel.id or state.hotel_id,
            name=hotel.name,
            image=primary_image(hotel),
            rating=hotel.rating,
            address=hotel.address or hotel.city or "",
        ),
        room_type=(
            BookingRoomType(
                id=room_type.id,
                name=room_type.name,
                price_per_night=room_type.price_per_night,
                bed_type=room_type.bed_type,
                max_guests=room_type.max_guests,
            )
            if room_type
            else None
        ),
        stay=Stay(check_in=state.check_in, check_out=state.check_out, nights=pricing.nights),
        timings=Timings(
            check_in=hotel.check_in_time or "14:00",
            check_out=hotel.check_out_time or "12:00",
        ),
        guests=Guests(adults=state.adults, children=state.children, rooms=state.rooms),
        pricing=pricing,
        payment=Payment(
            method=method,
            status=PaymentStatus.PAID if paid_now else PaymentStatus.UNPAID,
            card_last4=card_digits(state.card.number)[-4:] if paid_now else "",
            deadline=now + timedelta(days=1) if method == PaymentMethod.BANK_TRANSFER else None,
            total=pricing.total,
            breakdown=[
                BreakdownLine(label=f"Room rate ({pricing.nights} nights)", value=pricing.base),
                BreakdownLine(label="Service fee 10%", value=pricing.service_fee),
                BreakdownLine(label="Tax 8%", value=pricing.tax),
            ],
        ),
        contact=Contact(
            full_name=state.contact.full_name,
            email=state.contact.email,
            phone=state.contact.phone,
        ),
        special_request=state.special_request or "",
    )
    return booking.to_wire()


def confirm_node(state: CheckoutState, backend: Backend):
    if state.booking is not None:
        return proceed()

    if not state.confirmed:
        return ask(
            "confirm",
            "confirmed",
            f"Book {state.room_type.name if state.room_type else 'a room'} at "
            f"{state.hotel.name} from {state.check_in} to {state.check_out} "
            f"for {format_currency(state.pricing.total)}? (yes/no)",
        )

    try:
        booking = backend.bookings.create(build_booking_payload(state))
    except ApiError as e:
        return ask(
            "confirm",
            "confirmed",
            f"The booking could not be completed: {e.message}. Try again? (yes/no)",
            confirmed=False,
            error=e.message,
        )

    if booking is None:
        return ask(
            "confirm",
            "confirmed",
            "The booking service did not return a booking. Try again? (yes/no)",
            confirmed=False,
        )

    backend.analytics.track(
        AnalyticsAction.BOOK_TRIP, bookingId=booking.id, hotelId=state.hotel_id
    )
    return proceed(booking=booking)
