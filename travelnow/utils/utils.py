from typing import List, Optional

from travelnow.states import Booking, Guests, Hotel, PricingBreakdown, RoomType

from .filters import format_amount, price_range_text


def format_currency(value: Optional[float]) -> str:
    return f"{format_amount(value or 0)} ₫"


def format_guests_summary(guests: Optional[Guests]) -> str:
    if not guests:
        return ""
    parts = [f"{guests.adults} adult(s)"]
    if guests.children:
        parts.append(f"{guests.children} child(ren)")
    parts.append(f"{guests.rooms or 1} room(s)")
    return ", ".join(parts)


def breakdown_lines(pricing: PricingBreakdown) -> List[tuple]:
    lines = [
        (f"Room rate ({pricing.nights} night(s))", pricing.base),
        ("Service fee 10%", pricing.service_fee),
        ("Tax 8%", pricing.tax),
    ]
    if pricing.discount:
        lines.append(("Voucher discount", -pricing.discount))
    return lines


def format_quote(pricing: PricingBreakdown) -> str:
    lines = [f"   {label:<28}{format_currency(value):>18}" for label, value in breakdown_lines(pricing)]
    lines.append("   " + "-" * 46)
    lines.append(f"   {'Total':<28}{format_currency(pricing.total):>18}")
    return "\n".join(lines)


def format_hotels(hotels: List[Hotel]) -> str:
    """One compact block per hotel for the search results listing."""
    lines = []
    for i, hotel in enumerate(hotels, start=1):
        stars = f" {'★' * hotel.stars}" if hotel.stars else ""
        lines.append(f"#{i} {hotel.name}{stars} (ID: {hotel.id})")
        location = ", ".join(part for part in [hotel.address, hotel.city] if part)
        if location:
            lines.append(f"   📍 {location}")
        if hotel.rating:
            lines.append(f"   ⭐ {hotel.rating:.1f} / 5 ({hotel.review_count or 0} reviews)")
        lines.append(f"   💰 {price_range_text(hotel)}")
        if hotel.amenities:
            lines.append(f"   🛎️  {', '.join(hotel.amenities[:5])}")
    return "\n".join(lines)


def format_room_types(room_types: List[RoomType], nights: int = 1) -> str:
    lines = []
    for i, room_type in enumerate(room_types, start=1):
        status = "✅" if room_type.is_available else "❌"
        counts = ""
        if room_type.total_rooms is not None:
            counts = f" [{room_type.available_rooms or 0}/{room_type.total_rooms} rooms]"
            if room_type.is_available and (room_type.available_rooms or 0) <= 2:
                counts += " only a few left"
        lines.append(
            f"{status} {i}. {room_type.name} (ID: {room_type.id}) "
            f"{format_currency(room_type.price_per_night)}/night, "
            f"{format_currency((room_type.price_per_night or 0) * nights)} for {nights} night(s){counts}"
        )
        details = [
            f"{room_type.max_guests} guests" if room_type.max_guests else None,
            room_type.bed_type,
            f"{room_type.size}m²" if room_type.size else None,
        ]
        details = [detail for detail in details if detail]
        if details:
            lines.append(f"      {' • '.join(details)}")
    return "\n".join(lines)


def print_booking(booking: Booking):
    """Prints the booking detail view"""
    print("\n" + "=" * 60)
    print(f"🧾 BOOKING {booking.id} [{booking.status.value.upper()}]")
    print("=" * 60)
    print(f"🏨 {booking.hotel.name} {booking.hotel.address}".rstrip())
    if booking.room_type:
        print(f"🛏️  {booking.room_type.name}")
    if booking.stay:
        print(
            f"📅 {booking.stay.check_in} ({booking.timings.check_in}) -> "
            f"{booking.stay.check_out} ({booking.timings.check_out}), {booking.stay.nights} night(s)"
        )
    print(f"👥 {format_guests_summary(booking.guests)}")
    print(f"📇 {booking.contact.full_name} • {booking.contact.email} • {booking.contact.phone}")
    print("-" * 30)
    print(format_quote(booking.pricing))
    print("-" * 30)
    payment = booking.payment
    card = f" ending {payment.card_last4}" if payment.card_last4 else ""
    print(f"💳 {payment.method.value}{card}: {payment.status.value}")
    if payment.deadline:
        print(f"⏰ Pay before {payment.deadline:%Y-%m-%d %H:%M}")
    if booking.cancellation:
        reason = (booking.cancellation.reason or "This booking was cancelled").strip()
        if not reason.endswith((".", "!", "?")):
            reason += "."
        print(f"🚫 {reason}")
    print("=" * 60)
