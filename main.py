import getpass
import logging
import os
import shlex
import uuid

from dotenv import load_dotenv

from travelnow.graph import answer, create_checkout_graph, run_checkout
from travelnow.session import AuthRequiredError, Session
from travelnow.states import USER_ADMIN_ROLES, BookingStatus, CheckoutState, Contact
from travelnow.tools import ApiClient, ApiError, Backend, add_days, get_todays_date, parse_date
from travelnow.tools.backend import split_amenities
from travelnow.utils import (
    PricingError,
    RequestLogTracker,
    TokenStore,
    adjust_check_out,
    apply_filters,
    compute_pricing,
    count_nights,
    format_currency,
    format_hotels,
    format_quote,
    format_room_types,
    get_price_range,
    print_booking,
)

load_dotenv()

API_URL = os.getenv("TRAVELNOW_API_URL", "http://localhost:5000")
TOKEN_FILE = os.getenv("TRAVELNOW_TOKEN_FILE", "~/.travelnow/token.json")
TIMEOUT = float(os.getenv("TRAVELNOW_TIMEOUT", "30"))
REQUEST_LOG = os.getenv("TRAVELNOW_REQUEST_LOG")

HELP = """
Commands:
  search <destination> [checkin=YYYY-MM-DD] [checkout=YYYY-MM-DD] [guests=N]
         [stars=N] [amenity=NAME ...] [price=all|under-1m|1m-3m|3m-5m|above-5m]
  hotel <id> [checkin=...] [checkout=...]     hotel detail with room availability
  quote <nightly> <nights> [voucher%]         price a stay
  book <hotel_id> [checkin=...] [checkout=...] [room=ID] [adults=N] [children=N]
       [rooms=N] [voucher=ID]                 checkout
  bookings [refresh] | booking <id> | cancel <id> [reason]
  vouchers | claim <id>
  login <email> | register | logout | me | forgot <email>
  stats | admin hotels|users|bookings|vouchers | admin price <hotel_id> <delta>
  admin create-hotel <name> city=CITY price=N [address=...] [amenities=a,b]
  admin status <booking_id> <status>
  help | quit
"""


def parse_args(tokens):
    """Split `key=value` options from positional words. Repeated keys collect into lists."""
    positional, options = [], {}
    for token in tokens:
        if "=" in token:
            key, value = token.split("=", 1)
            options.setdefault(key.lower(), []).append(value)
        else:
            positional.append(token)
    return positional, options


def option(options, key, default=None):
    values = options.get(key)
    return values[-1] if values else default


def stay_dates(options):
    check_in = parse_date(option(options, "checkin")) or get_todays_date()
    check_out = parse_date(option(options, "checkout"))
    if check_out is None:
        check_out = add_days(check_in, 1)
    return check_in, check_out


def cmd_search(session: Session, args):
    positional, options = parse_args(args)
    destination = " ".join(positional)
    check_in = parse_date(option(options, "checkin"))
    check_out = parse_date(option(options, "checkout"))
    if check_in and check_out:
        count_nights(check_in, check_out)
    guests = option(options, "guests")

    print(f"\n🔎 Searching hotels{' in ' + destination if destination else ''}...")
    result = session.backend.hotels.search(
        destination, check_in, check_out, int(guests) if guests else None
    )
    stars = option(options, "stars")
    hotels = apply_filters(
        result.hotels,
        star=int(stars) if stars else None,
        amenities=options.get("amenity"),
        price_range=get_price_range(option(options, "price", "all")),
    )
    if not hotels:
        print("   No hotels match your search.")
        return
    print(f"   {len(hotels)} of {len(result.hotels)} hotel(s)\n")
    print(format_hotels(hotels))


def cmd_hotel(session: Session, args):
    positional, options = parse_args(args)
    if not positional:
        print("Usage: hotel <id>")
        return
    hotel_id = positional[0]
    check_in, check_out = stay_dates(options)
    nights = count_nights(check_in, check_out)

    hotel = session.backend.hotels.get(hotel_id)
    print(f"\n🏨 {hotel.name}" + (f" {'★' * hotel.stars}" if hotel.stars else ""))
    if hotel.address or hotel.city:
        print(f"   📍 {hotel.address or hotel.city}")
    if hotel.rating:
        print(f"   ⭐ {hotel.rating:.1f} / 5")
    if hotel.description:
        print(f"   {hotel.description}")
    if hotel.amenities:
        print(f"   🛎️  {', '.join(hotel.amenities)}")
    if hotel.virtual_tour_url:
        print(f"   🎥 Virtual tour: {hotel.virtual_tour_url}")
    print(f"   📷 {len(hotel.photo_list)} photo(s)")

    availability = session.backend.bookings.check_availability(hotel.id or hotel_id, check_in, check_out)
    print(f"\n📅 {check_in} -> {check_out} ({nights} night(s))")
    if availability.room_types:
        print(format_room_types(availability.room_types, nights))
    else:
        print(f"   Base price {format_currency(hotel.price_per_night)}/night")

    reviews = session.backend.hotels.reviews(hotel.id or hotel_id)
    if reviews:
        print(f"\n💬 Reviews ({len(reviews)})")
        for review in reviews[:3]:
            print(f"   ⭐ {review.rating or '-'} {review.name or 'Guest'}: {review.comment or ''}".rstrip())


def cmd_quote(session: Session, args):
    if len(args) < 2:
        print("Usage: quote <nightly> <nights> [voucher%]")
        return
    voucher = float(args[2]) if len(args) > 2 else None
    pricing = compute_pricing(float(args[0]), int(args[1]), voucher)
    print()
    print(format_quote(pricing))


def pick_voucher(session: Session, voucher_id):
    if not voucher_id:
        return None
    claimed = {voucher.id: voucher for voucher in session.backend.vouchers.claimed()}
    voucher = claimed.get(voucher_id)
    if voucher is None:
        print(f"   ⚠️ Voucher {voucher_id} is not in your claimed vouchers, continuing without it.")
    return voucher


def cmd_book(session: Session, args):
    user = session.require_user()
    positional, options = parse_args(args)
    if not positional:
        print("Usage: book <hotel_id> [checkin=...] [checkout=...] [room=ID]")
        return
    check_in, check_out = stay_dates(options)

    state = CheckoutState(
        hotel_id=positional[0],
        room_type_id=option(options, "room"),
        check_in=check_in,
        check_out=adjust_check_out(check_in, check_out),
        adults=int(option(options, "adults", 2)),
        children=int(option(options, "children", 0)),
        rooms=int(option(options, "rooms", 1)),
        voucher=pick_voucher(session, option(options, "voucher")),
        contact=Contact(full_name=user.full_name, email=user.email, phone=user.phone),
    )

    thread_id = f"checkout_{uuid.uuid4()}"
    app = create_checkout_graph(session.backend)
    print("\n🛒 Checkout started. Type 'abort' to stop.")

    while True:
        state = run_checkout(app, state, thread_id)

        if state.booking:
            session.remember(state.booking)
            print("\n✅ Booking complete!")
            print_booking(state.booking)
            return

        if state.pricing and state.last_node == "confirm" and state.missing_field == "confirmed":
            room = state.room_type.name if state.room_type else ""
            print(f"\n   {state.hotel.name if state.hotel else ''} {room}".rstrip())
            print(f"   {state.check_in} -> {state.check_out}, {state.adults} adult(s), {state.rooms} room(s)")
            print(format_quote(state.pricing))

        if not state.needs_user_input:
            print("   ⚠️ Checkout stopped unexpectedly.")
            return

        field = state.missing_field
        if field is None:
            print(f"\n❌ {state.validation_question}")
            return

        reply = input(f"\n🤖 {state.validation_question}\n👤 ").strip()
        if reply.lower() == "abort":
            print("   Checkout cancelled.")
            return
        if field == "confirmed" and reply.lower() in ("n", "no"):
            print("   Checkout cancelled.")
            return

        try:
            state = answer(state, field, reply)
        except ValueError as e:
            print(f"   ⚠️ {e}")


def cmd_bookings(session: Session, args):
    session.require_user()
    if not session.bookings or "refresh" in args:
        session.refresh_bookings()
    groups = session.grouped_bookings()

    labels = {"current": "Current", "scheduled": "Completed", "cancelled": "Cancelled"}
    for group, bookings in groups.items():
        print(f"\n📂 {labels[group]} ({len(bookings)})")
        for booking in bookings:
            stay = f"{booking.stay.check_in} -> {booking.stay.check_out}" if booking.stay else ""
            print(
                f"   • {booking.id} {booking.hotel.name} {stay} "
                f"[{booking.status.value}] {format_currency(booking.pricing.total)}"
            )


def cmd_booking(session: Session, args):
    session.require_user()
    if not args:
        print("Usage: booking <id>")
        return
    booking = session.get_booking(args[0]) or session.fetch_booking(args[0])
    if booking is None:
        print("   Booking not found.")
        return
    print_booking(booking)


def cmd_cancel(session: Session, args):
    session.require_user()
    if not args:
        print("Usage: cancel <id> [reason]")
        return
    reason = " ".join(args[1:])
    if input(f"Cancel booking {args[0]}? (y/n): ").strip().lower() != "y":
        return
    booking = session.cancel_booking(args[0], reason)
    if booking and booking.status == BookingStatus.CANCELLED:
        print("   🚫 Booking cancelled.")
    else:
        print("   ⚠️ The booking service did not confirm the cancellation.")


def cmd_vouchers(session: Session, args):
    vouchers = session.backend.vouchers.list()
    if not vouchers:
        print("   No vouchers right now.")
        return
    for voucher in vouchers:
        status = "claimed" if voucher.is_claimed else "available"
        print(f"   🎟️  {voucher.code} -{voucher.discount_percentage:g}% ({status}) ID: {voucher.id}")
        if voucher.description:
            print(f"      {voucher.description}")


def cmd_claim(session: Session, args):
    session.require_user()
    if not args:
        print("Usage: claim <voucher_id>")
        return
    session.backend.vouchers.claim(args[0])
    print("   🎉 Voucher claimed.")


def cmd_login(session: Session, args):
    email = args[0] if args else input("Email: ").strip()
    password = getpass.getpass("Password: ")
    user = session.login(email, password)
    if user:
        print(f"   👋 Welcome, {user.full_name or user.email}!")
    else:
        print("   ⚠️ Login failed.")


def cmd_register(session: Session, args):
    full_name = input("Full name: ").strip()
    email = input("Email: ").strip()
    password = getpass.getpass("Password: ")
    if len(password) < 6:
        print("   ⚠️ Password must be at least 6 characters.")
        return
    if getpass.getpass("Confirm password: ") != password:
        print("   ⚠️ Passwords do not match.")
        return
    session.backend.auth.register(full_name, email, password)
    print("   ✅ Registered. You can log in now.")


def cmd_logout(session: Session, args):
    session.logout()
    print("   👋 Logged out.")


def cmd_me(session: Session, args):
    user = session.require_user()
    print(f"\n👤 {user.full_name or '-'} <{user.email}> role={user.role.value}")
    if user.phone:
        print(f"   📞 {user.phone}")
    if user.address:
        print(f"   🏠 {user.address}")


def cmd_forgot(session: Session, args):
    email = args[0] if args else input("Email: ").strip()
    message = session.backend.auth.forgot_password(email)
    print(f"   📧 {message or 'If the email exists, an OTP has been sent.'}")
    otp = input("OTP: ").strip()
    session.backend.auth.verify_otp(email, otp)
    password = getpass.getpass("New password: ")
    if getpass.getpass("Confirm password: ") != password:
        print("   ⚠️ Passwords do not match.")
        return
    session.backend.auth.reset_password(email, otp, password)
    print("   ✅ Password reset. Please log in again.")


def cmd_stats(session: Session, args):
    session.require_role()
    stats = session.backend.analytics.stats()
    print("\n📊 User activity")
    for action, count in stats.summary.items():
        print(f"   {action:<12}{count:>8}")
    for event in stats.recent[:10]:
        print(f"   • {event.created_at or ''} {event.action} {event.user_id or ''}".rstrip())


def cmd_admin(session: Session, args):
    session.require_role()
    admin = session.backend.admin
    what = args[0] if args else ""

    if what == "hotels":
        for hotel in admin.list_hotels():
            print(f"   🏨 {hotel.id} {hotel.name} ({hotel.city}) {format_currency(hotel.price_per_night)}")
    elif what == "users":
        session.require_role(*USER_ADMIN_ROLES)
        for user in admin.list_users():
            active = "" if user.is_active else " (disabled)"
            print(f"   👤 {user.id} {user.email} [{user.role.value}]{active}")
    elif what == "bookings":
        status = BookingStatus(args[1]) if len(args) > 1 else None
        for booking in admin.list_bookings(status):
            print(f"   🧾 {booking.id} {booking.hotel.name} [{booking.status.value}] {format_currency(booking.pricing.total)}")
    elif what == "vouchers":
        for voucher in admin.list_vouchers():
            print(f"   🎟️  {voucher.id} {voucher.code} -{voucher.discount_percentage:g}%")
    elif what == "create-hotel":
        positional, options = parse_args(args[1:])
        name = " ".join(positional) or option(options, "name")
        city = option(options, "city")
        price = option(options, "price")
        if not (name and city and price):
            print("Usage: admin create-hotel <name> city=CITY price=NIGHTLY [address=...] [amenities=a,b]")
            return
        admin.create_hotel(
            name,
            city,
            float(price),
            address=option(options, "address", ""),
            description=option(options, "description", ""),
            amenities=split_amenities(option(options, "amenities", "")),
        )
        print(f"   🏨 Created {name} ({city}) at {format_currency(float(price))}")
    elif what == "status" and len(args) == 3:
        booking = admin.update_booking_status(args[1], BookingStatus(args[2]))
        if booking:
            print(f"   🧾 {booking.id} is now {booking.status.value}")
        else:
            print(f"   🧾 {args[1]} updated to {args[2]}")
    elif what == "price" and len(args) == 3:
        hotel = admin.get_hotel(args[1])
        new_price = admin.adjust_price(hotel, float(args[2]))
        if new_price is None:
            print("   ⚠️ Price must stay above zero.")
        else:
            print(f"   💰 {hotel.name}: {format_currency(new_price)}")
    else:
        print(
            "Usage: admin hotels|users|bookings [status]|vouchers | admin price <hotel_id> <delta>\n"
            "       admin create-hotel <name> city=... price=... [amenities=a,b] | admin status <booking_id> <status>"
        )


COMMANDS = {
    "search": cmd_search,
    "hotel": cmd_hotel,
    "quote": cmd_quote,
    "book": cmd_book,
    "bookings": cmd_bookings,
    "booking": cmd_booking,
    "cancel": cmd_cancel,
    "vouchers": cmd_vouchers,
    "claim": cmd_claim,
    "login": cmd_login,
    "register": cmd_register,
    "logout": cmd_logout,
    "me": cmd_me,
    "forgot": cmd_forgot,
    "stats": cmd_stats,
    "admin": cmd_admin,
}


def main(session: Session):
    print("\n🏨 TravelNow: find and book your stay.")
    print("    Type 'help' for commands, 'quit' to exit.")
    if session.restore():
        print(f"    Logged in as {session.user.email}.")

    while True:
        user_input = input("\n👤 > ").strip()
        if not user_input:
            continue

        try:
            words = shlex.split(user_input)
        except ValueError as e:
            print(f"   ⚠️ {e}")
            continue

        command, args = words[0].lower(), words[1:]
        if command in ("quit", "exit"):
            print("\n👋 Thanks for using TravelNow!")
            break
        if command == "help":
            print(HELP)
            continue

        handler = COMMANDS.get(command)
        if handler is None:
            print(f"   Unknown command '{command}'. Type 'help'.")
            continue

        try:
            handler(session, args)
        except AuthRequiredError as e:
            print(f"   🔒 {e}")
        except ApiError as e:
            print(f"   ❌ {e.message}")
        except (PricingError, ValueError) as e:
            print(f"   ⚠️ {e}")


if __name__ == "__main__":
    logging.basicConfig(level=os.getenv("TRAVELNOW_LOG_LEVEL", "WARNING"))

    trackers = [RequestLogTracker(log_file=REQUEST_LOG)] if REQUEST_LOG else []
    client = ApiClient(
        API_URL,
        token_store=TokenStore(TOKEN_FILE),
        timeout=TIMEOUT,
        trackers=trackers,
    )
    main(Session(Backend(client)))
