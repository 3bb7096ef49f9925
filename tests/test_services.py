from datetime import date

import pytest

from travelnow.states import BookingStatus, Hotel, Role


def tracked_actions(http):
    return [call["json"]["action"] for call in http.sent("POST", "/analytics/track")]


def test_login_stores_token_and_tracks(backend, http, user_data):
    backend.client.token_store.clear()
    http.route("POST", "/user/login", {"token": "fresh", "user": user_data})
    http.route("POST", "/analytics/track", {})

    user = backend.auth.login("lan@example.com", "secret1")

    assert user.full_name == "Lan Nguyen"
    assert user.id == "u1"
    assert backend.client.token == "fresh"
    assert http.sent("POST", "/user/login")[0]["json"] == {
        "email": "lan@example.com",
        "password": "secret1",
    }
    assert tracked_actions(http) == ["login"]
    assert http.sent("POST", "/analytics/track")[0]["headers"]["Authorization"] == "Bearer fresh"


def test_login_fetches_profile_when_missing(backend, http, user_data):
    http.route("POST", "/user/login", {"token": "fresh"})
    http.route("GET", "/user/me", {"user": user_data})
    http.route("POST", "/analytics/track", {})

    user = backend.auth.login("lan@example.com", "secret1")

    assert user.email == "lan@example.com"
    assert len(http.sent("GET", "/user/me")) == 1


def test_login_without_token(backend, http):
    backend.client.token_store.clear()
    http.route("POST", "/user/login", {"message": "ok"})

    assert backend.auth.login("lan@example.com", "secret1") is None
    assert backend.client.token is None


def test_tracking_failure_is_not_raised(backend, http):
    http.route("POST", "/analytics/track", {"message": "down"}, status=503)

    assert backend.analytics.track("view_hotel", hotelId="h1") is False


def test_password_recovery_payloads(backend, http):
    http.route("POST", "/user/forgot-password", {"message": "OTP sent"})
    http.route("POST", "/user/forgot-password/verify-otp", {})
    http.route("POST", "/user/reset-password", {})

    assert backend.auth.forgot_password("lan@example.com") == "OTP sent"
    backend.auth.verify_otp("lan@example.com", "123456")
    backend.auth.reset_password("lan@example.com", "123456", "newpass")

    assert http.sent("POST", "/user/reset-password")[0]["json"] == {
        "email": "lan@example.com",
        "otp": "123456",
        "newPassword": "newpass",
    }


def test_update_profile(backend, http, user_data):
    http.route("PUT", "/user/me", {"user": {**user_data, "phone": "0999"}})

    user = backend.auth.update_profile(full_name="Lan N", phone="0999")

    assert user.phone == "0999"
    assert http.sent("PUT", "/user/me")[0]["json"] == {"fullName": "Lan N", "phone": "0999"}
    with pytest.raises(ValueError):
        backend.auth.update_profile(nickname="lan")


def test_search_sends_camel_case_params(backend, http, hotel_data):
    http.route("GET", "/hotels/search", {"hotels": [hotel_data]})

    result = backend.hotels.search(" Da Nang ", date(2026, 11, 1), date(2026, 11, 3), 2)

    assert http.calls[-1]["params"] == {
        "destination": "Da Nang",
        "checkIn": "2026-11-01",
        "checkOut": "2026-11-03",
        "guests": 2,
    }
    assert result.hotels[0].name == "Sea Breeze"
    assert result.hotels[0].room_types[0].id == "rt1"


@pytest.mark.parametrize("payload", ["list", "garbage"])
def test_search_accepts_bare_list(backend, http, hotel_data, payload):
    http.route("GET", "/hotels/search", [hotel_data] if payload == "list" else {"ok": True})

    result = backend.hotels.search("Da Nang")

    assert len(result.hotels) == (1 if payload == "list" else 0)


def test_hotel_detail_tracks_view(backend, http, hotel_data):
    http.route("GET", "/hotels/h1", {"hotel": hotel_data})
    http.route("POST", "/analytics/track", {})

    hotel = backend.hotels.get("h1")

    assert hotel.price_per_night == 900000
    assert hotel.photo_list == ["main.jpg", "a.jpg"]
    assert http.sent("POST", "/analytics/track")[0]["json"] == {
        "action": "view_hotel",
        "metadata": {"hotelId": "h1"},
    }


def test_hotel_reviews(backend, http):
    http.route(
        "GET",
        "/hotels/h1/reviews",
        {"reviews": [{"_id": "r1", "name": "Minh", "rating": 5, "comment": "Great view"}]},
    )

    reviews = backend.hotels.reviews("h1")

    assert [(r.id, r.rating, r.comment) for r in reviews] == [("r1", 5, "Great view")]


def test_bookings_list_normalizes(backend, http, booking_data):
    http.route("GET", "/bookings", {"bookings": [booking_data, "junk"]})

    bookings = backend.bookings.list()

    assert len(bookings) == 1
    booking = bookings[0]
    assert booking.id == "b1"
    assert booking.stay.check_in == date(2026, 11, 1)
    assert booking.pricing.total == 2360000
    assert booking.payment.card_last4 == "4242"
    assert booking.timings.check_in == "14:00"


def test_bookings_list_tolerates_odd_payloads(backend, http):
    http.route("GET", "/bookings", {"bookings": None})

    assert backend.bookings.list() == []


def test_cancel_sends_reason(backend, http, booking_data):
    http.route(
        "POST",
        "/bookings/b1/cancel",
        {"booking": {**booking_data, "status": "cancelled", "cancellation": {"reason": "Plans changed"}}},
    )

    booking = backend.bookings.cancel("b1", "Plans changed")

    assert booking.status == BookingStatus.CANCELLED
    assert http.calls[-1]["json"] == {"reason": "Plans changed"}


def test_availability_for_one_room_type(backend, http, hotel_data):
    http.route(
        "GET",
        "/bookings/check-availability",
        {"roomTypes": hotel_data["roomTypes"]},
    )

    free = backend.bookings.check_availability("h1", date(2026, 11, 1), date(2026, 11, 3), "rt1")
    assert free.available is True
    assert (free.available_rooms, free.total_rooms) == (3, 5)
    assert http.calls[-1]["params"]["roomTypeId"] == "rt1"

    sold_out = backend.bookings.check_availability("h1", date(2026, 11, 1), date(2026, 11, 3), "rt2")
    assert sold_out.available is False


def test_availability_server_flag_wins(backend, http, hotel_data):
    http.route(
        "GET",
        "/bookings/check-availability",
        {"available": False, "message": "Closed", "roomTypes": hotel_data["roomTypes"]},
    )

    availability = backend.bookings.check_availability("h1", date(2026, 11, 1), date(2026, 11, 3), "rt1")

    assert availability.available is False
    assert availability.message == "Closed"


def test_claimed_vouchers(backend, http):
    http.route(
        "GET",
        "/vouchers",
        {
            "vouchers": [
                {"_id": "v1", "code": "SUMMER", "discountPercentage": 10, "isClaimed": True},
                {"_id": "v2", "code": "WINTER", "discountPercentage": 20},
            ]
        },
    )
    http.route("POST", "/vouchers/v2/claim", {"message": "Claimed"})

    assert [v.code for v in backend.vouchers.claimed()] == ["SUMMER"]
    assert backend.vouchers.claim("v2") == {"message": "Claimed"}


def test_admin_price_adjustment(backend, http):
    http.route("PUT", "/admin/hotels/h1", {})
    hotel = Hotel(id="h1", name="Sea Breeze", price_per_night=900000)

    assert backend.admin.adjust_price(hotel, -900000) is None
    assert http.sent("PUT", "/admin/hotels/h1") == []

    assert backend.admin.adjust_price(hotel, 100000) == 1000000
    assert http.sent("PUT", "/admin/hotels/h1")[0]["json"] == {"pricePerNight": 1000000}


def test_admin_users_and_bookings(backend, http, booking_data):
    http.route("PUT", "/admin/users/u2", {})
    http.route("GET", "/admin/bookings", {"bookings": [booking_data]})

    backend.admin.promote_user("u2")
    backend.admin.set_user_active("u2", False)
    bookings = backend.admin.list_bookings(BookingStatus.CONFIRMED)

    sent = [call["json"] for call in http.sent("PUT", "/admin/users/u2")]
    assert sent == [{"role": Role.ADMIN.value}, {"isActive": False}]
    assert http.sent("GET", "/admin/bookings")[0]["params"] == {"status": "confirmed"}
    assert bookings[0].id == "b1"


def test_admin_voucher_code_is_normalized(backend, http):
    http.route("POST", "/admin/vouchers", {})

    backend.admin.create_voucher(" tet2027 ", 15, "Lunar new year")

    assert http.calls[-1]["json"] == {
        "code": "TET2027",
        "discountPercentage": 15,
        "description": "Lunar new year",
    }


def test_change_password(backend, http):
    http.route("POST", "/user/change-password", {"message": "Password updated"})

    backend.auth.change_password("secret1", "secret2")

    assert http.sent("POST", "/user/change-password")[0]["json"] == {
        "currentPassword": "secret1",
        "newPassword": "secret2",
    }


def test_admin_hotel_management(backend, http):
    http.route("POST", "/admin/hotels", {"hotel": {"_id": "h9"}})
    http.route("PUT", "/admin/hotels/h9", {})
    http.route("DELETE", "/admin/hotels/h9", {})

    backend.admin.create_hotel("Lotus Inn", "Hue", 1500000, amenities=["wifi"])
    backend.admin.update_hotel("h9", price_per_night=1200000, description=None, is_active=False)
    backend.admin.delete_hotel("h9")

    assert http.sent("POST", "/admin/hotels")[0]["json"] == {
        "name": "Lotus Inn",
        "city": "Hue",
        "address": "",
        "description": "",
        "pricePerNight": 1500000.0,
        "amenities": ["wifi"],
        "imageDataUrls": [],
    }
    assert http.sent("PUT", "/admin/hotels/h9")[0]["json"] == {
        "pricePerNight": 1200000,
        "isActive": False,
    }
    assert len(http.sent("DELETE", "/admin/hotels/h9")) == 1


def test_admin_user_management(backend, http):
    http.route("POST", "/admin/users", {})
    http.route("DELETE", "/admin/users/u2", {})

    backend.admin.create_user("Minh Tran", "minh@example.com", "secret1", "manager")
    backend.admin.delete_user("u2")

    assert http.sent("POST", "/admin/users")[0]["json"] == {
        "fullName": "Minh Tran",
        "email": "minh@example.com",
        "password": "secret1",
        "role": "manager",
    }
    assert len(http.sent("DELETE", "/admin/users/u2")) == 1


def test_admin_voucher_update_and_delete(backend, http):
    http.route("PUT", "/admin/vouchers/v1", {})
    http.route("DELETE", "/admin/vouchers/v1", {})

    backend.admin.update_voucher("v1", discount_percentage=20, description=None)
    backend.admin.delete_voucher("v1")

    assert http.sent("PUT", "/admin/vouchers/v1")[0]["json"] == {"discountPercentage": 20}
    assert len(http.sent("DELETE", "/admin/vouchers/v1")) == 1


def test_admin_booking_status(backend, http, booking_data):
    http.route("PUT", "/admin/bookings/b1", {"booking": {**booking_data, "status": "cancelled"}})

    booking = backend.admin.update_booking_status("b1", "cancelled")

    assert http.sent("PUT", "/admin/bookings/b1")[0]["json"] == {"status": "cancelled"}
    assert booking.status == BookingStatus.CANCELLED

    http.route("PUT", "/admin/bookings/b2", {})
    assert backend.admin.update_booking_status("b2", BookingStatus.PENDING) is None
