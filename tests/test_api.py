import functools

import pytest
from fastapi.testclient import TestClient
from langgraph.checkpoint.memory import InMemorySaver

import api
from travelnow.graph import checkout_serializer
from travelnow.tools import ApiClient

from conftest import BASE_URL

AUTH = {"Authorization": "Bearer token-123"}


@pytest.fixture
def app_client(monkeypatch, http, hotel_data, user_data):
    monkeypatch.setattr(api, "API_URL", BASE_URL)
    monkeypatch.setattr(api, "ApiClient", functools.partial(ApiClient, session=http))
    monkeypatch.setattr(api, "checkout_memory", InMemorySaver(serde=checkout_serializer()))

    http.route("GET", "/user/me", {"user": user_data})
    http.route("GET", "/hotels/h1", {"hotel": hotel_data})
    http.route("GET", "/bookings/check-availability", {"roomTypes": hotel_data["roomTypes"][:1]})
    http.route("POST", "/analytics/track", {})
    http.route(
        "GET",
        "/vouchers",
        [{"_id": "v1", "code": "SUMMER", "discountPercentage": 10, "isClaimed": True}],
    )
    http.route(
        "POST",
        "/bookings",
        lambda params, body: {"booking": {**body, "_id": "b7"}},
    )
    return TestClient(api.app)


def start_payload(**fields):
    payload = {
        "session_id": "s1",
        "hotel_id": "h1",
        "check_in": "2026-11-01",
        "check_out": "2026-11-03",
    }
    payload.update(fields)
    return payload


def test_health(app_client):
    assert app_client.get("/health").json() == {"status": "ok"}


def test_quote_with_nights(app_client):
    response = app_client.post("/quote", json={"nightly_rate": 900000, "nights": 2})

    assert response.status_code == 200
    assert response.json()["total"] == 2124000


def test_quote_with_dates_and_voucher(app_client):
    response = app_client.post(
        "/quote",
        json={
            "nightly_rate": 900000,
            "check_in": "2026-11-01",
            "check_out": "2026-11-03",
            "voucher_percent": 10,
        },
    )

    assert response.json()["discount"] == 212400
    assert response.json()["total"] == 1911600


@pytest.mark.parametrize(
    "payload",
    [
        {"nightly_rate": 900000},
        {"nightly_rate": 900000, "nights": 0},
        {"nightly_rate": 900000, "check_in": "2026-11-03", "check_out": "2026-11-01"},
        {"nightly_rate": 900000, "nights": 1, "voucher_percent": 120},
    ],
)
def test_quote_rejects_bad_input(app_client, payload):
    assert app_client.post("/quote", json=payload).status_code == 400


def test_checkout_needs_login(app_client):
    assert app_client.post("/checkout/start", json=start_payload()).status_code == 401


def test_checkout_prefills_contact_from_profile(app_client):
    response = app_client.post("/checkout/start", json=start_payload(), headers=AUTH)

    state = response.json()["state"]
    assert state["contact"]["full_name"] == "Lan Nguyen"
    assert state["missing_field"] == "payment_method"
    assert state["pricing"]["total"] == 2360000
    assert "card" not in state
    assert state["card_last4"] is None


def test_checkout_rejects_unknown_voucher(app_client):
    response = app_client.post(
        "/checkout/start", json=start_payload(voucher_id="v404"), headers=AUTH
    )

    assert response.status_code == 400


def test_checkout_conversation(app_client, http):
    app_client.post("/checkout/start", json=start_payload(voucher_id="v1"), headers=AUTH)

    response = app_client.post(
        "/checkout/answer",
        json={"session_id": "s1", "field": "payment_method", "value": "pay_at_hotel"},
        headers=AUTH,
    )
    state = response.json()["state"]
    assert state["missing_field"] == "confirmed"
    assert state["pricing"]["total"] == 2124000

    snapshot = app_client.get("/checkout/s1", headers=AUTH).json()["state"]
    assert snapshot["missing_field"] == "confirmed"

    response = app_client.post(
        "/checkout/answer",
        json={"session_id": "s1", "field": "confirmed", "value": "yes"},
        headers=AUTH,
    )
    state = response.json()["state"]
    assert state["booking"]["id"] == "b7"
    assert state["booking"]["status"] == "pending"

    body = http.sent("POST", "/bookings")[0]["json"]
    assert body["voucherId"] == "v1"
    assert body["payment"]["status"] == "unpaid"


def test_answer_unknown_session(app_client):
    body = {"session_id": "nope", "field": "confirmed", "value": "yes"}

    assert app_client.post("/checkout/answer", json=body).status_code == 401
    assert app_client.get("/checkout/nope").status_code == 401
    assert app_client.post("/checkout/answer", json=body, headers=AUTH).status_code == 404
    assert app_client.get("/checkout/nope", headers=AUTH).status_code == 404


def test_sessions_belong_to_their_user(app_client, http, user_data):
    app_client.post("/checkout/start", json=start_payload(), headers=AUTH)
    other = {"Authorization": "Bearer token-456"}
    http.route("GET", "/user/me", {"user": {**user_data, "_id": "u2", "fullName": "Minh Tran"}})

    assert app_client.get("/checkout/s1", headers=other).status_code == 404
    response = app_client.post(
        "/checkout/answer",
        json={"session_id": "s1", "field": "contact.full_name", "value": "Minh Tran"},
        headers=other,
    )
    assert response.status_code == 404

    http.route("GET", "/user/me", {"user": user_data})
    state = app_client.get("/checkout/s1", headers=AUTH).json()["state"]
    assert state["contact"]["full_name"] == "Lan Nguyen"


def test_answer_invalid_value(app_client):
    app_client.post("/checkout/start", json=start_payload(), headers=AUTH)

    response = app_client.post(
        "/checkout/answer",
        json={"session_id": "s1", "field": "payment_method", "value": "bitcoin"},
        headers=AUTH,
    )

    assert response.status_code == 400


def test_backend_errors_are_forwarded(app_client, http):
    http.route("GET", "/user/me", {"message": "Token expired"}, status=401)

    response = app_client.post("/checkout/start", json=start_payload(), headers=AUTH)

    assert response.status_code == 401
    assert response.json()["detail"] == "Token expired"
