import copy

import pytest
import requests

from travelnow.tools import ApiClient, Backend
from travelnow.utils import MemoryTokenStore

BASE_URL = "http://backend.test"


class FakeResponse:
    def __init__(self, status_code=200, data=None):
        self.status_code = status_code
        self._data = data

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._data is None:
            raise ValueError("No JSON body")
        return self._data


class FakeHttp:
    """Stands in for requests.Session: routes (method, path) to canned answers."""

    def __init__(self):
        self.routes = {}
        self.calls = []

    def route(self, method, path, data=None, status=200):
        """`data` may be a callable taking (params, body) or an exception to raise."""
        self.routes[(method, path)] = (status, data)

    def request(self, method, url, headers=None, params=None, json=None, timeout=None):
        path = url[len(BASE_URL):]
        self.calls.append(
            {
                "method": method,
                "path": path,
                "headers": headers or {},
                "params": params,
                "json": json,
                "timeout": timeout,
            }
        )
        if (method, path) not in self.routes:
            return FakeResponse(404, {"message": f"No route {method} {path}"})

        status, data = self.routes[(method, path)]
        if isinstance(data, Exception):
            raise data
        if callable(data):
            data = data(params, json)
        return FakeResponse(status, copy.deepcopy(data))

    def sent(self, method, path):
        return [call for call in self.calls if call["method"] == method and call["path"] == path]


@pytest.fixture
def http():
    return FakeHttp()


@pytest.fixture
def client(http):
    return ApiClient(BASE_URL, token_store=MemoryTokenStore("token-123"), session=http)


@pytest.fixture
def anonymous_client(http):
    return ApiClient(BASE_URL, token_store=MemoryTokenStore(), session=http)


@pytest.fixture
def backend(client):
    return Backend(client)


@pytest.fixture
def hotel_data():
    return {
        "_id": "h1",
        "name": "Sea Breeze",
        "city": "Da Nang",
        "address": "1 Beach Road",
        "pricePerNight": 900000,
        "stars": 4,
        "rating": 4.5,
        "amenities": ["wifi", "pool"],
        "imageUrl": "main.jpg",
        "imageUrls": ["a.jpg"],
        "roomTypes": [
            {
                "_id": "rt1",
                "name": "Deluxe",
                "pricePerNight": 1000000,
                "maxGuests": 2,
                "bedType": "Queen",
                "totalRooms": 5,
                "availableRooms": 3,
            },
            {
                "_id": "rt2",
                "name": "Suite",
                "pricePerNight": 2500000,
                "maxGuests": 4,
                "totalRooms": 2,
                "availableRooms": 0,
            },
        ],
    }


@pytest.fixture
def user_data():
    return {
        "_id": "u1",
        "fullName": "Lan Nguyen",
        "email": "lan@example.com",
        "phone": "0901234567",
        "role": "user",
    }


@pytest.fixture
def booking_data():
    return {
        "_id": "b1",
        "__v": 0,
        "status": "confirmed",
        "hotel": {"id": "h1", "name": "Sea Breeze", "address": "1 Beach Road"},
        "roomType": {"id": "rt1", "name": "Deluxe", "pricePerNight": 1000000},
        "stay": {
            "checkIn": "2026-11-01T00:00:00.000Z",
            "checkOut": "2026-11-03T00:00:00.000Z",
            "nights": 2,
        },
        "guests": {"adults": 2, "children": 0, "rooms": 1},
        "pricing": {
            "nightly": 1000000,
            "nights": 2,
            "base": 2000000,
            "serviceFee": 200000,
            "tax": 160000,
            "discount": 0,
            "total": 2360000,
        },
        "payment": {"method": "card", "status": "paid", "cardLast4": "4242"},
        "contact": {"fullName": "Lan Nguyen", "email": "lan@example.com", "phone": "0901234567"},
        "createdAt": "2026-10-01T08:00:00Z",
    }


@pytest.fixture
def connection_error():
    return requests.exceptions.ConnectionError("connection refused")
