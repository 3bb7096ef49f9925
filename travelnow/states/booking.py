from datetime import date, datetime
from enum import Enum
from typing import List, Optional
from pydantic import Field, field_validator

from .base import WireModel, id_field


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class PaymentMethod(str, Enum):
    CARD = "card"
    BANK_TRANSFER = "bank_transfer"
    PAY_AT_HOTEL = "pay_at_hotel"


class PaymentStatus(str, Enum):
    PAID = "paid"
    UNPAID = "unpaid"
    REFUNDED = "refunded"


class PricingBreakdown(WireModel):
    nightly: float = Field(0, description="Nightly rate used for the quote")
    nights: int = Field(1, description="Number of nights quoted")
    base: float = Field(0, description="Nightly rate times nights")
    service_fee: float = Field(0, description="10% service fee on the base")
    tax: float = Field(0, description="8% tax on the base")
    discount: float = Field(0, description="Voucher discount")
    total: float = Field(0, description="Amount due, never negative")

    @property
    def pre_discount_total(self) -> float:
        return self.base + self.service_fee + self.tax


class BookingHotel(WireModel):
    id: Optional[str] = None
    name: str = ""
    image: Optional[str] = None
    rating: Optional[float] = None
    address: str = ""


class BookingRoomType(WireModel):
    id: Optional[str] = None
    name: str = ""
    price_per_night: Optional[float] = None
    bed_type: Optional[str] = None
    max_guests: Optional[int] = None


class Stay(WireModel):
    check_in: date
    check_out: date
    nights: int = 1

    @field_validator("check_in", "check_out", mode="before")
    @classmethod
    def _date_part(cls, value):
        # Stored dates can come back as full ISO timestamps.
        if isinstance(value, str) and len(value) > 10:
            return value[:10]
        return value


class Timings(WireModel):
    check_in: str = "14:00"
    check_out: str = "12:00"


class Guests(WireModel):
    adults: int = Field(2, ge=1)
    children: int = Field(0, ge=0)
    rooms: int = Field(1, ge=1)


class BreakdownLine(WireModel):
    label: str
    value: float


class Payment(WireModel):
    method: PaymentMethod = PaymentMethod.CARD
    status: PaymentStatus = PaymentStatus.UNPAID
    card_last4: str = ""
    deadline: Optional[datetime] = None
    total: float = 0
    breakdown: List[BreakdownLine] = Field(default_factory=list)


class Contact(WireModel):
    full_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class Cancellation(WireModel):
    reason: Optional[str] = None
    cancelled_at: Optional[datetime] = None


class Booking(WireModel):
    id: Optional[str] = id_field("Unique identifier for the booking")
    status: BookingStatus = BookingStatus.PENDING
    voucher_id: Optional[str] = None
    hotel: BookingHotel = Field(default_factory=BookingHotel)
    room_type: Optional[BookingRoomType] = None
    stay: Optional[Stay] = None
    timings: Timings = Field(default_factory=Timings)
    guests: Guests = Field(default_factory=Guests)
    pricing: PricingBreakdown = Field(default_factory=PricingBreakdown)
    payment: Payment = Field(default_factory=Payment)
    contact: Contact = Field(default_factory=Contact)
    special_request: str = ""
    cancellation: Optional[Cancellation] = None
    created_at: Optional[datetime] = None
