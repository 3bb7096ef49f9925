from datetime import date
from typing import Optional
from pydantic import BaseModel, Field

from .booking import Booking, Contact, PaymentMethod, PricingBreakdown
from .hotel import Availability, Hotel, RoomType
from .voucher import Voucher


class CardInfo(BaseModel):
    holder_name: Optional[str] = Field(None, description="Name printed on the card")
    number: Optional[str] = Field(None, description="Card number as typed")
    expiry: Optional[str] = Field(None, description="Expiry in MM/YY format")
    cvv: Optional[str] = Field(None, description="Card security code")


class CheckoutState(BaseModel):
    # Selection
    hotel_id: str = Field(description="Hotel being booked")
    hotel: Optional[Hotel] = Field(default=None, description="Hotel snapshot")
    room_type_id: Optional[str] = Field(
        default=None, description="Chosen room type, auto-selected when missing"
    )
    room_type: Optional[RoomType] = Field(default=None)
    check_in: date = Field(description="Check-in date")
    check_out: date = Field(description="Check-out date")
    adults: int = Field(default=2, ge=1)
    children: int = Field(default=0, ge=0)
    rooms: int = Field(default=1, ge=1)
    voucher: Optional[Voucher] = Field(
        default=None, description="Claimed voucher applied to the total"
    )

    # Derived
    availability: Optional[Availability] = Field(default=None)
    availability_key: Optional[str] = Field(
        default=None, description="Hotel, room type and dates of the last query"
    )
    nights: Optional[int] = Field(default=None)
    pricing: Optional[PricingBreakdown] = Field(default=None)

    # Guest input
    contact: Contact = Field(default_factory=Contact)
    special_request: str = Field(default="")
    payment_method: Optional[PaymentMethod] = Field(default=None)
    card: CardInfo = Field(default_factory=CardInfo)
    confirmed: bool = Field(
        default=False, description="User confirmed the reviewed booking"
    )

    # Result
    booking: Optional[Booking] = Field(default=None, description="Created booking")

    # User input handling
    needs_user_input: bool = Field(
        default=False, description="Indicates if more user input is needed"
    )
    validation_question: Optional[str] = Field(
        default=None, description="Question to ask the user"
    )
    missing_field: Optional[str] = Field(
        default=None, description="Dotted name of the field the question is about"
    )
    last_node: Optional[str] = Field(
        default=None, description="The last executed node in the checkout flow"
    )
    error: Optional[str] = Field(
        default=None, description="Blocking error reported by the backend"
    )
