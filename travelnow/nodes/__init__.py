from .hotel import hotel_node
from .stay import stay_node
from .room import room_node, pick_room_type
from .pricing import pricing_node
from .contact import contact_node
from .payment import payment_node
from .confirm import confirm_node, build_booking_payload

__all__ = [
    "hotel_node",
    "stay_node",
    "room_node",
    "pick_room_type",
    "pricing_node",
    "contact_node",
    "payment_node",
    "confirm_node",
    "build_booking_payload",
]
