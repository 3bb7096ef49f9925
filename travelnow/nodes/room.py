import logging
from typing import List, Optional

from travelnow.states import CheckoutState, RoomType
from travelnow.tools import ApiError, Backend

from .common import ask, proceed

logger = logging.getLogger(__name__)


def pick_room_type(room_types: List[RoomType], room_type_id: Optional[str] = None) -> Optional[RoomType]:
    """The requested type if listed, else the first available, else the first."""
    if room_type_id:
        return next((rt for rt in room_types if rt.id == room_type_id), None)
    if not room_types:
        return None
    return next((rt for rt in room_types if rt.is_available), room_types[0])


def availability_key(hotel_id: str, state: CheckoutState, room_type: RoomType) -> str:
    return f"{hotel_id}:{room_type.id}:{state.check_in}:{state.check_out}"


def room_node(state: CheckoutState, backend: Backend):
    hotel_id = (state.hotel.id if state.hotel else None) or state.hotel_id
    room_type = state.room_type
    if room_type is not None and room_type.id != state.room_type_id:
        room_type = None

    # The hotel snapshot has no per-date availability; it only resolves an explicit choice.
    if room_type is None and state.room_type_id and state.hotel:
        room_type = pick_room_type(state.hotel.room_types, state.room_type_id)

    if room_type is None:
        try:
            listing = backend.bookings.check_availability(
                hotel_id, state.check_in, state.check_out
            )
        except ApiError as e:
            return ask("room", None, f"I couldn't load the room types: {e.message}", error=e.message)
        room_type = pick_room_type(listing.room_types, state.room_type_id)

        if room_type is None:
            if state.room_type_id:
                return ask(
                    "room",
                    "room_type_id",
                    f"Room type {state.room_type_id} is not offered by this hotel. "
                    "Which room type would you like?",
                )
            return ask(
                "room",
                "check_in",
                "This hotel has no rooms for the selected dates. Try another check-in date? (YYYY-MM-DD)",
            )
        logger.info("Selected room type %s", room_type.id)

    key = availability_key(hotel_id, state, room_type)
    availability = state.availability
    if key != state.availability_key or availability is None:
        try:
            availability = backend.bookings.check_availability(
                hotel_id, state.check_in, state.check_out, room_type.id
            )
        except ApiError as e:
            return ask(
                "room",
                None,
                f"I couldn't check availability: {e.message}",
                room_type=room_type,
                room_type_id=room_type.id,
                error=e.message,
            )

    updates = dict(
        room_type=room_type,
        room_type_id=room_type.id,
        availability=availability,
        availability_key=key,
    )

    if not availability.available:
        return ask(
            "room",
            "room_type_id",
            availability.message
            or "This room type is not available for the selected dates. "
            "Choose another room type or change your dates.",
            **updates,
        )

    return proceed(**updates)
