import logging

from travelnow.states import CheckoutState
from travelnow.tools import ApiError, Backend

from .common import ask, proceed

logger = logging.getLogger(__name__)


def hotel_node(state: CheckoutState, backend: Backend):
    if state.hotel is not None and state.hotel.id in (None, state.hotel_id):
        return proceed()

    logger.info("Loading hotel %s for checkout", state.hotel_id)
    try:
        hotel = backend.hotels.get(state.hotel_id)
    except ApiError as e:
        return ask(
            "hotel",
            None,
            f"I couldn't find the hotel you want to book: {e.message}",
            error=e.message,
        )

    return proceed(hotel=hotel)
