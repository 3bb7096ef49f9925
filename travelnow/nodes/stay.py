from travelnow.states import CheckoutState
from travelnow.utils import InvalidStayError, count_nights

from .common import ask, proceed


def stay_node(state: CheckoutState):
    try:
        nights = count_nights(state.check_in, state.check_out)
    except InvalidStayError:
        return ask(
            "stay",
            "check_out",
            f"Check-out must be after check-in ({state.check_in}). "
            "What is your check-out date? (YYYY-MM-DD)",
            nights=None,
        )
    return proceed(nights=nights)
