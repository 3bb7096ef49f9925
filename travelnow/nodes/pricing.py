import logging

from travelnow.states import CheckoutState
from travelnow.tools import ApiError, Backend
from travelnow.utils import PricingError, compute_pricing, count_nights

from .common import ask, proceed

logger = logging.getLogger(__name__)


def pricing_node(state: CheckoutState, backend: Backend):
    voucher = state.voucher
    if voucher is not None and not voucher.is_claimed:
        # Only vouchers in the user's wallet apply; refresh in case it was just claimed.
        try:
            claimed = {v.id: v for v in backend.vouchers.claimed()}
        except ApiError as e:
            logger.warning("Could not load claimed vouchers: %s", e)
            claimed = {}
        voucher = claimed.get(voucher.id)
        if voucher is None:
            return ask(
                "pricing",
                "voucher",
                f"Voucher {state.voucher.code} has not been claimed yet. "
                "Claim it first, or leave the answer empty to continue without it.",
            )

    nightly = None
    if state.room_type and state.room_type.price_per_night:
        nightly = state.room_type.price_per_night
    elif state.hotel:
        nightly = state.hotel.price_per_night

    try:
        pricing = compute_pricing(
            nightly,
            state.nights or count_nights(state.check_in, state.check_out),
            voucher.discount_percentage if voucher else None,
        )
    except PricingError as e:
        return ask("pricing", None, f"I couldn't price this stay: {e}", error=str(e))

    return proceed(pricing=pricing, voucher=voucher)
