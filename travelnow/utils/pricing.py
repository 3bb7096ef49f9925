import math
from datetime import date, timedelta
from typing import Optional

from travelnow.states import PricingBreakdown

SERVICE_FEE_RATE = 0.10
TAX_RATE = 0.08


class PricingError(ValueError):
    """Raised for inputs the pricing rule cannot quote."""


class InvalidStayError(PricingError):
    """Raised when check-out is not after check-in."""


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def count_nights(check_in: date, check_out: date) -> int:
    """Whole nights between two dates. Rejects empty or reversed stays."""
    nights = (check_out - check_in).days
    if nights < 1:
        raise InvalidStayError("Check-out date must be after check-in date")
    return nights


def adjust_check_out(check_in: date, check_out: Optional[date]) -> date:
    """Move check-out to the next day when check-in catches up with it."""
    if check_out is None or check_in >= check_out:
        return check_in + timedelta(days=1)
    return check_out


def compute_pricing(
    nightly_rate: Optional[float],
    nights: int,
    voucher_percent: Optional[float] = None,
) -> PricingBreakdown:
    """
    Quote a stay.

    base = rate * nights, service fee 10% and tax 8% of the base, then the
    voucher percentage is taken off the fee-inclusive amount.

    Args:
        nightly_rate: Price per room per night. None counts as zero.
        nights: Number of nights, at least 1.
        voucher_percent: Optional discount percentage between 0 and 100.

    Returns:
        A PricingBreakdown whose total is never negative.
    """
    nightly = float(nightly_rate or 0)
    if nightly < 0:
        raise PricingError("Nightly rate cannot be negative")
    if isinstance(nights, bool) or not isinstance(nights, int) or nights < 1:
        raise PricingError("Nights must be a positive whole number")
    if voucher_percent is not None and not 0 <= voucher_percent <= 100:
        raise PricingError("Voucher discount must be between 0 and 100 percent")

    if nightly == 0:
        return PricingBreakdown(nightly=0, nights=nights)

    base = nightly * nights
    service_fee = round_half_up(base * SERVICE_FEE_RATE)
    tax = round_half_up(base * TAX_RATE)
    pre_discount_total = base + service_fee + tax

    discount = 0
    if voucher_percent is not None:
        discount = min(
            round_half_up(pre_discount_total * voucher_percent / 100),
            pre_discount_total,
        )

    return PricingBreakdown(
        nightly=nightly,
        nights=nights,
        base=base,
        service_fee=service_fee,
        tax=tax,
        discount=discount,
        total=max(0, pre_discount_total - discount),
    )


def quote_stay(
    nightly_rate: Optional[float],
    check_in: date,
    check_out: date,
    voucher_percent: Optional[float] = None,
) -> PricingBreakdown:
    return compute_pricing(
        nightly_rate, count_nights(check_in, check_out), voucher_percent
    )
