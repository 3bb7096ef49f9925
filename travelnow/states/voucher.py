from typing import Optional
from pydantic import Field

from .base import WireModel, id_field


class Voucher(WireModel):
    id: Optional[str] = id_field("Unique identifier for the voucher")
    code: str = Field(description="Code shown to the user")
    description: Optional[str] = None
    discount_percentage: float = Field(
        0, ge=0, le=100, description="Percentage taken off the booking total"
    )
    is_claimed: bool = Field(False, description="Claimed by the current user")
    expires_at: Optional[str] = None
