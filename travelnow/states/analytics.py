from enum import Enum
from typing import Any, Dict, List, Optional
from pydantic import Field

from .base import WireModel


class AnalyticsAction(str, Enum):
    LOGIN = "login"
    VIEW_HOTEL = "view_hotel"
    BOOK_TRIP = "book_trip"


class AnalyticsEvent(WireModel):
    action: str
    user_id: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[str] = None


class AnalyticsStats(WireModel):
    summary: Dict[str, int] = Field(
        default_factory=dict, description="Event count per action"
    )
    recent: List[AnalyticsEvent] = Field(default_factory=list)

    def count(self, action: AnalyticsAction) -> int:
        return self.summary.get(action.value, 0)
