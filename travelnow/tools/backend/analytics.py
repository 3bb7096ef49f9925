import logging
from typing import Any

from travelnow.states import AnalyticsAction, AnalyticsStats

from .client import ApiClient, ApiError

logger = logging.getLogger(__name__)


class AnalyticsService:
    """Behaviour tracking and the admin statistics view"""

    def __init__(self, client: ApiClient):
        self.client = client

    def track(self, action: AnalyticsAction, **metadata: Any) -> bool:
        """Record an event. Failures are logged, never raised."""
        try:
            self.client.post(
                "/analytics/track",
                {"action": AnalyticsAction(action).value, "metadata": metadata},
            )
            return True
        except ApiError as e:
            logger.warning("Could not track %s event: %s", action, e)
            return False

    def stats(self) -> AnalyticsStats:
        data = self.client.get("/analytics/stats") or {}
        return AnalyticsStats.model_validate(data)
