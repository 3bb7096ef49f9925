import logging
import time
from typing import Any, Dict, List, Optional

import requests

from travelnow.utils.token_store import MemoryTokenStore, TokenStore

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MESSAGE = "Something went wrong, please try again"


class ApiError(Exception):
    """Backend call failed: non-2xx response or no response at all."""

    def __init__(self, message: str, status: Optional[int] = None, data: Any = None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.data = data

    def __str__(self):
        if self.status is None:
            return self.message
        return f"{self.message} (HTTP {self.status})"


class ApiClient:
    """Thin JSON wrapper around the TravelNow REST backend"""

    def __init__(
        self,
        base_url: str = "http://localhost:5000",
        token_store: Optional[TokenStore] = None,
        timeout: float = 30,
        trackers: Optional[List[Any]] = None,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.token_store = token_store or MemoryTokenStore()
        self.timeout = timeout
        self.trackers = trackers or []
        self.http = session or requests.Session()

    @property
    def token(self) -> Optional[str]:
        return self.token_store.load()

    def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> Any:
        final_headers: Dict[str, str] = {"Content-Type": "application/json"}
        final_headers.update(headers or {})

        token = self.token
        if token and "Authorization" not in final_headers:
            final_headers["Authorization"] = f"Bearer {token}"

        if params:
            params = {key: value for key, value in params.items() if value not in (None, "")}

        url = f"{self.base_url}{path}"
        start = time.time()
        try:
            response = self.http.request(
                method,
                url,
                headers=final_headers,
                params=params or None,
                json=body,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            latency_ms = (time.time() - start) * 1000
            error = ApiError(f"Unable to reach the booking service: {e}")
            self._notify_error(method, path, None, latency_ms, error)
            raise error from e

        latency_ms = (time.time() - start) * 1000
        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.ok:
            message = DEFAULT_ERROR_MESSAGE
            if isinstance(data, dict) and data.get("message"):
                message = data["message"]
            error = ApiError(message, status=response.status_code, data=data)
            self._notify_error(method, path, response.status_code, latency_ms, error)
            raise error

        logger.debug("%s %s -> %s (%.0f ms)", method, path, response.status_code, latency_ms)
        for tracker in self.trackers:
            tracker.on_request_end(method, path, response.status_code, latency_ms)
        return data

    def _notify_error(self, method, path, status, latency_ms, error):
        logger.debug("%s %s failed: %s", method, path, error)
        for tracker in self.trackers:
            tracker.on_request_error(method, path, status, latency_ms, error)

    def get(self, path: str, params: Optional[Dict[str, Any]] = None, **kwargs) -> Any:
        return self.request("GET", path, params=params, **kwargs)

    def post(self, path: str, body: Any = None, **kwargs) -> Any:
        return self.request("POST", path, body=body, **kwargs)

    def put(self, path: str, body: Any = None, **kwargs) -> Any:
        return self.request("PUT", path, body=body, **kwargs)

    def delete(self, path: str, **kwargs) -> Any:
        return self.request("DELETE", path, **kwargs)
