import logging
from typing import Any, Optional

from pydantic.alias_generators import to_camel

from travelnow.states import AnalyticsAction, User

from .analytics import AnalyticsService
from .client import ApiClient

logger = logging.getLogger(__name__)


class AuthService:
    """Login, registration, password recovery and the user profile"""

    def __init__(self, client: ApiClient, analytics: Optional[AnalyticsService] = None):
        self.client = client
        self.analytics = analytics

    def login(self, email: str, password: str) -> Optional[User]:
        data = self.client.post("/user/login", {"email": email, "password": password})
        token = (data or {}).get("token")
        if not token:
            return None

        self.client.token_store.save(token)
        user = None
        if data.get("user"):
            user = User.model_validate(data["user"])
        else:
            user = self.me()

        logger.info("Logged in as %s", user.email if user else email)
        if self.analytics:
            self.analytics.track(AnalyticsAction.LOGIN)
        return user

    def logout(self):
        self.client.token_store.clear()

    def register(self, full_name: str, email: str, password: str) -> Any:
        return self.client.post(
            "/user/register",
            {"fullName": full_name, "email": email, "password": password},
        )

    def forgot_password(self, email: str) -> Optional[str]:
        data = self.client.post("/user/forgot-password", {"email": email})
        return (data or {}).get("message")

    def verify_otp(self, email: str, otp: str) -> Any:
        return self.client.post(
            "/user/forgot-password/verify-otp", {"email": email, "otp": otp}
        )

    def reset_password(self, email: str, otp: str, new_password: str) -> Any:
        return self.client.post(
            "/user/reset-password",
            {"email": email, "otp": otp, "newPassword": new_password},
        )

    def me(self) -> User:
        data = self.client.get("/user/me")
        return User.model_validate(data["user"])

    def update_profile(self, **fields: Any) -> User:
        """Update profile fields given in snake_case (full_name, phone, ...)."""
        unknown = set(fields) - set(User.model_fields)
        if unknown:
            raise ValueError(f"Unknown profile fields: {', '.join(sorted(unknown))}")
        payload = {to_camel(key): value for key, value in fields.items()}
        data = self.client.put("/user/me", payload)
        return User.model_validate(data["user"])

    def change_password(self, current_password: str, new_password: str) -> Any:
        return self.client.post(
            "/user/change-password",
            {"currentPassword": current_password, "newPassword": new_password},
        )
