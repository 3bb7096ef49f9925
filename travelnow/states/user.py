from enum import Enum
from typing import Optional
from pydantic import Field

from .base import WireModel, id_field


class Role(str, Enum):
    USER = "user"
    STAFF = "staff"
    MANAGER = "manager"
    ADMIN = "admin"
    SUPERADMIN = "superadmin"


BACK_OFFICE_ROLES = (Role.SUPERADMIN, Role.ADMIN, Role.MANAGER, Role.STAFF)
USER_ADMIN_ROLES = (Role.SUPERADMIN, Role.ADMIN)


class User(WireModel):
    id: Optional[str] = id_field("Unique identifier for the user")
    full_name: Optional[str] = None
    email: str = Field(description="Login email")
    phone: Optional[str] = None
    address: Optional[str] = None
    date_of_birth: Optional[str] = None
    avatar_url: Optional[str] = None
    role: Role = Field(Role.USER, description="Access role")
    is_active: bool = True
    notification_email: Optional[bool] = None
    notification_sms: Optional[bool] = None
