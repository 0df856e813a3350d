from datetime import datetime
from typing import Literal

from pydantic import Field

from immoauto.models.listing import ListingStatus
from immoauto.models.user import UserRole, UserStatus
from immoauto.schemas.common import CamelModel
from immoauto.schemas.listing import ListingSummary
from immoauto.schemas.user import ListingCounts, UserOut


class UserStats(CamelModel):
    total: int
    active: int
    suspended: int
    banned: int


class ListingStats(CamelModel):
    properties: int
    vehicles: int
    pending_moderation: int


class DashboardStats(CamelModel):
    users: UserStats
    listings: ListingStats
    pending_reports: int
    conversations: int
    messages: int
    new_users_this_week: int


class AdminUser(UserOut):
    suspended_at: datetime | None = None
    suspended_reason: str | None = None
    counts: ListingCounts = Field(default_factory=ListingCounts)


class AdminUserDetail(AdminUser):
    properties: list[ListingSummary] = []
    vehicles: list[ListingSummary] = []


class RoleUpdate(CamelModel):
    role: UserRole


class UserStatusUpdate(CamelModel):
    status: UserStatus
    reason: str | None = Field(default=None, max_length=500)


class ListingStatusOverride(CamelModel):
    status: ListingStatus


class ModerationAction(CamelModel):
    action: Literal["approve", "reject"]
    message: str | None = Field(default=None, max_length=1000)


class AuditLogOut(CamelModel):
    id: int
    actor_id: int | None = None
    action: str
    target_type: str
    target_id: int | None = None
    ip_address: str | None = None
    details: dict | None = None
    created_at: datetime
