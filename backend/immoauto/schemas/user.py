from datetime import datetime

from pydantic import EmailStr, Field

from immoauto.models.user import UserRole, UserStatus
from immoauto.schemas.common import CamelModel


class UserOut(CamelModel):
    id: int
    email: EmailStr
    name: str
    phone: str | None = None
    avatar: str | None = None
    role: UserRole
    status: UserStatus
    created_at: datetime
    updated_at: datetime


class OwnerOut(CamelModel):
    id: int
    name: str
    email: EmailStr
    phone: str | None = None
    avatar: str | None = None


class ListingCounts(CamelModel):
    properties: int = 0
    vehicles: int = 0
    favorites: int = 0


class UserProfile(UserOut):
    counts: ListingCounts = Field(default_factory=ListingCounts)


class UserUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=2, max_length=100)
    email: EmailStr | None = None
    phone: str | None = None
    password: str | None = None
    avatar: str | None = None


class PasswordChange(CamelModel):
    current_password: str
    new_password: str


class NotificationPreferencesOut(CamelModel):
    email_on_new_message: bool
    email_on_new_favorite: bool
    email_on_listing_views: bool
    email_on_listing_expiry: bool
    push_notifications: bool
    updated_at: datetime


class NotificationPreferencesUpdate(CamelModel):
    email_on_new_message: bool | None = None
    email_on_new_favorite: bool | None = None
    email_on_listing_views: bool | None = None
    email_on_listing_expiry: bool | None = None
    push_notifications: bool | None = None
