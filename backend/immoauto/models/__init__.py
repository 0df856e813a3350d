from immoauto.models.user import NotificationPreference, User, UserRole, UserStatus
from immoauto.models.listing import (
    FuelType,
    Image,
    ListingKind,
    ListingStatus,
    ListingType,
    ListingView,
    Property,
    PropertyType,
    Transmission,
    Vehicle,
    VehicleType,
)
from immoauto.models.favorite import Favorite
from immoauto.models.conversation import Conversation, Message
from immoauto.models.report import Report, ReportStatus
from immoauto.models.audit import AuditLog

__all__ = [
    "User",
    "UserRole",
    "UserStatus",
    "NotificationPreference",
    "ListingKind",
    "ListingStatus",
    "ListingType",
    "PropertyType",
    "VehicleType",
    "FuelType",
    "Transmission",
    "Property",
    "Vehicle",
    "Image",
    "ListingView",
    "Favorite",
    "Conversation",
    "Message",
    "Report",
    "ReportStatus",
    "AuditLog",
]
