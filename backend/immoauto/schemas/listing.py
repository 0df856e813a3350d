from datetime import datetime

from immoauto.models.listing import ListingKind, ListingStatus
from immoauto.schemas.common import CamelModel
from immoauto.schemas.user import OwnerOut


class ImageOut(CamelModel):
    id: int
    mime_type: str
    data: str


class StatusChange(CamelModel):
    status: ListingStatus
    # Version the client last saw; a mismatch is reported as a conflict.
    version: int | None = None


class ListingSummary(CamelModel):
    id: int
    title: str
    price: float
    status: ListingStatus


class AdminListing(ListingSummary):
    kind: ListingKind
    city: str
    owner: OwnerOut
    created_at: datetime
