from datetime import datetime

from pydantic import Field

from immoauto.models.report import ReportStatus
from immoauto.schemas.common import CamelModel
from immoauto.schemas.listing import ListingSummary
from immoauto.schemas.message import Participant


class ReportCreate(CamelModel):
    reason: str = Field(min_length=10, max_length=2000)
    property_id: int | None = None
    vehicle_id: int | None = None


class ReportOut(CamelModel):
    id: int
    reporter_id: int
    property_id: int | None = None
    vehicle_id: int | None = None
    reason: str
    status: ReportStatus
    resolution: str | None = None
    resolved_at: datetime | None = None
    resolved_by: int | None = None
    created_at: datetime


class ReportDetail(ReportOut):
    reporter: Participant
    property: ListingSummary | None = None
    vehicle: ListingSummary | None = None


class ReportResolve(CamelModel):
    status: ReportStatus
    resolution: str | None = Field(default=None, max_length=2000)
