from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from immoauto.core.database import get_db
from immoauto.core.deps import get_current_user
from immoauto.core.rate_limit import limiter
from immoauto.models.user import User
from immoauto.schemas.common import ApiResponse
from immoauto.schemas.report import ReportCreate, ReportOut
from immoauto.services.reports import create_report

router = APIRouter(prefix="/reports", tags=["reports"])


@router.post("", response_model=ApiResponse[ReportOut], status_code=201)
@limiter.limit("10/hour")
def report_listing(
    request: Request,
    payload: ReportCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    report = create_report(db, current_user.id, payload.reason, payload.property_id, payload.vehicle_id)
    return {"success": True, "message": "Report submitted", "data": report}
