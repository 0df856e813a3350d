from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from immoauto.core.database import get_db
from immoauto.core.deps import get_current_user
from immoauto.models.user import User
from immoauto.schemas.analytics import ChartData
from immoauto.schemas.common import ApiResponse
from immoauto.services.analytics import listing_views, message_activity

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/views", response_model=ApiResponse[ChartData])
def views(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return {"success": True, "data": listing_views(db, current_user.id)}


@router.get("/activity", response_model=ApiResponse[ChartData])
def activity(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return {"success": True, "data": message_activity(db, current_user.id)}
