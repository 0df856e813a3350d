from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from immoauto.core.database import get_db
from immoauto.core.deps import require_roles
from immoauto.models.listing import ListingKind, ListingStatus
from immoauto.models.report import ReportStatus
from immoauto.models.user import User, UserRole, UserStatus
from immoauto.schemas.admin import (
    AdminUser,
    AdminUserDetail,
    AuditLogOut,
    DashboardStats,
    ListingStatusOverride,
    ModerationAction,
    RoleUpdate,
    UserStatusUpdate,
)
from immoauto.schemas.common import ApiResponse, CamelModel, MessageResponse, Page
from immoauto.schemas.listing import AdminListing
from immoauto.schemas.property import PropertyOut
from immoauto.schemas.report import ReportDetail, ReportResolve
from immoauto.schemas.user import ListingCounts
from immoauto.schemas.vehicle import VehicleOut
from immoauto.services import admin as admin_service
from immoauto.services.pagination import page_body
from immoauto.services.users import get_user, listing_counts

router = APIRouter(prefix="/admin", tags=["admin"])

require_admin = require_roles(UserRole.admin)


class PendingListings(CamelModel):
    properties: list[PropertyOut]
    vehicles: list[VehicleOut]


def _admin_user(db: Session, user: User, schema=AdminUser):
    return schema.model_validate(user).model_copy(update={"counts": ListingCounts(**listing_counts(db, user.id))})


def _listing_out(listing):
    schema = PropertyOut if listing.kind == ListingKind.property else VehicleOut
    return schema.model_validate(listing)


@router.get("/dashboard", response_model=ApiResponse[DashboardStats])
def dashboard(db: Session = Depends(get_db), _: User = Depends(require_admin)):
    return {"success": True, "data": admin_service.dashboard(db)}


@router.get("/users", response_model=Page[AdminUser])
def list_users(
    role: UserRole | None = None,
    status: UserStatus | None = None,
    search: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    users, total = admin_service.list_users(db, role, status, search, page, limit)
    return page_body([_admin_user(db, u) for u in users], total, page, limit)


@router.get("/users/{user_id}", response_model=ApiResponse[AdminUserDetail])
def get_user_detail(user_id: int, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    return {"success": True, "data": _admin_user(db, get_user(db, user_id), AdminUserDetail)}


@router.patch("/users/{user_id}/role", response_model=ApiResponse[AdminUser])
def update_role(
    user_id: int,
    payload: RoleUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(require_admin),
):
    user = admin_service.set_role(db, current, user_id, payload.role)
    return {"success": True, "message": "Role updated", "data": _admin_user(db, user)}


@router.patch("/users/{user_id}/status", response_model=ApiResponse[AdminUser])
def update_status(
    user_id: int,
    payload: UserStatusUpdate,
    db: Session = Depends(get_db),
    current: User = Depends(require_admin),
):
    user = admin_service.set_status(db, current, user_id, payload.status, payload.reason)
    return {"success": True, "message": "Status updated", "data": _admin_user(db, user)}


@router.delete("/users/{user_id}", response_model=MessageResponse)
def delete_user(user_id: int, db: Session = Depends(get_db), current: User = Depends(require_admin)):
    admin_service.delete_user(db, current, user_id)
    return {"success": True, "message": "User deleted"}


@router.get("/listings", response_model=Page[AdminListing])
def list_listings(
    type: ListingKind | None = None,
    status: ListingStatus | None = None,
    search: str | None = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    rows, total = admin_service.list_listings(db, type, status, search, page, limit)
    return page_body(rows, total, page, limit)


@router.get("/listings/{kind}/{listing_id}", response_model=ApiResponse[PropertyOut | VehicleOut])
def get_listing(kind: ListingKind, listing_id: int, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    return {"success": True, "data": _listing_out(admin_service.get_listing(db, kind, listing_id))}


@router.patch("/listings/{kind}/{listing_id}/status", response_model=ApiResponse[PropertyOut | VehicleOut])
def override_listing_status(
    kind: ListingKind,
    listing_id: int,
    payload: ListingStatusOverride,
    db: Session = Depends(get_db),
    current: User = Depends(require_admin),
):
    listing = admin_service.override_status(db, current, kind, listing_id, payload.status)
    return {"success": True, "message": "Status updated", "data": _listing_out(listing)}


@router.delete("/listings/{kind}/{listing_id}", response_model=MessageResponse)
def delete_listing(
    kind: ListingKind,
    listing_id: int,
    db: Session = Depends(get_db),
    current: User = Depends(require_admin),
):
    admin_service.delete_listing(db, current, kind, listing_id)
    return {"success": True, "message": "Listing deleted"}


@router.get("/moderation/pending", response_model=ApiResponse[PendingListings])
def pending(db: Session = Depends(get_db), _: User = Depends(require_admin)):
    properties, vehicles = admin_service.pending_listings(db)
    return {"success": True, "data": {"properties": properties, "vehicles": vehicles}}


@router.post("/moderation/{kind}/{listing_id}", response_model=ApiResponse[PropertyOut | VehicleOut])
def moderate(
    kind: ListingKind,
    listing_id: int,
    payload: ModerationAction,
    db: Session = Depends(get_db),
    current: User = Depends(require_admin),
):
    listing = admin_service.moderate(db, current, kind, listing_id, payload.action, payload.message)
    outcome = "approved" if payload.action == "approve" else "rejected"
    return {"success": True, "message": f"Listing {outcome}", "data": _listing_out(listing)}


@router.get("/reports", response_model=ApiResponse[list[ReportDetail]])
def list_reports(status: ReportStatus | None = None, db: Session = Depends(get_db), _: User = Depends(require_admin)):
    return {"success": True, "data": admin_service.list_reports(db, status)}


@router.patch("/reports/{report_id}", response_model=ApiResponse[ReportDetail])
def resolve_report(
    report_id: int,
    payload: ReportResolve,
    db: Session = Depends(get_db),
    current: User = Depends(require_admin),
):
    report = admin_service.resolve_report(db, current, report_id, payload.status, payload.resolution)
    return {"success": True, "message": "Report updated", "data": report}


@router.get("/logs", response_model=ApiResponse[list[AuditLogOut]])
def logs(limit: int = Query(100, ge=1, le=500), db: Session = Depends(get_db), _: User = Depends(require_admin)):
    return {"success": True, "data": admin_service.audit_logs(db, limit)}
