"""Admin panel operations.

Every mutation here writes an audit entry. Listing status changes made by
an admin are overrides and are not checked against the owner transition
table.
"""
import logging
from datetime import datetime, timedelta

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from immoauto.core.errors import ForbiddenError, NotFoundError, ValidationError
from immoauto.models.audit import AuditLog
from immoauto.models.conversation import Conversation, Message
from immoauto.models.listing import ListingKind, ListingStatus, Property, Vehicle
from immoauto.models.report import Report, ReportStatus
from immoauto.models.user import User, UserRole, UserStatus
from immoauto.services.audit import audit_event
from immoauto.services.listings import contains, label, search_clause
from immoauto.services.pagination import paginate
from immoauto.services.refs import listing_model, load_listing, ref_for
from immoauto.services.users import get_user

logger = logging.getLogger(__name__)


def _count(db: Session, column, *criteria) -> int:
    return db.query(func.count(column)).filter(*criteria).scalar() or 0


def dashboard(db: Session) -> dict:
    week_ago = datetime.utcnow() - timedelta(days=7)
    pending = _count(db, Property.id, Property.status == ListingStatus.draft) + _count(
        db, Vehicle.id, Vehicle.status == ListingStatus.draft
    )
    return {
        "users": {
            "total": _count(db, User.id),
            "active": _count(db, User.id, User.status == UserStatus.active),
            "suspended": _count(db, User.id, User.status == UserStatus.suspended),
            "banned": _count(db, User.id, User.status == UserStatus.banned),
        },
        "listings": {
            "properties": _count(db, Property.id),
            "vehicles": _count(db, Vehicle.id),
            "pending_moderation": pending,
        },
        "pending_reports": _count(db, Report.id, Report.status == ReportStatus.pending),
        "conversations": _count(db, Conversation.id),
        "messages": _count(db, Message.id),
        "new_users_this_week": _count(db, User.id, User.created_at >= week_ago),
    }


def list_users(
    db: Session,
    role: UserRole | None,
    status: UserStatus | None,
    search: str | None,
    page: int,
    limit: int,
) -> tuple[list[User], int]:
    query = db.query(User)
    if role:
        query = query.filter(User.role == role)
    if status:
        query = query.filter(User.status == status)
    if search:
        query = query.filter(or_(contains(User.name, search), contains(User.email, search)))
    return paginate(query.order_by(User.created_at.desc(), User.id.desc()), page, limit)


def set_role(db: Session, admin: User, user_id: int, role: UserRole) -> User:
    if user_id == admin.id:
        raise ValidationError("You cannot change your own role")
    user = get_user(db, user_id)
    previous = user.role
    user.role = role
    db.commit()
    audit_event(
        db,
        "user_role_changed",
        "user",
        actor_id=admin.id,
        target_id=user.id,
        details={"from": previous.value, "to": role.value},
    )
    return user


def set_status(db: Session, admin: User, user_id: int, status: UserStatus, reason: str | None) -> User:
    if user_id == admin.id:
        raise ValidationError("You cannot change your own status")
    user = get_user(db, user_id)
    if user.role == UserRole.admin and status != UserStatus.active:
        raise ForbiddenError("Administrators cannot be suspended or banned")

    user.status = status
    if status == UserStatus.active:
        user.suspended_at = None
        user.suspended_reason = None
    else:
        user.suspended_at = datetime.utcnow()
        user.suspended_reason = reason
        user.session_version += 1
    db.commit()
    audit_event(
        db,
        f"user_{status.value.lower()}",
        "user",
        actor_id=admin.id,
        target_id=user.id,
        details={"reason": reason} if reason else None,
    )
    logger.info("admin %s set user %s status to %s", admin.id, user.id, status.value)
    return user


def delete_user(db: Session, admin: User, user_id: int) -> None:
    user = get_user(db, user_id)
    if user.role == UserRole.admin:
        raise ForbiddenError("Administrators cannot be deleted")
    email = user.email
    db.delete(user)
    db.commit()
    audit_event(db, "user_deleted", "user", actor_id=admin.id, target_id=user_id, details={"email": email})


def list_listings(
    db: Session,
    kind: ListingKind | None,
    status: ListingStatus | None,
    search: str | None,
    page: int,
    limit: int,
) -> tuple[list[Property | Vehicle], int]:
    kinds = [kind] if kind else [ListingKind.property, ListingKind.vehicle]
    rows: list[Property | Vehicle] = []
    for each in kinds:
        model = listing_model(each)
        query = db.query(model)
        if status:
            query = query.filter(model.status == status)
        if search:
            query = query.filter(search_clause(model, search))
        rows.extend(query.all())
    rows.sort(key=lambda listing: listing.created_at, reverse=True)
    start = (page - 1) * limit
    return rows[start : start + limit], len(rows)


def get_listing(db: Session, kind: ListingKind, listing_id: int) -> Property | Vehicle:
    return load_listing(db, ref_for(kind, listing_id))


def override_status(db: Session, admin: User, kind: ListingKind, listing_id: int, status: ListingStatus):
    listing = get_listing(db, kind, listing_id)
    previous = listing.status
    listing.status = status
    db.commit()
    audit_event(
        db,
        "listing_status_changed",
        kind.value,
        actor_id=admin.id,
        target_id=listing.id,
        details={"from": previous.value, "to": status.value},
    )
    return listing


def delete_listing(db: Session, admin: User, kind: ListingKind, listing_id: int) -> None:
    listing = get_listing(db, kind, listing_id)
    title = listing.title
    db.delete(listing)
    db.commit()
    audit_event(db, "listing_deleted", kind.value, actor_id=admin.id, target_id=listing_id, details={"title": title})


def pending_listings(db: Session) -> tuple[list[Property], list[Vehicle]]:
    properties = (
        db.query(Property).filter(Property.status == ListingStatus.draft).order_by(Property.created_at.asc()).all()
    )
    vehicles = db.query(Vehicle).filter(Vehicle.status == ListingStatus.draft).order_by(Vehicle.created_at.asc()).all()
    return properties, vehicles


def moderate(db: Session, admin: User, kind: ListingKind, listing_id: int, action: str, message: str | None):
    listing = get_listing(db, kind, listing_id)
    approved = action == "approve"
    listing.status = ListingStatus.active if approved else ListingStatus.inactive
    db.commit()
    outcome = "approved" if approved else "rejected"
    audit_event(
        db,
        f"listing_{outcome}",
        kind.value,
        actor_id=admin.id,
        target_id=listing.id,
        details={"message": message} if message else None,
    )
    logger.info("admin %s %s %s %s", admin.id, outcome, label(type(listing)).lower(), listing.id)
    return listing


def list_reports(db: Session, status: ReportStatus | None) -> list[Report]:
    query = db.query(Report)
    if status:
        query = query.filter(Report.status == status)
    return query.order_by(Report.created_at.desc(), Report.id.desc()).all()


def resolve_report(db: Session, admin: User, report_id: int, status: ReportStatus, resolution: str | None) -> Report:
    report = db.get(Report, report_id)
    if not report:
        raise NotFoundError("Report not found")
    report.status = status
    report.resolution = resolution
    if status == ReportStatus.pending:
        report.resolved_at = None
        report.resolved_by = None
    else:
        report.resolved_at = datetime.utcnow()
        report.resolved_by = admin.id
    db.commit()
    audit_event(
        db,
        f"report_{status.value.lower()}",
        "report",
        actor_id=admin.id,
        target_id=report.id,
        details={"resolution": resolution} if resolution else None,
    )
    return report


def audit_logs(db: Session, limit: int) -> list[AuditLog]:
    return db.query(AuditLog).order_by(AuditLog.created_at.desc(), AuditLog.id.desc()).limit(limit).all()
