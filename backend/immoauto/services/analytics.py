from datetime import datetime, timedelta

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from immoauto.models.conversation import Conversation, Message
from immoauto.models.listing import ListingView, Property, Vehicle

WINDOW_DAYS = 7


def _window() -> tuple[list[str], list[datetime]]:
    today = datetime.utcnow().replace(hour=0, minute=0, second=0, microsecond=0)
    starts = [today - timedelta(days=offset) for offset in range(WINDOW_DAYS - 1, -1, -1)]
    return [start.strftime("%a %d") for start in starts], starts


def _per_day(timestamps: list[datetime], starts: list[datetime]) -> list[int]:
    counts = [0] * len(starts)
    for ts in timestamps:
        index = (ts - starts[0]).days
        if 0 <= index < len(counts):
            counts[index] += 1
    return counts


def listing_views(db: Session, user_id: int) -> dict:
    labels, starts = _window()
    property_ids = select(Property.id).where(Property.user_id == user_id)
    vehicle_ids = select(Vehicle.id).where(Vehicle.user_id == user_id)
    rows = (
        db.query(ListingView.viewed_at)
        .filter(
            ListingView.viewed_at >= starts[0],
            or_(ListingView.property_id.in_(property_ids), ListingView.vehicle_id.in_(vehicle_ids)),
        )
        .all()
    )
    data = _per_day([viewed_at for (viewed_at,) in rows], starts)
    return {"labels": labels, "data": data, "total": sum(data)}


def message_activity(db: Session, user_id: int) -> dict:
    labels, starts = _window()
    rows = (
        db.query(Message.created_at)
        .join(Conversation, Message.conversation_id == Conversation.id)
        .filter(
            Message.created_at >= starts[0],
            or_(Conversation.buyer_id == user_id, Conversation.seller_id == user_id),
        )
        .all()
    )
    received = (
        db.query(func.count(Message.id))
        .join(Conversation, Message.conversation_id == Conversation.id)
        .filter(Conversation.seller_id == user_id, Message.sender_id != user_id)
        .scalar()
    )
    return {"labels": labels, "data": _per_day([created_at for (created_at,) in rows], starts), "total": received or 0}
