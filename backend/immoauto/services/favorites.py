import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from immoauto.core.errors import ConflictError, NotFoundError
from immoauto.models.favorite import Favorite
from immoauto.services.notifications import queue_new_favorite_notification
from immoauto.services.refs import listing_ref, load_listing, ref_columns, ref_filter

logger = logging.getLogger(__name__)


def list_favorites(db: Session, user_id: int) -> tuple[list[Favorite], list[Favorite]]:
    rows = (
        db.query(Favorite)
        .filter(Favorite.user_id == user_id)
        .order_by(Favorite.created_at.desc(), Favorite.id.desc())
        .all()
    )
    return [f for f in rows if f.property_id is not None], [f for f in rows if f.vehicle_id is not None]


def add_favorite(db: Session, user_id: int, property_id: int | None, vehicle_id: int | None) -> Favorite:
    ref = listing_ref(property_id, vehicle_id)
    load_listing(db, ref)
    existing = db.query(Favorite).filter(Favorite.user_id == user_id, ref_filter(Favorite, ref)).first()
    if existing:
        raise ConflictError("This listing is already in your favorites")

    favorite = Favorite(user_id=user_id, **ref_columns(ref))
    db.add(favorite)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("This listing is already in your favorites")
    db.refresh(favorite)
    queue_new_favorite_notification(favorite.id)
    return favorite


def remove_favorite(db: Session, user_id: int, favorite_id: int) -> None:
    favorite = db.get(Favorite, favorite_id)
    if not favorite or favorite.user_id != user_id:
        raise NotFoundError("Favorite not found")
    db.delete(favorite)
    db.commit()


def find_favorite(db: Session, user_id: int, property_id: int | None, vehicle_id: int | None) -> Favorite | None:
    ref = listing_ref(property_id, vehicle_id)
    return db.query(Favorite).filter(Favorite.user_id == user_id, ref_filter(Favorite, ref)).first()
