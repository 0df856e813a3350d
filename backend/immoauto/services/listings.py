import logging
from dataclasses import dataclass, field

from sqlalchemy import String, cast, or_
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from immoauto.core.errors import ConflictError, ForbiddenError, NotFoundError
from immoauto.models.listing import (
    FuelType,
    ListingStatus,
    ListingType,
    ListingView,
    Property,
    PropertyType,
    Transmission,
    Vehicle,
    VehicleType,
)
from immoauto.models.user import User
from immoauto.services.listing_status import ensure_transition
from immoauto.services.pagination import paginate
from immoauto.services.uploads import build_images

logger = logging.getLogger(__name__)

Listing = Property | Vehicle

SEARCH_COLUMNS = {
    Property: ("title", "description", "city", "address"),
    Vehicle: ("title", "description", "brand", "model", "city"),
}

SORT_COLUMNS = {
    Property: {"price": "price", "surface": "surface", "createdAt": "created_at"},
    Vehicle: {"price": "price", "year": "year", "mileage": "mileage", "createdAt": "created_at"},
}


@dataclass
class PropertyFilters:
    city: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    min_surface: float | None = None
    max_surface: float | None = None
    rooms: int | None = None
    bedrooms: int | None = None
    type: PropertyType | None = None
    listing_type: ListingType | None = None
    features: list[str] = field(default_factory=list)
    search: str | None = None
    sort_by: str = "createdAt"
    sort_order: str = "desc"


@dataclass
class VehicleFilters:
    brand: str | None = None
    model: str | None = None
    city: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    min_year: int | None = None
    max_year: int | None = None
    max_mileage: int | None = None
    fuel_type: FuelType | None = None
    transmission: Transmission | None = None
    type: VehicleType | None = None
    listing_type: ListingType | None = None
    search: str | None = None
    sort_by: str = "createdAt"
    sort_order: str = "desc"


def label(model: type[Listing]) -> str:
    return model.kind.value.capitalize()


LIKE_ESCAPE = "\\"


def escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def contains(column, term: str):
    """Case-insensitive substring match; `%` and `_` in ``term`` match literally."""
    return column.ilike(f"%{escape_like(term)}%", escape=LIKE_ESCAPE)


def search_clause(model: type[Listing], term: str):
    return or_(*(contains(getattr(model, column), term) for column in SEARCH_COLUMNS[model]))


def _sorted(query, model: type[Listing], sort_by: str, sort_order: str):
    column = getattr(model, SORT_COLUMNS[model].get(sort_by, "created_at"))
    ordering = column.asc() if sort_order == "asc" else column.desc()
    return query.order_by(ordering, model.id.desc())


def _commit(db: Session) -> None:
    try:
        db.commit()
    except StaleDataError:
        db.rollback()
        raise ConflictError("Listing was modified by another request, reload it and retry")


def list_properties(db: Session, filters: PropertyFilters, page: int, limit: int) -> tuple[list[Property], int]:
    query = db.query(Property).filter(Property.status == ListingStatus.active)
    if filters.city:
        query = query.filter(contains(Property.city, filters.city))
    if filters.min_price is not None:
        query = query.filter(Property.price >= filters.min_price)
    if filters.max_price is not None:
        query = query.filter(Property.price <= filters.max_price)
    if filters.min_surface is not None:
        query = query.filter(Property.surface >= filters.min_surface)
    if filters.max_surface is not None:
        query = query.filter(Property.surface <= filters.max_surface)
    if filters.rooms is not None:
        query = query.filter(Property.rooms >= filters.rooms)
    if filters.bedrooms is not None:
        query = query.filter(Property.bedrooms >= filters.bedrooms)
    if filters.type:
        query = query.filter(Property.type == filters.type)
    if filters.listing_type:
        query = query.filter(Property.listing_type == filters.listing_type)
    for feature in filters.features:
        # features is a JSON list; match the quoted element in its text form.
        query = query.filter(cast(Property.features, String).like(f'%"{escape_like(feature)}"%', escape=LIKE_ESCAPE))
    if filters.search:
        query = query.filter(search_clause(Property, filters.search))
    return paginate(_sorted(query, Property, filters.sort_by, filters.sort_order), page, limit)


def list_vehicles(db: Session, filters: VehicleFilters, page: int, limit: int) -> tuple[list[Vehicle], int]:
    query = db.query(Vehicle).filter(Vehicle.status == ListingStatus.active)
    if filters.brand:
        query = query.filter(contains(Vehicle.brand, filters.brand))
    if filters.model:
        query = query.filter(contains(Vehicle.model, filters.model))
    if filters.city:
        query = query.filter(contains(Vehicle.city, filters.city))
    if filters.min_price is not None:
        query = query.filter(Vehicle.price >= filters.min_price)
    if filters.max_price is not None:
        query = query.filter(Vehicle.price <= filters.max_price)
    if filters.min_year is not None:
        query = query.filter(Vehicle.year >= filters.min_year)
    if filters.max_year is not None:
        query = query.filter(Vehicle.year <= filters.max_year)
    if filters.max_mileage is not None:
        query = query.filter(Vehicle.mileage <= filters.max_mileage)
    if filters.fuel_type:
        query = query.filter(Vehicle.fuel_type == filters.fuel_type)
    if filters.transmission:
        query = query.filter(Vehicle.transmission == filters.transmission)
    if filters.type:
        query = query.filter(Vehicle.type == filters.type)
    if filters.listing_type:
        query = query.filter(Vehicle.listing_type == filters.listing_type)
    if filters.search:
        query = query.filter(search_clause(Vehicle, filters.search))
    return paginate(_sorted(query, Vehicle, filters.sort_by, filters.sort_order), page, limit)


def create_listing(db: Session, model: type[Listing], owner: User, data: dict) -> Listing:
    images = data.pop("images", None) or []
    listing = model(**data, user_id=owner.id)
    listing.images = build_images(images, owner.id)
    db.add(listing)
    db.commit()
    db.refresh(listing)
    logger.info("%s %s created by user %s", model.kind.value, listing.id, owner.id)
    return listing


def get_listing(db: Session, model: type[Listing], listing_id: int, record_view: bool = False) -> Listing:
    listing = db.get(model, listing_id)
    if not listing:
        raise NotFoundError(f"{label(model)} not found")
    if record_view:
        db.add(ListingView(**{f"{model.kind.value}_id": listing.id}))
        db.commit()
    return listing


def _owned(db: Session, model: type[Listing], listing_id: int, user: User, verb: str) -> Listing:
    listing = get_listing(db, model, listing_id)
    if listing.user_id != user.id:
        raise ForbiddenError(f"You can only {verb} your own listings")
    return listing


def update_listing(db: Session, model: type[Listing], listing_id: int, user: User, data: dict) -> Listing:
    listing = _owned(db, model, listing_id, user, "modify")

    requested = data.pop("status", None)
    if requested is not None and requested != listing.status:
        ensure_transition(listing.status, requested)
        listing.status = requested

    images = data.pop("images", None)
    if images is not None:
        listing.images = build_images(images, user.id)

    for key, value in data.items():
        if value is not None:
            setattr(listing, key, value)
    _commit(db)
    db.refresh(listing)
    return listing


def change_status(
    db: Session,
    model: type[Listing],
    listing_id: int,
    user: User,
    requested: ListingStatus,
    expected_version: int | None = None,
) -> Listing:
    listing = _owned(db, model, listing_id, user, "modify")
    if expected_version is not None and expected_version != listing.version:
        raise ConflictError("Listing was modified by another request, reload it and retry")

    previous = listing.status
    ensure_transition(previous, requested)
    listing.status = requested
    _commit(db)
    logger.info(
        "%s %s status %s -> %s by user %s",
        model.kind.value,
        listing.id,
        previous.value,
        requested.value,
        user.id,
    )
    return listing


def delete_listing(db: Session, model: type[Listing], listing_id: int, user: User) -> None:
    listing = _owned(db, model, listing_id, user, "delete")
    db.delete(listing)
    db.commit()
    logger.info("%s %s deleted by user %s", model.kind.value, listing_id, user.id)
