from sqlalchemy.orm import Session

from immoauto.models.listing import ListingStatus, Property, Vehicle
from immoauto.services.listings import contains, search_clause

MIN_QUERY_LENGTH = 2
MAX_SUGGESTIONS = 10


def search(db: Session, query: str, page: int, limit: int) -> tuple[list[Property], list[Vehicle]]:
    term = query.strip()
    if len(term) < MIN_QUERY_LENGTH:
        return [], []

    offset = (page - 1) * limit
    results = []
    for model in (Property, Vehicle):
        rows = (
            db.query(model)
            .filter(model.status == ListingStatus.active, search_clause(model, term))
            .order_by(model.created_at.desc(), model.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        results.append(rows)
    return results[0], results[1]


def suggestions(db: Session, query: str) -> list[dict]:
    term = query.strip()
    if len(term) < MIN_QUERY_LENGTH:
        return []

    titles = (
        db.query(Property.id, Property.title)
        .filter(Property.status == ListingStatus.active, contains(Property.title, term))
        .order_by(Property.created_at.desc())
        .limit(5)
        .all()
    )
    vehicles = (
        db.query(Vehicle.id, Vehicle.brand, Vehicle.model)
        .filter(
            Vehicle.status == ListingStatus.active,
            contains(Vehicle.brand, term) | contains(Vehicle.model, term),
        )
        .order_by(Vehicle.created_at.desc())
        .limit(5)
        .all()
    )
    cities = (
        db.query(Property.city)
        .filter(Property.status == ListingStatus.active, contains(Property.city, term))
        .distinct()
        .limit(3)
        .all()
    )

    items = [{"type": "property", "id": pid, "label": title} for pid, title in titles]
    items += [{"type": "vehicle", "id": vid, "label": f"{brand} {model}"} for vid, brand, model in vehicles]
    items += [{"type": "city", "id": None, "label": city} for (city,) in cities]
    return items[:MAX_SUGGESTIONS]
