from typing import Literal

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from immoauto.core.database import get_db
from immoauto.core.deps import get_current_user
from immoauto.models.listing import ListingType, Property, PropertyType
from immoauto.models.user import User
from immoauto.schemas.common import ApiResponse, MessageResponse, Page
from immoauto.schemas.listing import StatusChange
from immoauto.schemas.property import PropertyCreate, PropertyOut, PropertyUpdate
from immoauto.services import listings
from immoauto.services.pagination import page_body

router = APIRouter(prefix="/properties", tags=["properties"])


@router.get("", response_model=Page[PropertyOut])
def list_properties(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    city: str | None = None,
    min_price: float | None = Query(None, alias="minPrice", ge=0),
    max_price: float | None = Query(None, alias="maxPrice", ge=0),
    min_surface: float | None = Query(None, alias="minSurface", ge=0),
    max_surface: float | None = Query(None, alias="maxSurface", ge=0),
    rooms: int | None = Query(None, ge=1),
    bedrooms: int | None = Query(None, ge=0),
    type: PropertyType | None = None,
    listing_type: ListingType | None = Query(None, alias="listingType"),
    features: str | None = Query(None, description="Comma-separated; all must match"),
    search: str | None = None,
    sort_by: Literal["price", "surface", "createdAt"] = Query("createdAt", alias="sortBy"),
    sort_order: Literal["asc", "desc"] = Query("desc", alias="sortOrder"),
    db: Session = Depends(get_db),
):
    filters = listings.PropertyFilters(
        city=city,
        min_price=min_price,
        max_price=max_price,
        min_surface=min_surface,
        max_surface=max_surface,
        rooms=rooms,
        bedrooms=bedrooms,
        type=type,
        listing_type=listing_type,
        features=[f.strip() for f in features.split(",") if f.strip()] if features else [],
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    items, total = listings.list_properties(db, filters, page, limit)
    return page_body(items, total, page, limit)


@router.post("", response_model=ApiResponse[PropertyOut], status_code=201)
def create_property(
    payload: PropertyCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    prop = listings.create_listing(db, Property, current_user, payload.model_dump())
    return {"success": True, "message": "Property created", "data": prop}


@router.get("/{property_id}", response_model=ApiResponse[PropertyOut])
def get_property(property_id: int, db: Session = Depends(get_db)):
    return {"success": True, "data": listings.get_listing(db, Property, property_id, record_view=True)}


@router.put("/{property_id}", response_model=ApiResponse[PropertyOut])
def update_property(
    property_id: int,
    payload: PropertyUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    prop = listings.update_listing(db, Property, property_id, current_user, payload.model_dump(exclude_unset=True))
    return {"success": True, "message": "Property updated", "data": prop}


@router.patch("/{property_id}/status", response_model=ApiResponse[PropertyOut])
def change_property_status(
    property_id: int,
    payload: StatusChange,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    prop = listings.change_status(db, Property, property_id, current_user, payload.status, payload.version)
    return {"success": True, "message": "Status updated", "data": prop}


@router.delete("/{property_id}", response_model=MessageResponse)
def delete_property(property_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    listings.delete_listing(db, Property, property_id, current_user)
    return {"success": True, "message": "Property deleted"}
