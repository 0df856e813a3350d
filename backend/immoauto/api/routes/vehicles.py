from typing import Literal

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from immoauto.core.database import get_db
from immoauto.core.deps import get_current_user
from immoauto.models.listing import FuelType, ListingType, Transmission, Vehicle, VehicleType
from immoauto.models.user import User
from immoauto.schemas.common import ApiResponse, MessageResponse, Page
from immoauto.schemas.listing import StatusChange
from immoauto.schemas.vehicle import VehicleCreate, VehicleOut, VehicleUpdate
from immoauto.services import listings
from immoauto.services.pagination import page_body

router = APIRouter(prefix="/vehicles", tags=["vehicles"])


@router.get("", response_model=Page[VehicleOut])
def list_vehicles(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    brand: str | None = None,
    model: str | None = None,
    city: str | None = None,
    min_price: float | None = Query(None, alias="minPrice", ge=0),
    max_price: float | None = Query(None, alias="maxPrice", ge=0),
    min_year: int | None = Query(None, alias="minYear"),
    max_year: int | None = Query(None, alias="maxYear"),
    max_mileage: int | None = Query(None, alias="maxMileage", ge=0),
    fuel_type: FuelType | None = Query(None, alias="fuelType"),
    transmission: Transmission | None = None,
    type: VehicleType | None = None,
    listing_type: ListingType | None = Query(None, alias="listingType"),
    search: str | None = None,
    sort_by: Literal["price", "year", "mileage", "createdAt"] = Query("createdAt", alias="sortBy"),
    sort_order: Literal["asc", "desc"] = Query("desc", alias="sortOrder"),
    db: Session = Depends(get_db),
):
    filters = listings.VehicleFilters(
        brand=brand,
        model=model,
        city=city,
        min_price=min_price,
        max_price=max_price,
        min_year=min_year,
        max_year=max_year,
        max_mileage=max_mileage,
        fuel_type=fuel_type,
        transmission=transmission,
        type=type,
        listing_type=listing_type,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    items, total = listings.list_vehicles(db, filters, page, limit)
    return page_body(items, total, page, limit)


@router.post("", response_model=ApiResponse[VehicleOut], status_code=201)
def create_vehicle(
    payload: VehicleCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    vehicle = listings.create_listing(db, Vehicle, current_user, payload.model_dump())
    return {"success": True, "message": "Vehicle created", "data": vehicle}


@router.get("/{vehicle_id}", response_model=ApiResponse[VehicleOut])
def get_vehicle(vehicle_id: int, db: Session = Depends(get_db)):
    return {"success": True, "data": listings.get_listing(db, Vehicle, vehicle_id, record_view=True)}


@router.put("/{vehicle_id}", response_model=ApiResponse[VehicleOut])
def update_vehicle(
    vehicle_id: int,
    payload: VehicleUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    vehicle = listings.update_listing(db, Vehicle, vehicle_id, current_user, payload.model_dump(exclude_unset=True))
    return {"success": True, "message": "Vehicle updated", "data": vehicle}


@router.patch("/{vehicle_id}/status", response_model=ApiResponse[VehicleOut])
def change_vehicle_status(
    vehicle_id: int,
    payload: StatusChange,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    vehicle = listings.change_status(db, Vehicle, vehicle_id, current_user, payload.status, payload.version)
    return {"success": True, "message": "Status updated", "data": vehicle}


@router.delete("/{vehicle_id}", response_model=MessageResponse)
def delete_vehicle(vehicle_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    listings.delete_listing(db, Vehicle, vehicle_id, current_user)
    return {"success": True, "message": "Vehicle deleted"}
