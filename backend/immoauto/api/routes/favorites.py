from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from immoauto.core.database import get_db
from immoauto.core.deps import get_current_user
from immoauto.models.user import User
from immoauto.schemas.common import ApiResponse, MessageResponse
from immoauto.schemas.favorite import FavoriteCheck, FavoriteCreate, FavoriteList, FavoriteOut
from immoauto.schemas.property import FavoriteProperty, PropertyOut
from immoauto.schemas.vehicle import FavoriteVehicle, VehicleOut
from immoauto.services import favorites as favorite_service

router = APIRouter(prefix="/favorites", tags=["favorites"])


@router.get("", response_model=ApiResponse[FavoriteList])
def list_favorites(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    property_favs, vehicle_favs = favorite_service.list_favorites(db, current_user.id)
    properties = [
        FavoriteProperty.model_validate({**PropertyOut.model_validate(f.property).model_dump(), "favorite_id": f.id})
        for f in property_favs
    ]
    vehicles = [
        FavoriteVehicle.model_validate({**VehicleOut.model_validate(f.vehicle).model_dump(), "favorite_id": f.id})
        for f in vehicle_favs
    ]
    return {"success": True, "data": {"properties": properties, "vehicles": vehicles}}


@router.post("", response_model=ApiResponse[FavoriteOut], status_code=201)
def add_favorite(
    payload: FavoriteCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    favorite = favorite_service.add_favorite(db, current_user.id, payload.property_id, payload.vehicle_id)
    return {"success": True, "message": "Added to favorites", "data": favorite}


@router.get("/check", response_model=ApiResponse[FavoriteCheck])
def check_favorite(
    property_id: int | None = Query(None, alias="propertyId"),
    vehicle_id: int | None = Query(None, alias="vehicleId"),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    favorite = favorite_service.find_favorite(db, current_user.id, property_id, vehicle_id)
    return {
        "success": True,
        "data": {"is_favorite": favorite is not None, "favorite_id": favorite.id if favorite else None},
    }


@router.delete("/{favorite_id}", response_model=MessageResponse)
def remove_favorite(favorite_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    favorite_service.remove_favorite(db, current_user.id, favorite_id)
    return {"success": True, "message": "Removed from favorites"}
