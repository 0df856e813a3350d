from datetime import datetime

from immoauto.schemas.common import CamelModel
from immoauto.schemas.property import FavoriteProperty
from immoauto.schemas.vehicle import FavoriteVehicle


class FavoriteCreate(CamelModel):
    property_id: int | None = None
    vehicle_id: int | None = None


class FavoriteOut(CamelModel):
    id: int
    user_id: int
    property_id: int | None = None
    vehicle_id: int | None = None
    created_at: datetime


class FavoriteList(CamelModel):
    properties: list[FavoriteProperty]
    vehicles: list[FavoriteVehicle]


class FavoriteCheck(CamelModel):
    is_favorite: bool
    favorite_id: int | None = None
