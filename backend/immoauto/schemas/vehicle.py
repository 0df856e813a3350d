from datetime import datetime

from pydantic import Field

from immoauto.models.listing import FuelType, ListingStatus, ListingType, Transmission, VehicleType
from immoauto.schemas.common import CamelModel
from immoauto.schemas.listing import ImageOut
from immoauto.schemas.user import OwnerOut

MAX_YEAR = datetime.utcnow().year + 1


class VehicleCreate(CamelModel):
    title: str = Field(min_length=5, max_length=200)
    description: str = Field(min_length=20, max_length=5000)
    price: float = Field(ge=0)
    brand: str = Field(min_length=1, max_length=50)
    model: str = Field(min_length=1, max_length=50)
    year: int = Field(ge=1900, le=MAX_YEAR)
    mileage: int = Field(ge=0)
    fuel_type: FuelType
    transmission: Transmission
    color: str = Field(min_length=1, max_length=50)
    doors: int = Field(ge=1, le=10)
    seats: int = Field(ge=1, le=60)
    power: int | None = Field(default=None, ge=0)
    type: VehicleType
    listing_type: ListingType
    city: str = Field(min_length=2, max_length=100)
    features: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)


class VehicleUpdate(CamelModel):
    title: str | None = Field(default=None, min_length=5, max_length=200)
    description: str | None = Field(default=None, min_length=20, max_length=5000)
    price: float | None = Field(default=None, ge=0)
    brand: str | None = Field(default=None, min_length=1, max_length=50)
    model: str | None = Field(default=None, min_length=1, max_length=50)
    year: int | None = Field(default=None, ge=1900, le=MAX_YEAR)
    mileage: int | None = Field(default=None, ge=0)
    fuel_type: FuelType | None = None
    transmission: Transmission | None = None
    color: str | None = Field(default=None, min_length=1, max_length=50)
    doors: int | None = Field(default=None, ge=1, le=10)
    seats: int | None = Field(default=None, ge=1, le=60)
    power: int | None = Field(default=None, ge=0)
    type: VehicleType | None = None
    listing_type: ListingType | None = None
    city: str | None = Field(default=None, min_length=2, max_length=100)
    status: ListingStatus | None = None
    features: list[str] | None = None
    images: list[str] | None = None


class VehicleOut(CamelModel):
    id: int
    user_id: int
    title: str
    description: str
    price: float
    brand: str
    model: str
    year: int
    mileage: int
    fuel_type: FuelType
    transmission: Transmission
    color: str
    doors: int
    seats: int
    power: int | None = None
    type: VehicleType
    listing_type: ListingType
    city: str
    status: ListingStatus
    features: list[str]
    version: int
    images: list[ImageOut] = []
    owner: OwnerOut | None = None
    created_at: datetime
    updated_at: datetime


class FavoriteVehicle(VehicleOut):
    favorite_id: int
