from datetime import datetime

from pydantic import Field

from immoauto.models.listing import ListingStatus, ListingType, PropertyType
from immoauto.schemas.common import CamelModel
from immoauto.schemas.listing import ImageOut
from immoauto.schemas.user import OwnerOut


class PropertyCreate(CamelModel):
    title: str = Field(min_length=5, max_length=200)
    description: str = Field(min_length=20, max_length=5000)
    price: float = Field(ge=0)
    address: str = Field(min_length=5, max_length=200)
    city: str = Field(min_length=2, max_length=100)
    zip_code: str = Field(min_length=2, max_length=20)
    country: str = Field(default="France", max_length=100)
    latitude: float | None = None
    longitude: float | None = None
    surface: float = Field(ge=1)
    rooms: int = Field(ge=1, le=50)
    bedrooms: int = Field(ge=0, le=20)
    bathrooms: int = Field(ge=0, le=10)
    type: PropertyType
    listing_type: ListingType
    features: list[str] = Field(default_factory=list)
    images: list[str] = Field(default_factory=list)


class PropertyUpdate(CamelModel):
    title: str | None = Field(default=None, min_length=5, max_length=200)
    description: str | None = Field(default=None, min_length=20, max_length=5000)
    price: float | None = Field(default=None, ge=0)
    address: str | None = Field(default=None, min_length=5, max_length=200)
    city: str | None = Field(default=None, min_length=2, max_length=100)
    zip_code: str | None = Field(default=None, min_length=2, max_length=20)
    country: str | None = Field(default=None, max_length=100)
    latitude: float | None = None
    longitude: float | None = None
    surface: float | None = Field(default=None, ge=1)
    rooms: int | None = Field(default=None, ge=1, le=50)
    bedrooms: int | None = Field(default=None, ge=0, le=20)
    bathrooms: int | None = Field(default=None, ge=0, le=10)
    type: PropertyType | None = None
    listing_type: ListingType | None = None
    status: ListingStatus | None = None
    features: list[str] | None = None
    images: list[str] | None = None


class PropertyOut(CamelModel):
    id: int
    user_id: int
    title: str
    description: str
    price: float
    address: str
    city: str
    zip_code: str
    country: str
    latitude: float | None = None
    longitude: float | None = None
    surface: float
    rooms: int
    bedrooms: int
    bathrooms: int
    type: PropertyType
    listing_type: ListingType
    status: ListingStatus
    features: list[str]
    version: int
    images: list[ImageOut] = []
    owner: OwnerOut | None = None
    created_at: datetime
    updated_at: datetime


class FavoriteProperty(PropertyOut):
    favorite_id: int
