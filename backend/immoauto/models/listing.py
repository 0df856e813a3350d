from datetime import datetime
import enum

from sqlalchemy import JSON, DateTime, Enum, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from immoauto.core.database import Base


class ListingKind(str, enum.Enum):
    property = "property"
    vehicle = "vehicle"


class ListingStatus(str, enum.Enum):
    draft = "DRAFT"
    active = "ACTIVE"
    sold = "SOLD"
    rented = "RENTED"
    inactive = "INACTIVE"


class ListingType(str, enum.Enum):
    sale = "SALE"
    rent = "RENT"


class PropertyType(str, enum.Enum):
    apartment = "APARTMENT"
    house = "HOUSE"
    villa = "VILLA"
    studio = "STUDIO"
    loft = "LOFT"
    land = "LAND"
    commercial = "COMMERCIAL"
    office = "OFFICE"


class VehicleType(str, enum.Enum):
    car = "CAR"
    motorcycle = "MOTORCYCLE"
    truck = "TRUCK"
    van = "VAN"
    suv = "SUV"
    scooter = "SCOOTER"


class FuelType(str, enum.Enum):
    petrol = "PETROL"
    diesel = "DIESEL"
    electric = "ELECTRIC"
    hybrid = "HYBRID"
    lpg = "LPG"


class Transmission(str, enum.Enum):
    manual = "MANUAL"
    automatic = "AUTOMATIC"
    semi_automatic = "SEMI_AUTOMATIC"


class Property(Base):
    __tablename__ = "properties"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True, nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    address: Mapped[str] = mapped_column(String(200), nullable=False)
    city: Mapped[str] = mapped_column(String(100), index=True, nullable=False)
    zip_code: Mapped[str] = mapped_column(String(20), nullable=False)
    country: Mapped[str] = mapped_column(String(100), default="France", nullable=False)
    latitude: Mapped[float | None] = mapped_column(Float)
    longitude: Mapped[float | None] = mapped_column(Float)
    surface: Mapped[float] = mapped_column(Float, nullable=False)
    rooms: Mapped[int] = mapped_column(Integer, nullable=False)
    bedrooms: Mapped[int] = mapped_column(Integer, nullable=False)
    bathrooms: Mapped[int] = mapped_column(Integer, nullable=False)
    type: Mapped[PropertyType] = mapped_column(Enum(PropertyType), nullable=False)
    listing_type: Mapped[ListingType] = mapped_column(Enum(ListingType), nullable=False)
    status: Mapped[ListingStatus] = mapped_column(Enum(ListingStatus), default=ListingStatus.draft, index=True, nullable=False)
    features: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Status changes are compare-and-swap on this column.
    __mapper_args__ = {"version_id_col": version}

    owner = relationship("User", back_populates="properties")
    images = relationship("Image", back_populates="property", cascade="all, delete-orphan", order_by="Image.id")
    views = relationship("ListingView", cascade="all, delete-orphan")
    favorites = relationship("Favorite", back_populates="property", cascade="all, delete-orphan")
    conversations = relationship("Conversation", back_populates="property", cascade="all, delete-orphan")
    reports = relationship("Report", back_populates="property", cascade="all, delete-orphan")

    kind = ListingKind.property


class Vehicle(Base):
    __tablename__ = "vehicles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True, nullable=False)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    brand: Mapped[str] = mapped_column(String(50), index=True, nullable=False)
    model: Mapped[str] = mapped_column(String(50), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    mileage: Mapped[int] = mapped_column(Integer, nullable=False)
    fuel_type: Mapped[FuelType] = mapped_column(Enum(FuelType), nullable=False)
    transmission: Mapped[Transmission] = mapped_column(Enum(Transmission), nullable=False)
    color: Mapped[str] = mapped_column(String(50), nullable=False)
    doors: Mapped[int] = mapped_column(Integer, nullable=False)
    seats: Mapped[int] = mapped_column(Integer, nullable=False)
    power: Mapped[int | None] = mapped_column(Integer)
    type: Mapped[VehicleType] = mapped_column(Enum(VehicleType), nullable=False)
    listing_type: Mapped[ListingType] = mapped_column(Enum(ListingType), nullable=False)
    city: Mapped[str] = mapped_column(String(100), index=True, nullable=False)
    status: Mapped[ListingStatus] = mapped_column(Enum(ListingStatus), default=ListingStatus.draft, index=True, nullable=False)
    features: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    owner = relationship("User", back_populates="vehicles")
    images = relationship("Image", back_populates="vehicle", cascade="all, delete-orphan", order_by="Image.id")
    views = relationship("ListingView", cascade="all, delete-orphan")
    favorites = relationship("Favorite", back_populates="vehicle", cascade="all, delete-orphan")
    conversations = relationship("Conversation", back_populates="vehicle", cascade="all, delete-orphan")
    reports = relationship("Report", back_populates="vehicle", cascade="all, delete-orphan")

    kind = ListingKind.vehicle


class Image(Base):
    __tablename__ = "images"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    data: Mapped[str] = mapped_column(Text, nullable=False)
    mime_type: Mapped[str] = mapped_column(String(40), nullable=False)
    property_id: Mapped[int | None] = mapped_column(ForeignKey("properties.id"), index=True)
    vehicle_id: Mapped[int | None] = mapped_column(ForeignKey("vehicles.id"), index=True)
    uploaded_by: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"))
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    property = relationship("Property", back_populates="images")
    vehicle = relationship("Vehicle", back_populates="images")


class ListingView(Base):
    __tablename__ = "listing_views"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    property_id: Mapped[int | None] = mapped_column(ForeignKey("properties.id"), index=True)
    vehicle_id: Mapped[int | None] = mapped_column(ForeignKey("vehicles.id"), index=True)
    viewed_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True, nullable=False)
