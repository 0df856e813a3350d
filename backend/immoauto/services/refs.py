from dataclasses import dataclass

from sqlalchemy.orm import Session

from immoauto.core.errors import NotFoundError, ValidationError
from immoauto.models.listing import ListingKind, Property, Vehicle


@dataclass(frozen=True)
class PropertyRef:
    id: int


@dataclass(frozen=True)
class VehicleRef:
    id: int


ListingRef = PropertyRef | VehicleRef


def listing_ref(property_id: int | None, vehicle_id: int | None) -> ListingRef:
    if property_id is None and vehicle_id is None:
        raise ValidationError("Either propertyId or vehicleId is required")
    if property_id is not None and vehicle_id is not None:
        raise ValidationError("Provide either propertyId or vehicleId, not both")
    if property_id is not None:
        return PropertyRef(property_id)
    return VehicleRef(vehicle_id)


def ref_for(kind: ListingKind, listing_id: int) -> ListingRef:
    match kind:
        case ListingKind.property:
            return PropertyRef(listing_id)
        case ListingKind.vehicle:
            return VehicleRef(listing_id)


def model_for(ref: ListingRef) -> type[Property] | type[Vehicle]:
    match ref:
        case PropertyRef():
            return Property
        case VehicleRef():
            return Vehicle


def ref_columns(ref: ListingRef) -> dict:
    """Column values pointing a favorite, report or conversation at ``ref``."""
    match ref:
        case PropertyRef(id=listing_id):
            return {"property_id": listing_id}
        case VehicleRef(id=listing_id):
            return {"vehicle_id": listing_id}


def ref_filter(model, ref: ListingRef):
    match ref:
        case PropertyRef(id=listing_id):
            return model.property_id == listing_id
        case VehicleRef(id=listing_id):
            return model.vehicle_id == listing_id


def load_listing(db: Session, ref: ListingRef) -> Property | Vehicle:
    match ref:
        case PropertyRef(id=listing_id):
            listing = db.get(Property, listing_id)
            missing = "Property not found"
        case VehicleRef(id=listing_id):
            listing = db.get(Vehicle, listing_id)
            missing = "Vehicle not found"
    if listing is None:
        raise NotFoundError(missing)
    return listing


def listing_model(kind: ListingKind) -> type[Property] | type[Vehicle]:
    return model_for(ref_for(kind, 0))
