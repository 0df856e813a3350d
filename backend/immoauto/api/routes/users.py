from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from immoauto.core.database import get_db
from immoauto.core.deps import get_current_user
from immoauto.models.user import User
from immoauto.schemas.common import ApiResponse, CamelModel, MessageResponse
from immoauto.schemas.property import PropertyOut
from immoauto.schemas.user import (
    ListingCounts,
    NotificationPreferencesOut,
    NotificationPreferencesUpdate,
    PasswordChange,
    UserOut,
    UserProfile,
    UserUpdate,
)
from immoauto.schemas.vehicle import VehicleOut
from immoauto.services import users as user_service

router = APIRouter(prefix="/users", tags=["users"])


class UserListings(CamelModel):
    properties: list[PropertyOut]
    vehicles: list[VehicleOut]


@router.put("/me/password", response_model=MessageResponse)
def change_password(
    payload: PasswordChange,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    user_service.change_password(db, current_user, payload.current_password, payload.new_password)
    return {"success": True, "message": "Password updated"}


@router.get("/me/notification-preferences", response_model=ApiResponse[NotificationPreferencesOut])
def get_notification_preferences(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return {"success": True, "data": user_service.notification_preferences(db, current_user)}


@router.put("/me/notification-preferences", response_model=ApiResponse[NotificationPreferencesOut])
def update_notification_preferences(
    payload: NotificationPreferencesUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    prefs = user_service.update_notification_preferences(db, current_user, payload.model_dump(exclude_unset=True))
    return {"success": True, "message": "Preferences updated", "data": prefs}


@router.get("/{user_id}", response_model=ApiResponse[UserProfile])
def get_user(user_id: int, db: Session = Depends(get_db)):
    user = user_service.get_user(db, user_id)
    profile = UserProfile.model_validate(user).model_copy(
        update={"counts": ListingCounts(**user_service.listing_counts(db, user.id))}
    )
    return {"success": True, "data": profile}


@router.put("/{user_id}", response_model=ApiResponse[UserOut])
def update_user(
    user_id: int,
    payload: UserUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    user = user_service.update_user(db, user_id, current_user, payload.model_dump(exclude_unset=True))
    return {"success": True, "message": "Profile updated", "data": user}


@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(user_id: int, current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    user_service.delete_user(db, user_id, current_user)
    return {"success": True, "message": "Account deleted"}


@router.get("/{user_id}/listings", response_model=ApiResponse[UserListings])
def user_listings(user_id: int, db: Session = Depends(get_db)):
    properties, vehicles = user_service.user_listings(db, user_id)
    return {"success": True, "data": {"properties": properties, "vehicles": vehicles}}
