import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from immoauto.core.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from immoauto.core.security import PHONE_RE, get_password_hash, validate_password_strength, verify_password
from immoauto.models.favorite import Favorite
from immoauto.models.listing import Property, Vehicle
from immoauto.models.user import NotificationPreference, User

logger = logging.getLogger(__name__)

WEAK_PASSWORD = "Password must be 8-50 characters with upper case, lower case and a digit"


def get_user(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


def listing_counts(db: Session, user_id: int) -> dict:
    return {
        "properties": db.query(func.count(Property.id)).filter(Property.user_id == user_id).scalar(),
        "vehicles": db.query(func.count(Vehicle.id)).filter(Vehicle.user_id == user_id).scalar(),
        "favorites": db.query(func.count(Favorite.id)).filter(Favorite.user_id == user_id).scalar(),
    }


def check_phone(phone: str | None) -> None:
    if phone and not PHONE_RE.match(phone):
        raise ValidationError("Invalid phone number")


def update_user(db: Session, user_id: int, current: User, data: dict) -> User:
    if user_id != current.id:
        raise ForbiddenError("You can only update your own profile")
    user = get_user(db, user_id)

    email = data.pop("email", None)
    if email is not None:
        email = email.lower()
        if email != user.email:
            taken = db.query(User).filter(User.email == email, User.id != user.id).first()
            if taken:
                raise ConflictError("Email already registered")
            user.email = email

    password = data.pop("password", None)
    if password is not None:
        if not validate_password_strength(password):
            raise ValidationError(WEAK_PASSWORD)
        user.hashed_password = get_password_hash(password)

    check_phone(data.get("phone"))
    for key, value in data.items():
        if value is not None:
            setattr(user, key, value)
    db.commit()
    db.refresh(user)
    return user


def delete_user(db: Session, user_id: int, current: User) -> None:
    if user_id != current.id:
        raise ForbiddenError("You can only delete your own account")
    user = get_user(db, user_id)
    db.delete(user)
    db.commit()
    logger.info("user %s deleted their account", user_id)


def user_listings(db: Session, user_id: int) -> tuple[list[Property], list[Vehicle]]:
    get_user(db, user_id)
    properties = db.query(Property).filter(Property.user_id == user_id).order_by(Property.created_at.desc()).all()
    vehicles = db.query(Vehicle).filter(Vehicle.user_id == user_id).order_by(Vehicle.created_at.desc()).all()
    return properties, vehicles


def change_password(db: Session, user: User, current_password: str, new_password: str) -> None:
    if not verify_password(current_password, user.hashed_password):
        raise ValidationError("Current password is incorrect")
    if not validate_password_strength(new_password):
        raise ValidationError(WEAK_PASSWORD)
    user.hashed_password = get_password_hash(new_password)
    db.commit()


def notification_preferences(db: Session, user: User) -> NotificationPreference:
    prefs = db.query(NotificationPreference).filter(NotificationPreference.user_id == user.id).first()
    if prefs is None:
        prefs = NotificationPreference(user_id=user.id)
        db.add(prefs)
        db.commit()
        db.refresh(prefs)
    return prefs


def update_notification_preferences(db: Session, user: User, data: dict) -> NotificationPreference:
    prefs = notification_preferences(db, user)
    for key, value in data.items():
        if value is not None:
            setattr(prefs, key, value)
    db.commit()
    db.refresh(prefs)
    return prefs
