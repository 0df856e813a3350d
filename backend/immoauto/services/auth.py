import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy.orm import Session

from immoauto.core.config import get_settings
from immoauto.core.errors import ConflictError, ForbiddenError, LockedError, UnauthorizedError, ValidationError
from immoauto.core.security import (
    create_access_token,
    create_refresh_token,
    get_password_hash,
    validate_password_strength,
    verify_password,
)
from immoauto.models.user import User, UserStatus
from immoauto.services.audit import audit_event
from immoauto.services.users import WEAK_PASSWORD, check_phone

logger = logging.getLogger(__name__)


def issue_tokens(user: User) -> dict:
    return {
        "access_token": create_access_token(str(user.id), user.session_version),
        "refresh_token": create_refresh_token(str(user.id), user.session_version),
    }


def register(db: Session, email: str, password: str, name: str, phone: str | None, ip_address: str | None) -> User:
    email = email.lower()
    if db.query(User).filter(User.email == email).first():
        raise ConflictError("Email already registered")
    if not validate_password_strength(password):
        raise ValidationError(WEAK_PASSWORD)
    check_phone(phone)

    user = User(email=email, name=name, phone=phone, hashed_password=get_password_hash(password))
    db.add(user)
    db.commit()
    db.refresh(user)
    audit_event(db, "register", "user", actor_id=user.id, target_id=user.id, ip_address=ip_address)
    return user


def authenticate(db: Session, email: str, password: str, ip_address: str | None) -> User:
    settings = get_settings()
    user = db.query(User).filter(User.email == email.lower()).first()
    now = datetime.now(timezone.utc).replace(tzinfo=None)

    if not user:
        raise UnauthorizedError("Invalid email or password")

    if user.locked_until and user.locked_until > now:
        raise LockedError("Account is temporarily locked")

    if not verify_password(password, user.hashed_password):
        user.failed_login_attempts += 1
        if user.failed_login_attempts >= settings.LOGIN_MAX_ATTEMPTS:
            user.locked_until = now + timedelta(minutes=settings.LOGIN_LOCK_MINUTES)
            user.failed_login_attempts = 0
            logger.warning("user %s locked after repeated login failures", user.id)
        db.commit()
        audit_event(db, "login_failed", "user", actor_id=user.id, target_id=user.id, ip_address=ip_address)
        raise UnauthorizedError("Invalid email or password")

    if user.status != UserStatus.active:
        raise ForbiddenError(f"Account {user.status.value.lower()}")

    user.failed_login_attempts = 0
    user.locked_until = None
    db.commit()
    audit_event(db, "login_success", "user", actor_id=user.id, target_id=user.id, ip_address=ip_address)
    return user


def logout(db: Session, user: User) -> None:
    user.session_version += 1
    db.commit()
