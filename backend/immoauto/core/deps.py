from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from sqlalchemy.orm import Session

from immoauto.core.database import get_db
from immoauto.core.security import decode_token
from immoauto.models.user import User, UserRole, UserStatus

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")


def user_from_token(db: Session, token: str, token_type: str = "access") -> User:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired token",
    )
    try:
        payload = decode_token(token, token_type)
    except JWTError:
        raise credentials_exception

    if payload.get("typ") != token_type:
        raise credentials_exception
    user_id = payload.get("sub")
    token_session_version = payload.get("sv")
    if not user_id or token_session_version is None:
        raise credentials_exception

    user = db.get(User, int(user_id))
    if not user:
        raise HTTPException(status_code=401, detail="User not found")
    if user.session_version != int(token_session_version):
        raise HTTPException(status_code=401, detail="Session revoked")
    if user.status != UserStatus.active:
        raise HTTPException(status_code=403, detail=f"Account {user.status.value.lower()}")
    return user


def get_current_user(db: Session = Depends(get_db), token: str = Depends(oauth2_scheme)) -> User:
    return user_from_token(db, token)


def require_roles(*roles: UserRole):
    def role_dependency(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in roles:
            raise HTTPException(status_code=403, detail="Insufficient permissions")
        return current_user

    return role_dependency
