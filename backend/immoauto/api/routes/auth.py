from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from immoauto.core.database import get_db
from immoauto.core.deps import get_current_user, user_from_token
from immoauto.core.rate_limit import limiter
from immoauto.models.user import User
from immoauto.schemas.auth import AuthData, LoginRequest, RefreshTokenRequest, RegisterRequest, TokenPair
from immoauto.schemas.common import ApiResponse, MessageResponse
from immoauto.schemas.user import ListingCounts, UserProfile
from immoauto.services import auth as auth_service
from immoauto.services.users import listing_counts

router = APIRouter(prefix="/auth", tags=["auth"])


def _client_ip(request: Request) -> str | None:
    return request.client.host if request.client else None


@router.post("/register", response_model=ApiResponse[AuthData], status_code=201)
@limiter.limit("10/minute")
def register(request: Request, payload: RegisterRequest, db: Session = Depends(get_db)):
    user = auth_service.register(
        db,
        email=payload.email,
        password=payload.password,
        name=payload.name,
        phone=payload.phone,
        ip_address=_client_ip(request),
    )
    return {"success": True, "message": "Account created", "data": {"user": user, **auth_service.issue_tokens(user)}}


@router.post("/login", response_model=ApiResponse[AuthData])
@limiter.limit("20/minute")
def login(request: Request, payload: LoginRequest, db: Session = Depends(get_db)):
    user = auth_service.authenticate(db, payload.email, payload.password, _client_ip(request))
    return {"success": True, "message": "Logged in", "data": {"user": user, **auth_service.issue_tokens(user)}}


@router.post("/refresh-token", response_model=ApiResponse[TokenPair])
def refresh_token(payload: RefreshTokenRequest, db: Session = Depends(get_db)):
    user = user_from_token(db, payload.refresh_token, token_type="refresh")
    return {"success": True, "data": auth_service.issue_tokens(user)}


@router.get("/me", response_model=ApiResponse[UserProfile])
def me(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    profile = UserProfile.model_validate(current_user).model_copy(
        update={"counts": ListingCounts(**listing_counts(db, current_user.id))}
    )
    return {"success": True, "data": profile}


@router.post("/logout", response_model=MessageResponse)
def logout(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    auth_service.logout(db, current_user)
    return {"success": True, "message": "Logged out"}
