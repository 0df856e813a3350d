from pydantic import EmailStr, Field

from immoauto.schemas.common import CamelModel
from immoauto.schemas.user import UserOut


class RegisterRequest(CamelModel):
    email: EmailStr
    password: str
    name: str = Field(min_length=2, max_length=100)
    phone: str | None = None


class LoginRequest(CamelModel):
    email: EmailStr
    password: str


class RefreshTokenRequest(CamelModel):
    refresh_token: str


class TokenPair(CamelModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class AuthData(TokenPair):
    user: UserOut
