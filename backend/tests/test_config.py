import pytest
from pydantic import ValidationError

from immoauto.core.config import Settings


def test_unread_scope_accepts_known_values():
    assert Settings().UNREAD_COUNT_SCOPE == "seller"
    assert Settings(UNREAD_COUNT_SCOPE="participant").UNREAD_COUNT_SCOPE == "participant"


def test_unread_scope_rejects_unknown_value():
    with pytest.raises(ValidationError):
        Settings(UNREAD_COUNT_SCOPE="everyone")


def test_production_requires_strong_secrets():
    with pytest.raises(ValidationError):
        Settings(ENVIRONMENT="production", ENABLE_API_DOCS=False, SECRET_KEY="short", REFRESH_SECRET_KEY="short")
