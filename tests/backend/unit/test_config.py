import pytest
from pydantic import ValidationError

from app.config import settings


def test_settings_are_immutable():
    with pytest.raises(ValidationError):
        settings.jwt_secret = "changed-at-runtime"


def test_token_defaults():
    assert settings.jwt_algorithm == "HS256"
    assert settings.token_header == "x-auth-token"
