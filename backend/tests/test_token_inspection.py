from datetime import timedelta

import jwt
import pytest

from ultrabms.config import settings
from ultrabms.security.token_inspection import (
    ExpiredTokenError,
    InvalidTokenError,
    create_access_token,
    validate_access_token,
)


def test_round_trip_returns_subject():
    token = create_access_token("4f1c2b1e-0000-4000-8000-000000000001")
    payload = validate_access_token(token)

    assert payload["sub"] == "4f1c2b1e-0000-4000-8000-000000000001"
    assert payload["type"] == "access"


def test_expired_token_raises():
    token = create_access_token("someone", expires_delta=timedelta(seconds=-5))

    with pytest.raises(ExpiredTokenError):
        validate_access_token(token)


def test_wrong_signature_raises():
    token = jwt.encode({"sub": "someone"}, "other-secret", algorithm=settings.algorithm)

    with pytest.raises(InvalidTokenError):
        validate_access_token(token)


def test_non_string_subject_raises():
    token = jwt.encode({"sub": 42}, settings.secret_key, algorithm=settings.algorithm)

    with pytest.raises(InvalidTokenError):
        validate_access_token(token)
