from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt

from ..config import settings


class InvalidTokenError(Exception):
    """Raised when a token cannot be parsed or is malformed."""


class ExpiredTokenError(Exception):
    """Raised when a token has expired."""


def _parse_token_payload(token: str) -> Dict[str, Any]:
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except jwt.ExpiredSignatureError as exc:
        raise ExpiredTokenError from exc
    except jwt.InvalidTokenError as exc:
        raise InvalidTokenError from exc


def validate_access_token(token: str) -> Dict[str, Any]:
    payload = _parse_token_payload(token)

    subject = payload.get("sub")
    if not isinstance(subject, str):
        raise InvalidTokenError()

    return payload


def create_access_token(subject: str, expires_delta: timedelta | None = None) -> str:
    """Mint an access token. Tokens are normally issued by the auth service;
    this is used by local tooling and tests."""
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    payload = {"sub": subject, "exp": expire, "type": "access"}
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)
