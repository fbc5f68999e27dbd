from datetime import datetime, timezone
from http import HTTPStatus
from typing import Any

from fastapi import status


class ConfigurationError(RuntimeError):
    """Raised when the authorization model references something undeclared.

    This is a programmer or deployment error. It is never translated into a
    client-facing 4xx and is never recovered from.
    """


class AppError(Exception):
    code: str = "APP_ERROR"
    message: str = "Application error"
    status_code: int = status.HTTP_400_BAD_REQUEST
    details: Any | None = None

    def __init__(
        self,
        message: str | None = None,
        *,
        code: str | None = None,
        status_code: int | None = None,
        details: Any | None = None,
    ):
        if message is not None:
            self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        if details is not None:
            self.details = details

        super().__init__(self.message)


class ValidationError(AppError):
    code = "VALIDATION_ERROR"
    message = "Validation error"
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(AppError):
    code = "NOT_FOUND"
    message = "Resource not found"
    status_code = status.HTTP_404_NOT_FOUND


class AuthError(AppError):
    code = "AUTH_ERROR"
    message = "Authentication failed"
    status_code = status.HTTP_401_UNAUTHORIZED


class PrincipalMissing(AuthError):
    code = "PRINCIPAL_MISSING"
    message = "Authentication required"


class PermissionError(AppError):  # type: ignore[override]
    code = "PERMISSION_DENIED"
    message = "Insufficient permissions"
    status_code = status.HTTP_403_FORBIDDEN


class _AuthorizationDenied(PermissionError):
    def __init__(self, permission: str | None, principal_id: Any | None = None):
        self.permission = permission
        self.principal_id = principal_id
        # The client only ever learns which permission was required.
        if permission:
            super().__init__(f"{PermissionError.message}: {permission}")
        else:
            super().__init__(PermissionError.message)


class InsufficientPermission(_AuthorizationDenied):
    code = "INSUFFICIENT_PERMISSION"


class ScopeViolation(_AuthorizationDenied):
    code = "SCOPE_VIOLATION"


class ConflictError(AppError):
    code = "CONFLICT_ERROR"
    message = "Resource conflict"
    status_code = status.HTTP_409_CONFLICT


class InternalError(AppError):
    code = "INTERNAL_ERROR"
    message = "Internal server error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


SAFE_HTTP_MESSAGES: dict[int, str] = {
    status.HTTP_400_BAD_REQUEST: ValidationError.message,
    status.HTTP_401_UNAUTHORIZED: AuthError.message,
    status.HTTP_403_FORBIDDEN: PermissionError.message,
    status.HTTP_404_NOT_FOUND: NotFoundError.message,
    status.HTTP_409_CONFLICT: ConflictError.message,
    status.HTTP_422_UNPROCESSABLE_ENTITY: ValidationError.message,
}


def reason_phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Unknown Error"


def error_payload(
    status_code: int,
    message: str,
    path: str,
    request_id: str,
    *,
    timestamp: datetime | None = None,
) -> dict[str, Any]:
    return {
        "timestamp": (timestamp or datetime.now(timezone.utc)).isoformat(),
        "status": status_code,
        "error": reason_phrase(status_code),
        "message": message,
        "path": path,
        "requestId": request_id,
    }
