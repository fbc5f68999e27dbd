from datetime import datetime, timezone

from ultrabms.errors import (
    AppError,
    InsufficientPermission,
    PermissionError,
    PrincipalMissing,
    ScopeViolation,
    error_payload,
    reason_phrase,
)


def test_payload_shape():
    timestamp = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

    payload = error_payload(403, "Insufficient permissions: user:read", "/api/v1/users", "abc", timestamp=timestamp)

    assert payload == {
        "timestamp": "2026-01-02T03:04:05+00:00",
        "status": 403,
        "error": "Forbidden",
        "message": "Insufficient permissions: user:read",
        "path": "/api/v1/users",
        "requestId": "abc",
    }


def test_unknown_status_has_generic_phrase():
    assert reason_phrase(599) == "Unknown Error"


def test_both_denials_share_status_and_message_format():
    insufficient = InsufficientPermission("vendor:delete")
    scope = ScopeViolation("vendor:delete")

    assert isinstance(insufficient, PermissionError)
    assert isinstance(scope, PermissionError)
    assert insufficient.status_code == scope.status_code == 403
    assert insufficient.message == scope.message == "Insufficient permissions: vendor:delete"
    assert insufficient.code != scope.code


def test_principal_missing_is_401_app_error():
    exc = PrincipalMissing()
    assert isinstance(exc, AppError)
    assert exc.status_code == 401


def test_denial_without_permission_key_uses_generic_message():
    exc = InsufficientPermission(None)

    assert exc.message == "Insufficient permissions"
    assert exc.status_code == 403
