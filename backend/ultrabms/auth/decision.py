from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .catalog import Scope


class DenyReason(str, Enum):
    INSUFFICIENT_PERMISSION = "insufficient_permission"
    SCOPE_VIOLATION = "scope_violation"


@dataclass(frozen=True)
class Decision:
    """Outcome of an authorization check.

    ``scope`` is set on allow. When it is anything but ``Scope.ALL`` and no
    target was given, the caller must filter its result set by it.
    """

    allowed: bool
    permission: str
    reason: DenyReason | None = None
    scope: Scope | None = None

    @classmethod
    def allow(cls, permission: str, scope: Scope | None = None) -> "Decision":
        return cls(allowed=True, permission=permission, scope=scope)

    @classmethod
    def deny(cls, permission: str, reason: DenyReason) -> "Decision":
        return cls(allowed=False, permission=permission, reason=reason)

    def __bool__(self) -> bool:
        return self.allowed
