import uuid
from datetime import datetime

from sqlalchemy import JSON, CheckConstraint, DateTime, ForeignKey, String, Text, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, validates

from .base import Base

AUDIT_REASONS = frozenset({"INSUFFICIENT_PERMISSION", "SCOPE_VIOLATION"})


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    actor_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    actor_role: Mapped[str | None] = mapped_column(String(50), index=True)
    action: Mapped[str] = mapped_column(
        String(100), nullable=False, index=True
    )  # e.g. 'permission_denied'
    entity_type: Mapped[str] = mapped_column(
        String(100), nullable=False, index=True
    )  # e.g. 'permission'
    entity_id: Mapped[str] = mapped_column(
        String(255), nullable=False, index=True
    )  # permission key or entity UUID as string
    reason: Mapped[str | None] = mapped_column(String(50))
    details: Mapped[dict | None] = mapped_column(JSON)
    request_id: Mapped[str | None] = mapped_column(String(64))
    ip_address: Mapped[str | None] = mapped_column(String(45))  # IPv4/IPv6
    user_agent: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False, index=True
    )

    __table_args__ = (
        CheckConstraint(
            "reason IS NULL OR reason IN ('INSUFFICIENT_PERMISSION', 'SCOPE_VIOLATION')",
            name="valid_audit_reason",
        ),
    )

    @validates("reason")
    def validate_reason(self, key: str, value: str | None) -> str | None:
        if value is not None and value not in AUDIT_REASONS:
            raise ValueError(
                f"Invalid audit reason '{value}'. "
                f"Must be one of: {', '.join(sorted(AUDIT_REASONS))}"
            )
        return value
