# ruff: noqa: TC003
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any

import sqlalchemy as sa
from sqlmodel import Field

from shiftcal.models.base import UUIDBase, utc_now


class AuditLog(UUIDBase, table=True):
    """Immutable record of a schedule override or profile write.

    Entries belong to the user whose calendar changed and are read back
    newest first.
    """

    __tablename__ = "audit_log"
    __table_args__ = (
        sa.Index("ix_audit_log_user_created", "user_id", "created_at"),
        sa.Index("ix_audit_entity", "entity_type", "entity_id"),
    )

    user_id: uuid.UUID
    entity_type: str = Field(max_length=20)
    entity_id: uuid.UUID
    action: str = Field(max_length=20)
    before_json: dict[str, Any] | None = Field(default=None, sa_type=sa.JSON)
    after_json: dict[str, Any] | None = Field(default=None, sa_type=sa.JSON)
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_type=sa.DateTime(timezone=True),  # ty: ignore[invalid-argument-type]
        sa_column_kwargs={"server_default": sa.func.now()},
    )
