from sqlmodel import SQLModel

from shiftcal.models.audit import AuditLog
from shiftcal.models.base import TimestampMixin, UUIDBase
from shiftcal.models.enums import (
    LEAVE_KINDS,
    WORK_PATTERN_KINDS,
    AuditAction,
    AuditEntityType,
    LeaveBucket,
    PaymentOption,
    ShiftKind,
    Team,
)
from shiftcal.models.profile import LeaveProfile
from shiftcal.models.schedule import WorkSchedule

__all__ = [
    "LEAVE_KINDS",
    "WORK_PATTERN_KINDS",
    "AuditAction",
    "AuditEntityType",
    "AuditLog",
    "LeaveBucket",
    "LeaveProfile",
    "PaymentOption",
    "SQLModel",
    "ShiftKind",
    "Team",
    "TimestampMixin",
    "UUIDBase",
    "WorkSchedule",
]
