from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Sequence

from ..core.enums import ShiftStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_mysql_datetime
from .model import Shift
from .repository import ShiftRepository

# Stored as small integers for compatibility with existing rows; the mapping
# does not leak past this module.
STATUS_TO_CODE: dict[ShiftStatus, int] = {
    ShiftStatus.SCHEDULED: 0,
    ShiftStatus.IN_PROGRESS: 1,
    ShiftStatus.COMPLETED: 2,
    ShiftStatus.CANCELLED: 3,
}
CODE_TO_STATUS: dict[int, ShiftStatus] = {code: status for status, code in STATUS_TO_CODE.items()}

_COLUMNS = (
    "shift_id",
    "owner_id",
    "pattern_id",
    "scheduled_start",
    "scheduled_end",
    "actual_start",
    "actual_end",
    "break_minutes",
    "status",
    "paid_minutes",
    "premium_minutes",
    "rate_multiplier",
    "rate_label",
    "is_additional_shift",
    "notes",
    "location",
    "created_at",
    "updated_at",
    "deleted_at",
)
_COLUMN_LIST = ", ".join(_COLUMNS)
_SELECT = f"SELECT {_COLUMN_LIST} FROM shifts"


def row_to_shift(r: dict[str, Any]) -> Shift:
    owner_id = r.get("owner_id")
    return Shift(
        shift_id=str(r["shift_id"]),
        owner_id=int(owner_id) if owner_id is not None else None,
        pattern_id=r.get("pattern_id"),
        scheduled_start=normalize_mysql_datetime(r["scheduled_start"]),
        scheduled_end=normalize_mysql_datetime(r["scheduled_end"]),
        actual_start=normalize_mysql_datetime(r.get("actual_start")),
        actual_end=normalize_mysql_datetime(r.get("actual_end")),
        break_minutes=int(r.get("break_minutes") or 0),
        status=CODE_TO_STATUS.get(int(r.get("status") or 0), ShiftStatus.SCHEDULED),
        paid_minutes=int(r.get("paid_minutes") or 0),
        premium_minutes=int(r.get("premium_minutes") or 0),
        rate_multiplier=float(r.get("rate_multiplier") or 1.0),
        rate_label=r.get("rate_label"),
        is_additional_shift=bool(r.get("is_additional_shift")),
        notes=r.get("notes"),
        location=r.get("location"),
        created_at=normalize_mysql_datetime(r.get("created_at")),
        updated_at=normalize_mysql_datetime(r.get("updated_at")),
        deleted_at=normalize_mysql_datetime(r.get("deleted_at")),
    )


def shift_to_params(shift: Shift) -> tuple[Any, ...]:
    return (
        shift.shift_id,
        shift.owner_id,
        shift.pattern_id,
        shift.scheduled_start,
        shift.scheduled_end,
        shift.actual_start,
        shift.actual_end,
        int(shift.break_minutes),
        STATUS_TO_CODE[shift.status],
        int(shift.paid_minutes),
        int(shift.premium_minutes),
        float(shift.rate_multiplier),
        shift.rate_label,
        1 if shift.is_additional_shift else 0,
        shift.notes,
        shift.location,
        shift.created_at,
        shift.updated_at,
        shift.deleted_at,
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_range(self, start: datetime, end: datetime) -> Sequence[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                {_SELECT}
                WHERE deleted_at IS NULL AND scheduled_start BETWEEN %s AND %s
                ORDER BY scheduled_start
                """,
                (start, end),
            )
            return [row_to_shift(r) for r in fetchall(cur)]

    def get_by_id(self, shift_id: str) -> Optional[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"{_SELECT} WHERE shift_id=%s", (shift_id,))
            r = fetchone(cur)
            if not r:
                return None
            return row_to_shift(r)

    def upsert(self, shift: Shift) -> Shift:
        placeholders = ", ".join(["%s"] * len(_COLUMNS))
        updates = ", ".join(f"{c}=VALUES({c})" for c in _COLUMNS if c != "shift_id")
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO shifts ({_COLUMN_LIST})
                VALUES ({placeholders})
                ON DUPLICATE KEY UPDATE {updates}
                """,
                shift_to_params(shift),
            )
        return shift
