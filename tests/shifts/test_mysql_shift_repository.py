from datetime import datetime
from decimal import Decimal

from src.shiftpay.shiftpay.core.enums import ShiftStatus
from src.shiftpay.shiftpay.shifts.model import Shift
from src.shiftpay.shiftpay.shifts.mysql_shift_repository import MySQLShiftRepository, row_to_shift, shift_to_params


class FakeCursor:
    def __init__(self, rows):
        self.rows = list(rows)
        self.executed = []

    def execute(self, sql, params=None):
        self.executed.append((sql, params))

    def fetchone(self):
        return self.rows[0] if self.rows else None

    def fetchall(self):
        return self.rows

    def close(self):
        pass


class FakeConnection:
    def __init__(self, cursor):
        self._cursor = cursor
        self.committed = False

    def cursor(self, dictionary=False):
        return self._cursor

    def commit(self):
        self.committed = True

    def rollback(self):
        pass

    def close(self):
        pass


class FakeConnFactory:
    def __init__(self, rows=()):
        self.cursor = FakeCursor(rows)
        self.connection = FakeConnection(self.cursor)

    def connect(self):
        return self.connection


def _row(**overrides):
    row = {
        "shift_id": "5b1f7c9e-0000-4000-8000-000000000001",
        "owner_id": 1,
        "pattern_id": None,
        "scheduled_start": datetime(2024, 1, 10, 9, 0),
        "scheduled_end": datetime(2024, 1, 10, 17, 0),
        "actual_start": "2024-01-10 09:02:00",
        "actual_end": None,
        "break_minutes": 30,
        "status": 1,
        "paid_minutes": 0,
        "premium_minutes": 0,
        "rate_multiplier": Decimal("1.50"),
        "rate_label": None,
        "is_additional_shift": 1,
        "notes": None,
        "location": None,
        "created_at": None,
        "updated_at": None,
        "deleted_at": None,
    }
    row.update(overrides)
    return row


def test_row_mapping_decodes_status_codes_and_types():
    shift = row_to_shift(_row())

    assert shift.status == ShiftStatus.IN_PROGRESS
    assert shift.actual_start == datetime(2024, 1, 10, 9, 2)
    assert shift.rate_multiplier == 1.5
    assert shift.is_additional_shift is True
    assert shift.rate_display_label == "1.5x"


def test_status_codes_round_trip():
    for code, status in enumerate(
        [ShiftStatus.SCHEDULED, ShiftStatus.IN_PROGRESS, ShiftStatus.COMPLETED, ShiftStatus.CANCELLED]
    ):
        shift = row_to_shift(_row(status=code))
        assert shift.status == status
        assert shift_to_params(shift)[8] == code


def test_get_by_id_returns_none_when_missing():
    assert MySQLShiftRepository(FakeConnFactory()).get_by_id("nope") is None


def test_list_range_filters_deleted_rows_in_sql():
    factory = FakeConnFactory([_row()])
    shifts = MySQLShiftRepository(factory).list_range(datetime(2024, 1, 1), datetime(2024, 1, 31))

    sql, params = factory.cursor.executed[0]
    assert "deleted_at IS NULL" in sql
    assert params == (datetime(2024, 1, 1), datetime(2024, 1, 31))
    assert len(shifts) == 1


def test_upsert_writes_integer_status():
    factory = FakeConnFactory()
    shift = Shift(
        scheduled_start=datetime(2024, 1, 10, 9),
        scheduled_end=datetime(2024, 1, 10, 17),
        status=ShiftStatus.COMPLETED,
    )

    MySQLShiftRepository(factory).upsert(shift)

    sql, params = factory.cursor.executed[0]
    assert "ON DUPLICATE KEY UPDATE" in sql
    assert params[0] == shift.shift_id
    assert params[8] == 2
    assert factory.connection.committed
