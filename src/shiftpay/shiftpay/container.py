from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from .common.clock import Clock, SystemClock
from .core.constants import DEFAULT_APPROACHING_RATIO, DEFAULT_EXCEEDED_RATIO, DEFAULT_OVERTIME_THRESHOLD_HOURS
from .core.enums import Weekday
from .database.connection import DBConfig, DatabaseConnection
from .forecast.service import OvertimeForecaster
from .patterns.resolver import PatternResolver
from .patterns.service import PatternService
from .payroll.aggregator import PayPeriodAggregator
from .payroll.calculator.standard_calculator import StandardPaidMinutesCalculator
from .payroll.rules import PayRuleset
from .payroll.service import PayPeriodService
from .shifts.generator import ShiftGenerator
from .shifts.lifecycle import ShiftLifecycle
from .shifts.memory_repository import InMemoryShiftRepository
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.overtime.factory import OvertimeStrategyFactory
from .shifts.repository import ShiftRepository
from .shifts.service import ShiftService
from .shifts.validator import ShiftValidator


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    clock: Clock
    ruleset: PayRuleset

    shifts_repo: ShiftRepository

    pattern_service: PatternService
    shift_service: ShiftService
    pay_period_service: PayPeriodService


def build_container(
    *,
    db_config: Optional[dict] = None,
    storage: str = "mysql",
    ruleset: Optional[PayRuleset] = None,
    base_rate_cents: Optional[int] = None,
    reference_date: Optional[date] = None,
    overtime_threshold_hours: float = DEFAULT_OVERTIME_THRESHOLD_HOURS,
    approaching_ratio: float = DEFAULT_APPROACHING_RATIO,
    exceeded_ratio: float = DEFAULT_EXCEEDED_RATIO,
    first_weekday: Weekday = Weekday.MONDAY,
    shifts_repo: Optional[ShiftRepository] = None,
    clock: Optional[Clock] = None,
) -> Container:
    clock = clock or SystemClock()
    ruleset = ruleset or PayRuleset()

    conn: Optional[DatabaseConnection] = None
    if shifts_repo is None:
        if storage == "memory":
            shifts_repo = InMemoryShiftRepository()
        else:
            if not db_config:
                raise ValueError("db_config is required for mysql storage")
            conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))
            shifts_repo = MySQLShiftRepository(conn)

    resolver = PatternResolver()
    calculator = StandardPaidMinutesCalculator()

    pattern_service = PatternService(resolver)
    shift_service = ShiftService(
        shifts_repo,
        lifecycle=ShiftLifecycle(clock=clock, calculator=calculator, overtime_factory=OvertimeStrategyFactory()),
        generator=ShiftGenerator(resolver, calculator=calculator),
        validator=ShiftValidator(),
        ruleset=ruleset,
        clock=clock,
    )
    pay_period_service = PayPeriodService(
        shifts_repo,
        ruleset=ruleset,
        aggregator=PayPeriodAggregator(clock=clock, first_weekday=first_weekday),
        forecaster=OvertimeForecaster(
            clock=clock,
            approaching_ratio=approaching_ratio,
            exceeded_ratio=exceeded_ratio,
        ),
        base_rate_cents=base_rate_cents,
        reference_date=reference_date,
        overtime_threshold_hours=overtime_threshold_hours,
        clock=clock,
    )

    return Container(
        conn=conn,
        clock=clock,
        ruleset=ruleset,
        shifts_repo=shifts_repo,
        pattern_service=pattern_service,
        shift_service=shift_service,
        pay_period_service=pay_period_service,
    )
