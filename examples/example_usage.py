"""Example: drive the engine directly, without Flask or a database.

Generates two weeks of a 4-on/4-off rotation, works a couple of shifts, and
prints the pay period summary and overtime forecast.
"""

from datetime import date, datetime

from src.shiftpay.shiftpay.common.clock import FixedClock
from src.shiftpay.shiftpay.container import build_container
from src.shiftpay.shiftpay.core.enums import PayPeriodType
from src.shiftpay.shiftpay.patterns.model import PatternInstance
from src.shiftpay.shiftpay.patterns.templates import FOUR_ON_FOUR_OFF
from src.shiftpay.shiftpay.payroll.rules import PayRuleset


def main():
    clock = FixedClock(datetime(2024, 1, 3, 20, 0))
    container = build_container(
        storage="memory",
        ruleset=PayRuleset(pay_period_type=PayPeriodType.BIWEEKLY),
        base_rate_cents=3000,
        reference_date=date(2024, 1, 1),
        clock=clock,
    )

    pattern = PatternInstance(definition=FOUR_ON_FOUR_OFF, cycle_start_date=date(2024, 1, 1))
    shifts = container.shift_service.generate_from_pattern(pattern, date(2024, 1, 1), date(2024, 1, 14))
    print(f"generated {len(shifts)} shifts")

    for shift in shifts[:2]:
        container.shift_service.clock_in(shift.shift_id, at=shift.scheduled_start)
        container.shift_service.clock_out(shift.shift_id, at=shift.scheduled_end)

    report = container.pay_period_service.current_report()
    print(report.period.date_range_formatted, f"{report.summary.total_hours:.1f}h", report.summary.estimated_pay_cents)
    print(container.pay_period_service.forecast().message)


if __name__ == "__main__":
    main()
