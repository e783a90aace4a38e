from __future__ import annotations

import csv
import io

from flask import Flask, jsonify, request

from ..core.exceptions import ValidationError
from ..container import Container
from ..forecast.model import OvertimeForecast
from ..shifts.controller import shift_to_json
from .model import PayPeriod
from .service import CSV_HEADERS, PayPeriodReport


def period_to_json(p: PayPeriod) -> dict:
    return {
        "start_date": p.start_date.isoformat(),
        "end_date": p.effective_end_date.isoformat(),
        "label": p.date_range_formatted,
        "duration_days": p.duration_days,
        "paid_hours": round(p.paid_hours, 2),
        "premium_hours": round(p.premium_hours, 2),
        "additional_shift_hours": round(p.additional_shift_hours, 2),
        "estimated_pay_cents": p.estimated_pay_cents,
        "is_complete": p.is_complete,
        "shift_count": len(p.shift_ids),
    }


def _report_json(report: PayPeriodReport) -> dict:
    summary = report.summary
    return {
        "period": period_to_json(report.period),
        "summary": {
            "total_hours": round(summary.total_hours, 2),
            "regular_hours": round(summary.regular_hours, 2),
            "premium_hours": round(summary.premium_hours, 2),
            "estimated_pay_cents": summary.estimated_pay_cents,
        },
        "rate_breakdown": [
            {"label": b.label, "multiplier": b.multiplier, "hours": round(b.hours, 2)} for b in report.rate_breakdown
        ],
        "daily_totals": [{"date": d.day.isoformat(), "hours": round(d.hours, 2)} for d in report.daily_totals],
        "progress": round(report.progress, 4),
        "shifts": [shift_to_json(s) for s in report.shifts],
    }


def _forecast_json(f: OvertimeForecast) -> dict:
    return {
        "projected_hours": round(f.projected_hours, 2),
        "completed_hours": round(f.completed_hours, 2),
        "scheduled_hours": round(f.scheduled_hours, 2),
        "threshold_hours": f.threshold_hours,
        "status": f.status.value,
        "status_label": f.status.display_name,
        "message": f.message,
        "days_remaining": f.days_remaining,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/pay-periods/current", methods=["GET"], endpoint="pay_period_current")
    def pay_period_current():
        return jsonify(_report_json(container.pay_period_service.current_report()))

    @app.route("/api/pay-periods/recent", methods=["GET"], endpoint="pay_period_recent")
    def pay_period_recent():
        try:
            count = int(request.args.get("count", 6))
        except ValueError as e:
            raise ValidationError("'count' must be an integer") from e
        periods = container.pay_period_service.recent_periods(count)
        return jsonify([period_to_json(p) for p in periods])

    @app.route("/api/pay-periods/current/export.csv", methods=["GET"], endpoint="pay_period_export_csv")
    def pay_period_export_csv():
        report = container.pay_period_service.current_report()
        rows = container.pay_period_service.export_rows(report)

        out = io.StringIO()
        writer = csv.writer(out)
        writer.writerow(CSV_HEADERS)
        for row in rows:
            writer.writerow(row)

        filename = f"shifts_{report.period.start_date:%Y%m%d}_{report.period.effective_end_date:%Y%m%d}.csv"
        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/forecast", methods=["GET"], endpoint="forecast_current")
    def forecast_current():
        raw = request.args.get("threshold")
        try:
            threshold = float(raw) if raw is not None else None
        except ValueError as e:
            raise ValidationError("'threshold' must be a number") from e
        return jsonify(_forecast_json(container.pay_period_service.forecast(threshold_hours=threshold)))
