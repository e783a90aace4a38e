from __future__ import annotations

from datetime import datetime
from typing import Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_datetime
from ..core.exceptions import ValidationError
from ..container import Container
from .model import Shift


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def shift_to_json(s: Shift) -> dict:
    return {
        "id": s.shift_id,
        "owner_id": s.owner_id,
        "pattern_id": s.pattern_id,
        "scheduled_start": _iso(s.scheduled_start),
        "scheduled_end": _iso(s.scheduled_end),
        "actual_start": _iso(s.actual_start),
        "actual_end": _iso(s.actual_end),
        "break_minutes": s.break_minutes,
        "status": s.status.value,
        "paid_minutes": s.paid_minutes,
        "premium_minutes": s.premium_minutes,
        "rate_multiplier": s.rate_multiplier,
        "rate_label": s.rate_display_label,
        "is_additional_shift": s.is_additional_shift,
        "notes": s.notes,
        "location": s.location,
        "time_range": s.time_range_formatted,
    }


def _datetime_arg(data: dict, key: str) -> Optional[datetime]:
    raw = data.get(key)
    if not raw:
        return None
    try:
        value = parse_iso_datetime(str(raw))
    except ValueError as e:
        raise ValidationError(f"'{key}' must be an ISO 8601 datetime") from e
    if value.tzinfo is not None:
        # Stored shifts carry naive local wall-clock times.
        value = value.astimezone().replace(tzinfo=None)
    return value


def _body() -> dict:
    return request.get_json(silent=True) or {}


def register(app: Flask, container: Container) -> None:
    @app.route("/api/shifts", methods=["GET"], endpoint="shift_list")
    def shift_list():
        start = _datetime_arg(request.args, "start")
        end = _datetime_arg(request.args, "end")
        if start is None or end is None:
            raise ValidationError("Query parameters 'start' and 'end' are required")
        shifts = container.shift_service.list_range(start, end)
        return jsonify([shift_to_json(s) for s in shifts])

    @app.route("/api/shifts/<shift_id>", methods=["GET"], endpoint="shift_detail")
    def shift_detail(shift_id: str):
        found = container.shift_service.get_with_overtime(shift_id)
        payload = shift_to_json(found.shift)
        payload["overtime_minutes"] = found.overtime_minutes
        return jsonify(payload)

    @app.route("/api/shifts/<shift_id>", methods=["DELETE"], endpoint="shift_delete")
    def shift_delete(shift_id: str):
        container.shift_service.delete(shift_id)
        return "", 204

    @app.route("/api/shifts/quick", methods=["POST"], endpoint="shift_quick")
    def shift_quick():
        data = _body()
        try:
            duration_hours = int(data.get("duration_hours", 8))
            break_minutes = int(data.get("break_minutes", container.ruleset.unpaid_break_minutes))
            owner_id = int(data["owner_id"]) if data.get("owner_id") is not None else None
        except (TypeError, ValueError) as e:
            raise ValidationError("duration_hours, break_minutes and owner_id must be integers") from e

        shift = container.shift_service.create_quick_shift(
            start=_datetime_arg(data, "start"),
            duration_hours=duration_hours,
            break_minutes=break_minutes,
            owner_id=owner_id,
        )
        return jsonify(shift_to_json(shift)), 201

    @app.route("/api/shifts/toggle", methods=["POST"], endpoint="shift_toggle")
    def shift_toggle():
        return jsonify(shift_to_json(container.shift_service.toggle_current_shift()))

    @app.route("/api/shifts/<shift_id>/clock-in", methods=["POST"], endpoint="shift_clock_in")
    def shift_clock_in(shift_id: str):
        shift = container.shift_service.clock_in(shift_id, at=_datetime_arg(_body(), "at"))
        return jsonify(shift_to_json(shift))

    @app.route("/api/shifts/<shift_id>/clock-out", methods=["POST"], endpoint="shift_clock_out")
    def shift_clock_out(shift_id: str):
        shift = container.shift_service.clock_out(shift_id, at=_datetime_arg(_body(), "at"))
        return jsonify(shift_to_json(shift))

    @app.route("/api/shifts/<shift_id>/cancel", methods=["POST"], endpoint="shift_cancel")
    def shift_cancel(shift_id: str):
        shift = container.shift_service.cancel(shift_id, at=_datetime_arg(_body(), "at"))
        return jsonify(shift_to_json(shift))

    @app.route("/api/shifts/<shift_id>/rate", methods=["PUT"], endpoint="shift_rate")
    def shift_rate(shift_id: str):
        data = _body()
        try:
            multiplier = float(data["multiplier"])
        except (KeyError, TypeError, ValueError) as e:
            raise ValidationError("'multiplier' must be a number") from e
        shift = container.shift_service.set_rate(shift_id, multiplier, data.get("label"))
        return jsonify(shift_to_json(shift))
