from __future__ import annotations

from typing import Any, Optional

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..core.enums import ScheduleType, Weekday
from ..core.exceptions import ValidationError
from ..container import Container
from ..shifts.controller import shift_to_json
from .model import PatternDefinition, PatternInstance, RotationDay, ShiftPreview
from .templates import ALL_TEMPLATES


def _parse_minute_of_day(value: Any) -> int:
    # Accepts 420 or "07:00".
    if isinstance(value, str) and ":" in value:
        hours, minutes = value.split(":", 1)
        return int(hours) * 60 + int(minutes)
    return int(value)


def _optional_int(data: dict, key: str) -> Optional[int]:
    value = data.get(key)
    return int(value) if value is not None else None


def _rotation_day_from_json(index: int, item: Any) -> RotationDay:
    if isinstance(item, bool):
        return RotationDay(index=index, is_work_day=item)
    start = item.get("start_time", item.get("start_minute_of_day"))
    return RotationDay(
        index=int(item.get("index", index)),
        is_work_day=bool(item.get("is_work_day", True)),
        shift_name=item.get("shift_name"),
        start_minute_of_day=_parse_minute_of_day(start) if start is not None else None,
        duration_minutes=_optional_int(item, "duration_minutes"),
    )


def definition_from_json(data: dict) -> PatternDefinition:
    """Pattern definition from a request body, or a named template."""
    try:
        template = data.get("template")
        if template:
            if template not in ALL_TEMPLATES:
                raise ValidationError(f"Unknown pattern template: {template}")
            return ALL_TEMPLATES[template]

        kind = ScheduleType(data.get("kind", ScheduleType.WEEKLY.value))
        start = data.get("start_time", data.get("start_minute_of_day"))
        kwargs: dict[str, Any] = {
            "name": str(data.get("name") or "Custom pattern"),
            "kind": kind,
            "break_minutes": _optional_int(data, "break_minutes"),
            "short_code": data.get("short_code"),
            "notes": data.get("notes"),
        }
        if start is not None:
            kwargs["start_minute_of_day"] = _parse_minute_of_day(start)
        if data.get("duration_minutes") is not None:
            kwargs["duration_minutes"] = int(data["duration_minutes"])

        if kind == ScheduleType.WEEKLY:
            kwargs["weekdays"] = frozenset(Weekday.from_name(d) for d in data.get("weekdays") or [])
        else:
            rotation = data.get("rotation_days") or []
            kwargs["rotation_days"] = tuple(_rotation_day_from_json(i, item) for i, item in enumerate(rotation))
        return PatternDefinition(**kwargs)
    except (TypeError, ValueError, AttributeError) as e:
        raise ValidationError(f"Invalid pattern: {e}") from e


def _instance_from_json(data: dict) -> PatternInstance:
    definition = definition_from_json(data.get("pattern") or {})
    raw_start = (data.get("pattern") or {}).get("cycle_start_date") or data.get("cycle_start_date")
    try:
        cycle_start = parse_iso_date(raw_start) if raw_start else None
    except ValueError as e:
        raise ValidationError("cycle_start_date must be YYYY-MM-DD") from e
    return PatternInstance(definition=definition, owner_id=_optional_int(data, "owner_id"), cycle_start_date=cycle_start)


def _date_range(data: dict):
    try:
        start = parse_iso_date(str(data["from"]))
        end = parse_iso_date(str(data["to"]))
    except (KeyError, ValueError) as e:
        raise ValidationError("'from' and 'to' must be YYYY-MM-DD dates") from e
    if end < start:
        raise ValidationError("'to' must not be before 'from'")
    return start, end


def _preview_json(p: ShiftPreview) -> dict:
    return {
        "date": p.day.isoformat(),
        "title": p.title,
        "start": p.start.isoformat(),
        "end": p.end.isoformat(),
        "code": p.code,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/patterns/templates", methods=["GET"], endpoint="pattern_templates")
    def pattern_templates():
        return jsonify(
            [
                {
                    "key": key,
                    "name": d.name,
                    "kind": d.kind.value,
                    "time_range": d.time_range_formatted,
                    "cycle_length_days": d.cycle_length_days,
                    "notes": d.notes,
                }
                for key, d in ALL_TEMPLATES.items()
            ]
        )

    @app.route("/api/patterns/validate", methods=["POST"], endpoint="pattern_validate")
    def pattern_validate():
        definition = definition_from_json(request.get_json(silent=True) or {})
        result = container.pattern_service.validate(definition)
        return jsonify({"valid": result.is_valid, "errors": result.errors})

    @app.route("/api/patterns/preview", methods=["POST"], endpoint="pattern_preview")
    def pattern_preview():
        data = request.get_json(silent=True) or {}
        pattern = _instance_from_json(data)
        start, end = _date_range(data)
        previews = container.pattern_service.preview(pattern, start, end)
        return jsonify({"count": len(previews), "shifts": [_preview_json(p) for p in previews]})

    @app.route("/api/patterns/generate", methods=["POST"], endpoint="pattern_generate")
    def pattern_generate():
        data = request.get_json(silent=True) or {}
        pattern = _instance_from_json(data)
        start, end = _date_range(data)
        created = container.shift_service.generate_from_pattern(pattern, start, end, pattern.owner_id)
        return jsonify({"count": len(created), "shifts": [shift_to_json(s) for s in created]}), 201
