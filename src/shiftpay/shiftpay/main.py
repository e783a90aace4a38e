from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .common.clock import Clock
from .common.datetime_utils import parse_iso_date
from .core.enums import PayPeriodType, Weekday
from .core.exceptions import DomainError, InvalidLifecycleTransitionError, NotFoundError, ValidationError
from .database.bootstrap import apply_schema, list_tables
from .payroll.rules import PayRuleset
from .shifts.repository import ShiftRepository

from .container import build_container
from .patterns.controller import register as register_patterns
from .payroll.controller import register as register_payroll
from .shifts.controller import register as register_shifts

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def _register_error_handlers(app: Flask) -> None:
    def _error(e: Exception, status: int):
        return jsonify({"error": type(e).__name__, "message": str(e)}), status

    @app.errorhandler(ValidationError)
    def handle_validation(e):
        return _error(e, 400)

    @app.errorhandler(NotFoundError)
    def handle_not_found(e):
        return _error(e, 404)

    @app.errorhandler(InvalidLifecycleTransitionError)
    def handle_transition(e):
        return _error(e, 409)

    @app.errorhandler(DomainError)
    def handle_domain(e):
        return _error(e, 400)

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        if isinstance(e, HTTPException):
            return e
        logger.exception("Unhandled error")
        return jsonify({"error": "InternalError", "message": "Internal server error"}), 500


def create_app(*, shifts_repo: Optional[ShiftRepository] = None, clock: Optional[Clock] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    db_config = dict(getattr(settings, "DB_CONFIG", {}))
    storage = str(getattr(settings, "STORAGE", "mysql")).lower()
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logger.info(
        "settings=%s storage=%s db=%s@%s:%s/%s",
        settings_module,
        storage,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if storage == "mysql" and shifts_repo is None and bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=SCHEMA_PATH)
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

    ruleset = PayRuleset(
        unpaid_break_minutes=int(getattr(settings, "UNPAID_BREAK_MINUTES", 30)),
        pay_period_type=PayPeriodType(getattr(settings, "PAY_PERIOD_TYPE", PayPeriodType.BIWEEKLY.value)),
    )
    reference = getattr(settings, "PAY_PERIOD_REFERENCE_DATE", None)
    base_rate = getattr(settings, "BASE_RATE_CENTS", None)

    container = build_container(
        db_config=db_config,
        storage=storage,
        ruleset=ruleset,
        base_rate_cents=int(base_rate) if base_rate is not None else None,
        reference_date=parse_iso_date(reference) if reference else None,
        overtime_threshold_hours=float(getattr(settings, "OVERTIME_THRESHOLD_HOURS", 40.0)),
        approaching_ratio=float(getattr(settings, "FORECAST_APPROACHING_RATIO", 0.8)),
        exceeded_ratio=float(getattr(settings, "FORECAST_EXCEEDED_RATIO", 1.0)),
        first_weekday=Weekday.from_name(str(getattr(settings, "FIRST_WEEKDAY", "monday"))),
        shifts_repo=shifts_repo,
        clock=clock,
    )
    app.extensions["shiftpay"] = container

    _register_error_handlers(app)
    register_patterns(app, container)
    register_shifts(app, container)
    register_payroll(app, container)

    return app
