import os

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "shiftpay"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "shiftpay"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

STORAGE = os.getenv("STORAGE", "mysql")

PAY_PERIOD_TYPE = os.getenv("PAY_PERIOD_TYPE", "biweekly")
PAY_PERIOD_REFERENCE_DATE = os.getenv("PAY_PERIOD_REFERENCE_DATE") or None
BASE_RATE_CENTS = int(os.environ["BASE_RATE_CENTS"]) if os.getenv("BASE_RATE_CENTS") else None
UNPAID_BREAK_MINUTES = int(os.getenv("UNPAID_BREAK_MINUTES", "30"))

OVERTIME_THRESHOLD_HOURS = float(os.getenv("OVERTIME_THRESHOLD_HOURS", "40"))
FORECAST_APPROACHING_RATIO = float(os.getenv("FORECAST_APPROACHING_RATIO", "0.8"))
FORECAST_EXCEEDED_RATIO = float(os.getenv("FORECAST_EXCEEDED_RATIO", "1.0"))
FIRST_WEEKDAY = os.getenv("FIRST_WEEKDAY", "monday")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
