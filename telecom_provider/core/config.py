# telecom_provider/core/config.py
"""
Runtime configuration read from the environment (and an optional .env file).
"""
import os
from datetime import date

from dotenv import load_dotenv

ENV_FILE = ".env"

load_dotenv(ENV_FILE)

# Default SQLite file lives in data/db/, next to the package.
DATA_DIR = os.path.join(os.path.dirname(__file__), "..", "..", "data")
DEFAULT_DATABASE_FILE = os.path.join(DATA_DIR, "db", "telecom.sqlite")


def get_database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    os.makedirs(os.path.dirname(DEFAULT_DATABASE_FILE), exist_ok=True)
    return f"sqlite:///{DEFAULT_DATABASE_FILE}"


def get_log_level() -> str:
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_log_dir() -> str:
    return os.getenv("LOG_DIR", "logs")


def get_snapshot_run_hour() -> tuple[int, int]:
    """Hour of the daily usage snapshot job, as (hour, minute). Falls back to 03:00."""
    raw = os.getenv("USAGE_SNAPSHOT_RUN_HOUR", "03:00")
    try:
        hour, minute = raw.split(":")
        return int(hour), int(minute)
    except (ValueError, AttributeError):
        return 3, 0


def get_report_month() -> date:
    """
    First day of the month used by the monthly usage reports.
    REPORT_MONTH has the 'YYYY-MM' format; the sample data covers 2025-05.
    """
    raw = os.getenv("REPORT_MONTH", "2025-05")
    try:
        year, month = raw.split("-")
        return date(int(year), int(month), 1)
    except (ValueError, AttributeError):
        return date(2025, 5, 1)
