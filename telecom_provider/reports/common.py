# telecom_provider/reports/common.py
"""
Helpers shared by the reports: exact decimal rounding, unit conversion,
calendar windows and ranking.
"""
from datetime import date, datetime, time
from decimal import ROUND_HALF_UP, Decimal
from typing import Hashable, List, Optional, Sequence, Tuple

from dateutil.relativedelta import relativedelta

from ..core.config import get_report_month
from ..core.constants import MB_PER_GB

CENT = Decimal("0.01")


def round_money(value: Decimal) -> Decimal:
    """Round to 2 places, halves away from zero (SQL ROUND semantics)."""
    return Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def mb_to_gb(megabytes: Decimal) -> Decimal:
    return round_money(Decimal(megabytes) / MB_PER_GB)


def month_window(month: Optional[date] = None) -> Tuple[datetime, datetime]:
    """
    Half-open [first instant, first instant of next month) interval of the
    month containing `month`. Defaults to the configured report month.
    """
    month = month or get_report_month()
    start = datetime.combine(month.replace(day=1), time.min)
    return start, start + relativedelta(months=1)


def standard_rank(values: Sequence[Hashable]) -> List[int]:
    """
    RANK() over `values` in descending order, returned in input order.
    Ties share a rank and the next distinct value skips the tie size:
    [100, 100, 80] -> [1, 1, 3].
    """
    first_position = {}
    for position, value in enumerate(sorted(values, reverse=True), start=1):
        first_position.setdefault(value, position)
    return [first_position[value] for value in values]
