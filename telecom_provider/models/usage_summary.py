# telecom_provider/models/usage_summary.py
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlmodel import Field, SQLModel

from ..core.constants import MONEY_DIGITS, MONEY_PLACES
from .columns import datetime_column, fk_column


class ServicePlanUsageSummary(SQLModel, table=True):
    """
    Append-only usage snapshot per plan.
    Each refresh inserts a new generation; readers pick the latest
    report_generated_at per plan.
    """

    __tablename__ = "service_plan_usage_summary"

    plan_id: int = Field(
        sa_column=fk_column("service_plan_usage_summary", "plan_id", primary_key=True)
    )
    report_generated_at: datetime = Field(sa_column=datetime_column(primary_key=True))
    total_call_minutes: Optional[Decimal] = Field(
        default=None, max_digits=MONEY_DIGITS, decimal_places=MONEY_PLACES
    )
    total_data_mb: Optional[Decimal] = Field(
        default=None, max_digits=MONEY_DIGITS, decimal_places=MONEY_PLACES
    )
    total_sms_count: Optional[int] = None
