# telecom_provider/models/plan.py
from decimal import Decimal
from typing import Optional

from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel

from ..core.constants import MONEY_DIGITS, MONEY_PLACES, PlanStatus
from .columns import enum_column


class ServicePlan(SQLModel, table=True):
    __tablename__ = "service_plans"
    __table_args__ = (CheckConstraint("price > 0", name="ck_service_plans_price_positive"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    plan_name: str = Field(max_length=100)
    price: Decimal = Field(max_digits=MONEY_DIGITS, decimal_places=MONEY_PLACES, gt=0)
    data_limit_gb: Decimal = Field(max_digits=MONEY_DIGITS, decimal_places=MONEY_PLACES)
    call_minutes: int
    sms_count: int
    validity_days: int
    status: PlanStatus = Field(sa_column=enum_column(PlanStatus))
