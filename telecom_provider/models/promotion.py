# telecom_provider/models/promotion.py
from datetime import date
from decimal import Decimal
from typing import Optional

from sqlmodel import Field, SQLModel

from ..core.constants import MONEY_DIGITS, MONEY_PLACES, PromotionStatus
from .columns import enum_column, fk_column


class Promotion(SQLModel, table=True):
    """Discount campaign tied to a service plan."""

    __tablename__ = "promotions"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=100)
    description: str
    discount_value: Decimal = Field(max_digits=MONEY_DIGITS, decimal_places=MONEY_PLACES)
    start_date: date
    end_date: date
    status: PromotionStatus = Field(sa_column=enum_column(PromotionStatus))
    plan_id: int = Field(sa_column=fk_column("promotions", "plan_id"))
