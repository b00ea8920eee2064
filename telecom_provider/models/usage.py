# telecom_provider/models/usage.py
"""
Usage events and the time dimension they are reported against.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlmodel import Field, SQLModel

from ..core.constants import MONEY_DIGITS, MONEY_PLACES, PartOfDay, UsageType
from .columns import datetime_column, enum_column, fk_column


class TimeDimension(SQLModel, table=True):
    """One row per distinct timestamp referenced by usage events."""

    __tablename__ = "time_dimension"

    id: Optional[int] = Field(default=None, primary_key=True)
    full_timestamp: datetime = Field(sa_column=datetime_column(unique=True))
    day_of_week: str = Field(max_length=20)
    part_of_day: PartOfDay = Field(sa_column=enum_column(PartOfDay))


class UsageData(SQLModel, table=True):
    """
    A single usage event.

    `amount` is minutes for calls, a message count for SMS and megabytes for
    data. Subscriptions with usage cannot be deleted.
    """

    __tablename__ = "usage_data"

    id: Optional[int] = Field(default=None, primary_key=True)
    usage_type: UsageType = Field(sa_column=enum_column(UsageType, index=True))
    amount: Decimal = Field(max_digits=MONEY_DIGITS, decimal_places=MONEY_PLACES)
    subscription_id: int = Field(sa_column=fk_column("usage_data", "subscription_id"))
    network_element_id: int = Field(sa_column=fk_column("usage_data", "network_element_id"))
    time_id: int = Field(sa_column=fk_column("usage_data", "time_id"))
