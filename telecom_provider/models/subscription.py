# telecom_provider/models/subscription.py
"""
Subscription models: the customer/plan binding and the promotions applied to it.
"""
from datetime import date
from typing import Optional

from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel

from ..core.constants import SubscriptionStatus
from .columns import enum_column, fk_column


class Subscription(SQLModel, table=True):
    """Binds a customer to a service plan between start_date and end_date."""

    __tablename__ = "subscriptions"
    __table_args__ = (
        CheckConstraint("start_date < end_date", name="ck_subscriptions_dates"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    start_date: date
    end_date: date
    status: SubscriptionStatus = Field(sa_column=enum_column(SubscriptionStatus))
    customer_id: int = Field(sa_column=fk_column("subscriptions", "customer_id"))
    plan_id: int = Field(sa_column=fk_column("subscriptions", "plan_id"))


class SubscriptionPromotion(SQLModel, table=True):
    """
    Many-to-many link between subscriptions and promotions.
    Owned by both parents: deleting or renumbering either one cascades here.
    """

    __tablename__ = "subscription_promotions"

    subscription_id: int = Field(
        sa_column=fk_column("subscription_promotions", "subscription_id", primary_key=True)
    )
    promotion_id: int = Field(
        sa_column=fk_column("subscription_promotions", "promotion_id", primary_key=True)
    )
    applied_date: date
