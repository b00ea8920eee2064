# telecom_provider/models/billing.py
"""
Billing model: one billing cycle of a subscription.
"""
from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy import CheckConstraint, Column, Computed, Numeric
from sqlmodel import Field, SQLModel

from ..core.constants import MONEY_DIGITS, MONEY_PLACES, BillingStatus
from .columns import enum_column, fk_column

FINAL_AMOUNT_EXPRESSION = "COALESCE(total_amount, 0) - COALESCE(discount_amount, 0)"

# Columns the database derives; writes to them are rejected by the services.
GENERATED_COLUMNS = frozenset({"final_amount"})


class Billing(SQLModel, table=True):
    """
    Billing model representing a bill issued for one subscription period.

    Fields:
    - billing_period_start / billing_period_end: Covered period (start < end)
    - issue_date / due_date: When the bill was issued and when it is due
    - total_amount / discount_amount: Gross amount and discount
    - final_amount: Generated by the database as total - discount (nulls as 0);
      it is never written by the application
    - status: paid / unpaid / pending
    - subscription_id: Billed subscription (delete of the subscription is restricted)
    """

    __tablename__ = "billings"
    __table_args__ = (
        CheckConstraint(
            "billing_period_start < billing_period_end", name="ck_billings_period"
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    billing_period_start: date
    billing_period_end: date
    issue_date: date
    due_date: date
    discount_amount: Decimal = Field(max_digits=MONEY_DIGITS, decimal_places=MONEY_PLACES)
    total_amount: Decimal = Field(max_digits=MONEY_DIGITS, decimal_places=MONEY_PLACES)
    final_amount: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(
            Numeric(MONEY_DIGITS, MONEY_PLACES),
            Computed(FINAL_AMOUNT_EXPRESSION, persisted=True),
        ),
    )
    status: BillingStatus = Field(sa_column=enum_column(BillingStatus))
    subscription_id: int = Field(sa_column=fk_column("billings", "subscription_id"))
