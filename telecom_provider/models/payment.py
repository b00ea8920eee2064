# telecom_provider/models/payment.py
"""
Payment model for bill payment tracking.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel

from ..core.constants import MONEY_DIGITS, MONEY_PLACES, PaymentStatus
from .columns import datetime_column, enum_column, fk_column


class Payment(SQLModel, table=True):
    """
    Payment model representing a payment applied to a bill.

    Fields:
    - id: Primary key
    - payment_date: Payment timestamp (defaults to now)
    - amount_paid: Amount paid, never negative
    - payment_status: completed / failed / pending
    - billing_id: Foreign key to billings (required)
    """

    __tablename__ = "payments"
    __table_args__ = (
        CheckConstraint("amount_paid >= 0", name="ck_payments_amount_non_negative"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    payment_date: datetime = Field(default_factory=datetime.now, sa_column=datetime_column())
    amount_paid: Decimal = Field(max_digits=MONEY_DIGITS, decimal_places=MONEY_PLACES, ge=0)
    payment_status: PaymentStatus = Field(sa_column=enum_column(PaymentStatus))
    billing_id: int = Field(sa_column=fk_column("payments", "billing_id"))
