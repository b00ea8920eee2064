# telecom_provider/models/transaction.py
"""
Transaction model: the per-customer financial ledger.
Independent of billing and payments.
"""
from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel

from ..core.constants import MONEY_DIGITS, MONEY_PLACES, TransactionStatus, TransactionType
from .columns import datetime_column, enum_column, fk_column


class Transaction(SQLModel, table=True):
    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_transactions_amount_positive"),
    )

    # Assigned by the database
    id: Optional[int] = Field(default=None, primary_key=True)
    transaction_type: TransactionType = Field(sa_column=enum_column(TransactionType))
    amount: Decimal = Field(max_digits=MONEY_DIGITS, decimal_places=MONEY_PLACES, gt=0)
    transaction_date: datetime = Field(default_factory=datetime.now, sa_column=datetime_column())
    status: TransactionStatus = Field(sa_column=enum_column(TransactionStatus, index=True))
    description: str
    customer_id: int = Field(sa_column=fk_column("transactions", "customer_id"))
