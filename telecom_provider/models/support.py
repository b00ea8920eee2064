# telecom_provider/models/support.py
"""
Support ticket model.
"""
from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from ..core.constants import SupportPriority, SupportStatus, SupportType
from .columns import datetime_column, enum_column, fk_column


class CustomerSupport(SQLModel, table=True):
    """
    Represents a support ticket opened by a customer and handled by an employee.

    closed_at is expected only on closed tickets; the engine does not enforce
    it, SupportService does. priority is optional and has no default.
    """

    __tablename__ = "customer_support"

    id: Optional[int] = Field(default=None, primary_key=True)
    support_type: SupportType = Field(sa_column=enum_column(SupportType))
    description: str
    status: SupportStatus = Field(sa_column=enum_column(SupportStatus, index=True))
    created_at: datetime = Field(default_factory=datetime.now, sa_column=datetime_column())
    closed_at: Optional[datetime] = Field(default=None, sa_column=datetime_column(nullable=True))
    priority: Optional[SupportPriority] = Field(
        default=None, sa_column=enum_column(SupportPriority, nullable=True)
    )
    customer_id: int = Field(sa_column=fk_column("customer_support", "customer_id"))
    employee_id: int = Field(sa_column=fk_column("customer_support", "employee_id"))
