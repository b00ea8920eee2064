# telecom_provider/models/customer.py
"""
Customer model for subscriber management.
"""
import re
from datetime import date
from typing import Optional

from pydantic import field_validator
from sqlalchemy import CheckConstraint
from sqlmodel import Field, SQLModel

from ..core.constants import CustomerStatus
from .columns import enum_column, fk_column

# Exactly one "@" and at least one "." after it.
EMAIL_PATTERN = r"^[^@]+@[^@]+\.[^@]+$"


class Customer(SQLModel, table=True):
    """
    Customer model representing subscribers.

    Fields:
    - id: Primary key
    - full_name: Customer name (required)
    - phone: Contact phone, unique when present
    - email: Email address, must match EMAIL_PATTERN when present
    - location_id: Foreign key to locations (required)
    - registration_date: Date the customer signed up
    - status: active / inactive
    """

    __tablename__ = "customers"
    __table_args__ = (
        CheckConstraint(
            f"email IS NULL OR email REGEXP '{EMAIL_PATTERN}'",
            name="ck_customers_email_format",
        ),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    full_name: str = Field(max_length=100)
    phone: Optional[str] = Field(default=None, max_length=20, unique=True)
    email: Optional[str] = Field(default=None, max_length=100)
    location_id: int = Field(sa_column=fk_column("customers", "location_id"))
    registration_date: date
    status: CustomerStatus = Field(sa_column=enum_column(CustomerStatus))

    @field_validator("email")
    @classmethod
    def email_must_match_pattern(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not re.match(EMAIL_PATTERN, value):
            raise ValueError(f"invalid email address: {value!r}")
        return value
