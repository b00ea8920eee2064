# telecom_provider/models/network.py
"""
Network infrastructure and the staff that operates it.
"""
from datetime import datetime
from typing import Optional

from sqlmodel import Field, SQLModel

from ..core.constants import (
    EmployeeRole,
    EmployeeStatus,
    NetworkElementStatus,
    NetworkElementType,
)
from .columns import datetime_column, enum_column, fk_column


class Employee(SQLModel, table=True):
    __tablename__ = "employees"

    id: Optional[int] = Field(default=None, primary_key=True)
    full_name: str = Field(max_length=100)
    email: str = Field(max_length=100, unique=True)
    created_at: datetime = Field(default_factory=datetime.now, sa_column=datetime_column())
    role: EmployeeRole = Field(sa_column=enum_column(EmployeeRole))
    status: EmployeeStatus = Field(sa_column=enum_column(EmployeeStatus))


class NetworkElement(SQLModel, table=True):
    """Tower, router or switch, located in a city and owned by an employee."""

    __tablename__ = "network_elements"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=100)
    element_type: NetworkElementType = Field(sa_column=enum_column(NetworkElementType))
    status: NetworkElementStatus = Field(sa_column=enum_column(NetworkElementStatus))
    location_id: int = Field(sa_column=fk_column("network_elements", "location_id"))
    employee_id: int = Field(sa_column=fk_column("network_elements", "employee_id"))
