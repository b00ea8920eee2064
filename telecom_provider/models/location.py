# telecom_provider/models/location.py
from typing import Optional

from sqlmodel import Field, SQLModel


class Location(SQLModel, table=True):
    """City/country reference shared by customers and network elements."""

    __tablename__ = "locations"

    id: Optional[int] = Field(default=None, primary_key=True)
    city: Optional[str] = Field(default=None, max_length=50, unique=True)
    country: Optional[str] = Field(default=None, max_length=50, unique=True)
