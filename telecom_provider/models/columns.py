# telecom_provider/models/columns.py
"""
Column builders shared by the models.
Foreign keys take their ON DELETE / ON UPDATE actions from the policy table.
"""
from enum import Enum
from typing import Type

from sqlalchemy import Column, DateTime, ForeignKey, Integer
from sqlalchemy import Enum as SAEnum

from ..db.policies import get_policy


def enum_column(enum_cls: Type[Enum], nullable: bool = False, index: bool = False) -> Column:
    """
    Enumerated string column storing the member *values* ('active', not 'ACTIVE')
    with a CHECK constraint, so unknown strings are rejected by the engine too.
    """
    return Column(
        SAEnum(
            enum_cls,
            values_callable=lambda members: [member.value for member in members],
            native_enum=False,
            create_constraint=True,
            validate_strings=True,
            name=f"ck_{enum_cls.__name__.lower()}",
        ),
        nullable=nullable,
        index=index,
    )


def fk_column(child_table: str, child_column: str, primary_key: bool = False) -> Column:
    """Integer foreign key column declared according to its referential policy."""
    policy = get_policy(child_table, child_column)
    return Column(
        Integer,
        ForeignKey(
            policy.target,
            name=policy.name,
            ondelete=policy.on_delete.value,
            onupdate=policy.on_update.value,
        ),
        primary_key=primary_key,
        nullable=False,
        index=not primary_key,
    )


def datetime_column(nullable: bool = False, unique: bool = False, primary_key: bool = False) -> Column:
    """Naive timestamp column; values are local wall-clock times, stored as given."""
    return Column(
        DateTime(timezone=False), nullable=nullable, unique=unique, primary_key=primary_key
    )
