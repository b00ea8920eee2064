# telecom_provider/db/policies.py
"""
Referential policy table.

Every foreign key of the schema is listed here with its ON DELETE / ON UPDATE
action. The models build their foreign key columns from this table and the
service layer consults it before every delete, so the asymmetric cascade
rules live in one place instead of being scattered across DDL defaults.

Keys that carry a parent identity into join/ledger tables cascade on update
(renumbering), but deleting a parent that has financial or usage rows
attached is always restricted. Relationships with no explicit action are
RESTRICT.
"""
from dataclasses import dataclass
from typing import List

from ..core.constants import ReferentialAction

CASCADE = ReferentialAction.CASCADE
RESTRICT = ReferentialAction.RESTRICT


@dataclass(frozen=True)
class ForeignKeyPolicy:
    child_table: str
    child_column: str
    parent_table: str
    on_delete: ReferentialAction = RESTRICT
    on_update: ReferentialAction = RESTRICT
    parent_column: str = "id"

    @property
    def name(self) -> str:
        return f"fk_{self.child_table}_{self.child_column}"

    @property
    def target(self) -> str:
        return f"{self.parent_table}.{self.parent_column}"


FOREIGN_KEY_POLICIES = (
    ForeignKeyPolicy("customers", "location_id", "locations"),
    ForeignKeyPolicy("subscriptions", "customer_id", "customers", on_update=CASCADE),
    ForeignKeyPolicy("subscriptions", "plan_id", "service_plans"),
    ForeignKeyPolicy(
        "subscription_promotions", "subscription_id", "subscriptions",
        on_delete=CASCADE, on_update=CASCADE,
    ),
    ForeignKeyPolicy(
        "subscription_promotions", "promotion_id", "promotions",
        on_delete=CASCADE, on_update=CASCADE,
    ),
    ForeignKeyPolicy("promotions", "plan_id", "service_plans"),
    ForeignKeyPolicy("usage_data", "subscription_id", "subscriptions", on_update=CASCADE),
    ForeignKeyPolicy("usage_data", "network_element_id", "network_elements"),
    ForeignKeyPolicy("usage_data", "time_id", "time_dimension"),
    ForeignKeyPolicy("billings", "subscription_id", "subscriptions"),
    ForeignKeyPolicy("payments", "billing_id", "billings"),
    ForeignKeyPolicy("transactions", "customer_id", "customers", on_update=CASCADE),
    ForeignKeyPolicy("network_elements", "location_id", "locations"),
    ForeignKeyPolicy("network_elements", "employee_id", "employees"),
    ForeignKeyPolicy("customer_support", "customer_id", "customers", on_update=CASCADE),
    ForeignKeyPolicy("customer_support", "employee_id", "employees"),
    ForeignKeyPolicy("service_plan_usage_summary", "plan_id", "service_plans"),
)


def get_policy(child_table: str, child_column: str) -> ForeignKeyPolicy:
    for policy in FOREIGN_KEY_POLICIES:
        if policy.child_table == child_table and policy.child_column == child_column:
            return policy
    raise KeyError(f"No foreign key policy for {child_table}.{child_column}")


def policies_for_child(child_table: str) -> List[ForeignKeyPolicy]:
    """Foreign keys declared by `child_table` (used to check parents on write)."""
    return [p for p in FOREIGN_KEY_POLICIES if p.child_table == child_table]


def policies_for_parent(parent_table: str) -> List[ForeignKeyPolicy]:
    """Foreign keys pointing at `parent_table` (consulted before a delete)."""
    return [p for p in FOREIGN_KEY_POLICIES if p.parent_table == parent_table]
