"""
Centralized constants for the telecom domain.
Every status/type column is a closed set of values; unknown strings are
rejected at the model boundary instead of being stored as free text.
"""

from enum import Enum, unique


@unique
class CustomerStatus(str, Enum):
    """Subscriber account states."""

    ACTIVE = "active"
    INACTIVE = "inactive"


@unique
class PlanStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


@unique
class SubscriptionStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


@unique
class PromotionStatus(str, Enum):
    ACTIVE = "active"
    EXPIRED = "expired"


@unique
class UsageType(str, Enum):
    """Usage event kinds. The unit of `amount` depends on the kind."""

    CALL = "call"  # minutes
    SMS = "sms"  # message count
    DATA = "data"  # megabytes


@unique
class BillingStatus(str, Enum):
    PAID = "paid"
    UNPAID = "unpaid"
    PENDING = "pending"


@unique
class PaymentStatus(str, Enum):
    COMPLETED = "completed"
    FAILED = "failed"
    PENDING = "pending"


@unique
class TransactionType(str, Enum):
    DEPOSIT = "deposit"
    WITHDRAW = "withdraw"
    TRANSFER = "transfer"


@unique
class TransactionStatus(str, Enum):
    SUCCESS = "success"
    FAILED = "failed"
    PENDING = "pending"


@unique
class NetworkElementType(str, Enum):
    """Infrastructure unit kinds."""

    TOWER = "tower"
    ROUTER = "router"
    SWITCH = "switch"


@unique
class NetworkElementStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


@unique
class PartOfDay(str, Enum):
    """Buckets used by the time dimension."""

    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"


@unique
class EmployeeRole(str, Enum):
    SUPPORT = "support"
    NETWORK_ADMIN = "network_admin"


@unique
class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


@unique
class SupportType(str, Enum):
    TECHNICAL = "technical"
    BILLING = "billing"


@unique
class SupportStatus(str, Enum):
    OPEN = "open"
    CLOSED = "closed"
    IN_PROGRESS = "in_progress"


@unique
class SupportPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@unique
class BillingNote(str, Enum):
    """Annotation attached to each row of the customer billing summary."""

    FULLY_PAID = "Fully Paid"
    PENDING_PAYMENT = "Pending Payment"
    CHECK_STATUS = "Check Status"


@unique
class ReferentialAction(str, Enum):
    """Foreign key actions understood by the delete/update policy table."""

    CASCADE = "CASCADE"
    RESTRICT = "RESTRICT"


# Money and usage columns share the DECIMAL(10,2) shape.
MONEY_DIGITS = 10
MONEY_PLACES = 2

MB_PER_GB = 1024
