# telecom_provider/reports/models.py
"""
Row schemas returned by the reports.
Monetary and usage values are Decimal with 2 places.
"""
from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from ..core.constants import (
    EmployeeRole,
    NetworkElementType,
    SupportStatus,
    TransactionType,
    UsageType,
)


class CityCustomerCount(BaseModel):
    city: str
    num_customers: int


class ActiveElementCount(BaseModel):
    city: str
    element_type: NetworkElementType
    active_elements: int


class EmployeeTicketCount(BaseModel):
    employee_name: str
    role: EmployeeRole
    status: SupportStatus
    ticket_count: int


class ResolutionTime(BaseModel):
    """Average of the whole hours each closed ticket took to resolve."""

    closed_tickets: int
    avg_resolution_hours: Optional[Decimal] = None


class CustomerAverageBill(BaseModel):
    customer_id: int
    full_name: str
    avg_bill: Decimal


class DaysToPay(BaseModel):
    billing_id: int
    payment_id: int
    days_to_pay: int


class PlanRevenue(BaseModel):
    plan_id: int
    plan_name: str
    total_revenue: Decimal


class LatestBill(BaseModel):
    customer_id: int
    full_name: str
    subscription_id: int
    billing_id: int
    billing_period_end: date
    final_amount: Decimal


class CustomerMonthlyUsage(BaseModel):
    full_name: str
    plan_name: str
    total_call_minutes: Decimal
    total_data_gb: Decimal
    total_sms_sent: Decimal


class SubscriptionUsageTotal(BaseModel):
    """First stage of the usage score: raw monthly total of one type."""

    subscription_id: int
    usage_type: UsageType
    total_amount: Decimal


class CustomerUsageScore(BaseModel):
    customer_id: int
    full_name: str
    total_call_minutes: Decimal
    total_data_gb: Decimal
    total_sms: Decimal
    usage_score: Decimal


class PromotionEffectiveness(BaseModel):
    promotion_id: int
    promotion_name: str
    times_applied: int
    total_data_mb: Decimal
    total_call_minutes: Decimal
    total_sms: Decimal
    total_billed_after_promo: Decimal
    billing_rank: int


class TransactionTypeTotal(BaseModel):
    transaction_type: TransactionType
    total_amount: Decimal
    num_transactions: int


class MonthlyTransactionVolume(BaseModel):
    month: str  # YYYY-MM
    total_transactions: int
    total_amount: Decimal


class CustomerTransactionVolume(BaseModel):
    customer_id: int
    full_name: str
    total_spent: Decimal
    txn_count: int


class FailedTransactionSupport(BaseModel):
    customer_id: int
    full_name: str
    failed_txns: int
    support_tickets: int
