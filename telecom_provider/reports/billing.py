# telecom_provider/reports/billing.py
"""
Billing and payment reports.

Averages are compared on exact decimal sums and counts, never on rounded
means, so a customer whose average equals the global average is not
reported as above it.
"""
from collections import OrderedDict
from decimal import Decimal
from typing import List

from sqlalchemy import func
from sqlalchemy.orm import aliased
from sqlmodel import Session, select

from ..core.constants import PaymentStatus
from ..models import Billing, Customer, Payment, ServicePlan, Subscription
from .common import round_money
from .models import CustomerAverageBill, DaysToPay, LatestBill, PlanRevenue


def above_average_customers(session: Session) -> List[CustomerAverageBill]:
    """Customers whose mean final bill is strictly above the mean of all bills."""
    all_amounts = [
        Decimal(amount)
        for amount in session.exec(select(Billing.final_amount)).all()
        if amount is not None
    ]
    if not all_amounts:
        return []
    global_sum, global_count = sum(all_amounts), len(all_amounts)

    statement = (
        select(Customer.id, Customer.full_name, Billing.final_amount)
        .join(Subscription, Subscription.customer_id == Customer.id)
        .join(Billing, Billing.subscription_id == Subscription.id)
        .where(Billing.final_amount.is_not(None))
        .order_by(Customer.id)
    )
    per_customer = OrderedDict()
    for customer_id, full_name, amount in session.exec(statement).all():
        entry = per_customer.setdefault(customer_id, [full_name, Decimal("0"), 0])
        entry[1] += Decimal(amount)
        entry[2] += 1

    rows = []
    for customer_id, (full_name, total, count) in per_customer.items():
        # total / count > global_sum / global_count, without dividing
        if total * global_count > global_sum * count:
            rows.append(
                CustomerAverageBill(
                    customer_id=customer_id,
                    full_name=full_name,
                    avg_bill=round_money(total / count),
                )
            )
    rows.sort(key=lambda row: (-row.avg_bill, row.customer_id))
    return rows


def days_to_pay(session: Session) -> List[DaysToPay]:
    """Days between issue and payment for every completed payment."""
    statement = (
        select(Billing.id, Payment.id, Billing.issue_date, Payment.payment_date)
        .join(Payment, Payment.billing_id == Billing.id)
        .where(Payment.payment_status == PaymentStatus.COMPLETED)
        .order_by(Billing.id, Payment.id)
    )
    return [
        DaysToPay(
            billing_id=billing_id,
            payment_id=payment_id,
            days_to_pay=(payment_date.date() - issue_date).days,
        )
        for billing_id, payment_id, issue_date, payment_date in session.exec(statement).all()
    ]


def revenue_per_plan(session: Session, limit: int = 5) -> List[PlanRevenue]:
    """Plans ranked by the sum of their final billed amounts."""
    total_revenue = func.sum(Billing.final_amount)
    statement = (
        select(ServicePlan.id, ServicePlan.plan_name, total_revenue)
        .join(Subscription, Subscription.plan_id == ServicePlan.id)
        .join(Billing, Billing.subscription_id == Subscription.id)
        .group_by(ServicePlan.id, ServicePlan.plan_name)
        .order_by(total_revenue.desc(), ServicePlan.id)
        .limit(limit)
    )
    return [
        PlanRevenue(plan_id=plan_id, plan_name=plan_name, total_revenue=round_money(revenue))
        for plan_id, plan_name, revenue in session.exec(statement).all()
    ]


def latest_bills(session: Session) -> List[LatestBill]:
    """
    The most recent bill of every subscription, i.e. the bill whose period
    ends on the latest billing_period_end of that subscription. When several
    bills share that end date they are all returned.
    """
    other = aliased(Billing)
    latest_end = (
        select(func.max(other.billing_period_end))
        .where(other.subscription_id == Subscription.id)
        .scalar_subquery()
    )
    statement = (
        select(
            Customer.id,
            Customer.full_name,
            Subscription.id,
            Billing.id,
            Billing.billing_period_end,
            Billing.final_amount,
        )
        .join(Subscription, Subscription.customer_id == Customer.id)
        .join(Billing, Billing.subscription_id == Subscription.id)
        .where(Billing.billing_period_end == latest_end)
        .order_by(Customer.id, Subscription.id, Billing.id)
    )
    return [
        LatestBill(
            customer_id=customer_id,
            full_name=full_name,
            subscription_id=subscription_id,
            billing_id=billing_id,
            billing_period_end=period_end,
            final_amount=final_amount,
        )
        for customer_id, full_name, subscription_id, billing_id, period_end, final_amount in (
            session.exec(statement).all()
        )
    ]
