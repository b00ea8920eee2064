# telecom_provider/reports/usage.py
"""
Usage reports.

Usage amounts are in the unit of their type: minutes for calls, a count for
SMS and megabytes for data. Data is converted to gigabytes (rounded to two
places) per customer before being combined with anything else.
"""
from collections import OrderedDict
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy import distinct, func
from sqlmodel import Session, select

from ..core.constants import SubscriptionStatus, UsageType
from ..models import (
    Billing,
    Customer,
    Promotion,
    ServicePlan,
    Subscription,
    SubscriptionPromotion,
    TimeDimension,
    UsageData,
)
from .common import mb_to_gb, month_window, round_money, standard_rank
from .models import (
    CustomerMonthlyUsage,
    CustomerUsageScore,
    PromotionEffectiveness,
    SubscriptionUsageTotal,
)

ZERO = Decimal("0")


def _empty_totals() -> Dict[UsageType, Decimal]:
    return {usage_type: ZERO for usage_type in UsageType}


def monthly_customer_usage(
    session: Session, month: Optional[date] = None
) -> List[CustomerMonthlyUsage]:
    """
    Call minutes, data (GB) and SMS of every customer and plan over one
    calendar month, counting active subscriptions only. Largest data users
    first.
    """
    start, end = month_window(month)
    statement = (
        select(
            Customer.id,
            Customer.full_name,
            ServicePlan.plan_name,
            UsageData.usage_type,
            func.sum(UsageData.amount),
        )
        .join(Subscription, Subscription.customer_id == Customer.id)
        .join(ServicePlan, Subscription.plan_id == ServicePlan.id)
        .join(UsageData, UsageData.subscription_id == Subscription.id)
        .join(TimeDimension, UsageData.time_id == TimeDimension.id)
        .where(
            Subscription.status == SubscriptionStatus.ACTIVE,
            TimeDimension.full_timestamp >= start,
            TimeDimension.full_timestamp < end,
        )
        .group_by(Customer.id, Customer.full_name, ServicePlan.plan_name, UsageData.usage_type)
        .order_by(Customer.id, ServicePlan.plan_name)
    )

    groups = OrderedDict()
    for customer_id, full_name, plan_name, usage_type, amount in session.exec(statement).all():
        key = (customer_id, full_name, plan_name)
        groups.setdefault(key, _empty_totals())[UsageType(usage_type)] += Decimal(amount or 0)

    rows = [
        (
            customer_id,
            CustomerMonthlyUsage(
                full_name=full_name,
                plan_name=plan_name,
                total_call_minutes=round_money(totals[UsageType.CALL]),
                total_data_gb=mb_to_gb(totals[UsageType.DATA]),
                total_sms_sent=round_money(totals[UsageType.SMS]),
            ),
        )
        for (customer_id, full_name, plan_name), totals in groups.items()
    ]
    rows.sort(key=lambda item: (-item[1].total_data_gb, item[0]))
    return [row for _, row in rows]


def monthly_subscription_usage(
    session: Session, month: Optional[date] = None
) -> List[SubscriptionUsageTotal]:
    """Raw usage totals per subscription and type over one calendar month."""
    start, end = month_window(month)
    statement = (
        select(UsageData.subscription_id, UsageData.usage_type, func.sum(UsageData.amount))
        .join(TimeDimension, UsageData.time_id == TimeDimension.id)
        .where(TimeDimension.full_timestamp >= start, TimeDimension.full_timestamp < end)
        .group_by(UsageData.subscription_id, UsageData.usage_type)
        .order_by(UsageData.subscription_id, UsageData.usage_type)
    )
    return [
        SubscriptionUsageTotal(
            subscription_id=subscription_id,
            usage_type=usage_type,
            total_amount=Decimal(amount or 0),
        )
        for subscription_id, usage_type, amount in session.exec(statement).all()
    ]


def top_usage_customers(
    session: Session, month: Optional[date] = None, limit: int = 5
) -> List[CustomerUsageScore]:
    """
    Customers ranked by usage score over one calendar month:
    call minutes + SMS count + data in GB.

    Two stages: raw totals per subscription and type first, then per
    customer the GB value is rounded before it enters the score.
    """
    subscription_totals = monthly_subscription_usage(session, month)
    if not subscription_totals:
        return []

    subscription_ids = {total.subscription_id for total in subscription_totals}
    owners = {
        subscription_id: (customer_id, full_name)
        for subscription_id, customer_id, full_name in session.exec(
            select(Subscription.id, Customer.id, Customer.full_name)
            .join(Customer, Subscription.customer_id == Customer.id)
            .where(Subscription.id.in_(subscription_ids))
        ).all()
    }

    per_customer = {}
    for total in subscription_totals:
        owner = owners[total.subscription_id]
        per_customer.setdefault(owner, _empty_totals())[total.usage_type] += total.total_amount

    scores = []
    for (customer_id, full_name), totals in per_customer.items():
        data_gb = mb_to_gb(totals[UsageType.DATA])
        call_minutes = totals[UsageType.CALL]
        sms = totals[UsageType.SMS]
        scores.append(
            CustomerUsageScore(
                customer_id=customer_id,
                full_name=full_name,
                total_call_minutes=round_money(call_minutes),
                total_data_gb=data_gb,
                total_sms=round_money(sms),
                usage_score=round_money(call_minutes + sms + data_gb),
            )
        )
    scores.sort(key=lambda row: (-row.usage_score, row.customer_id))
    return scores[:limit]


def promotion_effectiveness(session: Session) -> List[PromotionEffectiveness]:
    """
    Every applied promotion with the number of subscriptions that used it,
    the usage recorded since each application and the amount billed for
    periods starting on or after the application date, ranked by billed
    amount (ties share a rank). Missing usage or billing counts as zero.
    """
    applied = session.exec(
        select(
            Promotion.id,
            Promotion.name,
            func.count(distinct(SubscriptionPromotion.subscription_id)),
        )
        .select_from(SubscriptionPromotion)
        .join(Promotion, SubscriptionPromotion.promotion_id == Promotion.id)
        .group_by(Promotion.id, Promotion.name)
        .order_by(Promotion.id)
    ).all()
    if not applied:
        return []

    usage: Dict[int, Dict[UsageType, Decimal]] = {}
    usage_statement = (
        select(SubscriptionPromotion.promotion_id, UsageData.usage_type, func.sum(UsageData.amount))
        .join(UsageData, UsageData.subscription_id == SubscriptionPromotion.subscription_id)
        .join(TimeDimension, UsageData.time_id == TimeDimension.id)
        .where(TimeDimension.full_timestamp >= SubscriptionPromotion.applied_date)
        .group_by(SubscriptionPromotion.promotion_id, UsageData.usage_type)
    )
    for promotion_id, usage_type, amount in session.exec(usage_statement).all():
        usage.setdefault(promotion_id, _empty_totals())[UsageType(usage_type)] = Decimal(amount or 0)

    billing_statement = (
        select(SubscriptionPromotion.promotion_id, func.sum(Billing.final_amount))
        .join(Billing, Billing.subscription_id == SubscriptionPromotion.subscription_id)
        .where(Billing.billing_period_start >= SubscriptionPromotion.applied_date)
        .group_by(SubscriptionPromotion.promotion_id)
    )
    billed = {
        promotion_id: round_money(amount or 0)
        for promotion_id, amount in session.exec(billing_statement).all()
    }

    totals_billed = [billed.get(promotion_id, round_money(ZERO)) for promotion_id, _, _ in applied]
    ranks = standard_rank(totals_billed)

    rows = []
    for (promotion_id, name, times_applied), total_billed, rank in zip(applied, totals_billed, ranks):
        promo_usage = usage.get(promotion_id, _empty_totals())
        rows.append(
            PromotionEffectiveness(
                promotion_id=promotion_id,
                promotion_name=name,
                times_applied=times_applied,
                total_data_mb=round_money(promo_usage[UsageType.DATA]),
                total_call_minutes=round_money(promo_usage[UsageType.CALL]),
                total_sms=round_money(promo_usage[UsageType.SMS]),
                total_billed_after_promo=total_billed,
                billing_rank=rank,
            )
        )
    rows.sort(key=lambda row: (row.billing_rank, row.promotion_id))
    return rows
