# telecom_provider/services/billing_service.py
"""
Billing service: bill issuing and the per-customer billing summary lookup.
"""

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel
from sqlmodel import Session, select

from ..core.constants import BillingNote, BillingStatus, PaymentStatus
from ..models import Billing, Customer, Payment, Subscription
from .base_service import BaseCRUDService

logger = logging.getLogger(__name__)


class BillingSummaryRow(BaseModel):
    full_name: str
    subscription_id: int
    billing_id: int
    billing_period_start: date
    billing_period_end: date
    total_amount: Decimal
    discount_amount: Decimal
    final_amount: Decimal
    billing_status: BillingStatus
    payment_status: Optional[PaymentStatus] = None
    payment_date: Optional[datetime] = None
    amount_paid: Optional[Decimal] = None
    billing_note: BillingNote


def billing_note(
    billing_status: BillingStatus, payment_status: Optional[PaymentStatus]
) -> BillingNote:
    """
    Three-state note for a bill/payment pair.
    Anything other than paid+completed or pending+pending, including a bill
    without payment, needs a manual check.
    """
    if billing_status == BillingStatus.PAID and payment_status == PaymentStatus.COMPLETED:
        return BillingNote.FULLY_PAID
    if billing_status == BillingStatus.PENDING and payment_status == PaymentStatus.PENDING:
        return BillingNote.PENDING_PAYMENT
    return BillingNote.CHECK_STATUS


class BillingService(BaseCRUDService[Billing]):
    """
    Service for billing operations using SQLModel ORM.
    final_amount is generated by the database; create/update reject it.
    """

    def __init__(self, session: Session):
        super().__init__(session, Billing)

    def issue_bill(self, data: dict) -> Billing:
        bill = self.create(data)
        logger.info(
            f"Bill {bill.id} issued for subscription {bill.subscription_id}: "
            f"{bill.total_amount} - {bill.discount_amount} = {bill.final_amount}"
        )
        return bill

    def get_bills_for_subscription(self, subscription_id: int) -> List[Billing]:
        statement = (
            select(Billing)
            .where(Billing.subscription_id == subscription_id)
            .order_by(Billing.billing_period_start.desc())
        )
        return list(self.session.exec(statement).all())

    def get_customer_billing_summary(self, customer_id: int) -> List[BillingSummaryRow]:
        """
        Every bill of the customer's subscriptions with its payment (if any),
        newest billing period first. A bill with several payments yields one
        row per payment; an unknown customer yields an empty list.
        """
        statement = (
            select(Customer.full_name, Subscription.id, Billing, Payment)
            .join(Subscription, Subscription.customer_id == Customer.id)
            .join(Billing, Billing.subscription_id == Subscription.id)
            .outerjoin(Payment, Payment.billing_id == Billing.id)
            .where(Customer.id == customer_id)
            .order_by(Billing.billing_period_start.desc(), Billing.id, Payment.id)
        )

        rows = []
        for full_name, subscription_id, bill, payment in self.session.exec(statement).all():
            payment_status = payment.payment_status if payment else None
            rows.append(
                BillingSummaryRow(
                    full_name=full_name,
                    subscription_id=subscription_id,
                    billing_id=bill.id,
                    billing_period_start=bill.billing_period_start,
                    billing_period_end=bill.billing_period_end,
                    total_amount=bill.total_amount,
                    discount_amount=bill.discount_amount,
                    final_amount=bill.final_amount,
                    billing_status=bill.status,
                    payment_status=payment_status,
                    payment_date=payment.payment_date if payment else None,
                    amount_paid=payment.amount_paid if payment else None,
                    billing_note=billing_note(bill.status, payment_status),
                )
            )

        if not rows:
            logger.info(f"No billing rows for customer {customer_id}")
        return rows
