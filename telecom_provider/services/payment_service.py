# telecom_provider/services/payment_service.py
"""
Payment service layer using SQLModel ORM.
"""
import logging
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlmodel import Session, select

from ..core.constants import PaymentStatus
from ..models import Payment
from .base_service import BaseCRUDService

logger = logging.getLogger(__name__)


class PaymentService(BaseCRUDService[Payment]):
    """
    Service layer for Payment operations using SQLModel ORM.
    """

    def __init__(self, session: Session):
        super().__init__(session, Payment)

    def get_payments_for_bill(self, billing_id: int) -> List[Payment]:
        """Get all payments applied to a bill, most recent first."""
        statement = (
            select(Payment)
            .where(Payment.billing_id == billing_id)
            .order_by(Payment.payment_date.desc())
        )
        return list(self.session.exec(statement).all())

    def record_payment(
        self,
        billing_id: int,
        amount_paid: Decimal,
        payment_status: PaymentStatus = PaymentStatus.COMPLETED,
        payment_date: Optional[datetime] = None,
    ) -> Payment:
        """
        Record a payment toward a bill.

        Args:
            billing_id: ID of the bill being paid
            amount_paid: Amount paid (must not be negative)
            payment_status: completed / failed / pending
            payment_date: Defaults to now
        """
        data = {
            "billing_id": billing_id,
            "amount_paid": amount_paid,
            "payment_status": payment_status,
        }
        if payment_date is not None:
            data["payment_date"] = payment_date

        payment = self.create(data)
        logger.info(f"Payment {payment.id} registered for bill {billing_id} ({payment.payment_status.value}).")
        return payment
