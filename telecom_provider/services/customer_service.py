# telecom_provider/services/customer_service.py
"""
Customer service layer using SQLModel ORM.
"""
import logging
from typing import List

from sqlmodel import Session, select

from ..models import Customer, CustomerSupport, Subscription, Transaction
from .base_service import BaseCRUDService

logger = logging.getLogger(__name__)


class CustomerService(BaseCRUDService[Customer]):
    """
    Service layer for Customer operations.

    Renumbering a customer (renumber()) carries the new id into
    subscriptions, transactions and support tickets through ON UPDATE CASCADE.
    Deleting a customer is refused while any of those rows exist.
    """

    def __init__(self, session: Session):
        super().__init__(session, Customer)

    def get_all_customers(self) -> List[Customer]:
        statement = select(Customer).order_by(Customer.full_name)
        return list(self.session.exec(statement).all())

    def get_subscriptions(self, customer_id: int) -> List[Subscription]:
        self.get_by_id(customer_id)
        statement = (
            select(Subscription)
            .where(Subscription.customer_id == customer_id)
            .order_by(Subscription.start_date)
        )
        return list(self.session.exec(statement).all())

    def get_transactions(self, customer_id: int) -> List[Transaction]:
        """Ledger entries of a customer, newest first."""
        statement = (
            select(Transaction)
            .where(Transaction.customer_id == customer_id)
            .order_by(Transaction.transaction_date.desc(), Transaction.id.desc())
        )
        return list(self.session.exec(statement).all())

    def get_tickets(self, customer_id: int) -> List[CustomerSupport]:
        statement = (
            select(CustomerSupport)
            .where(CustomerSupport.customer_id == customer_id)
            .order_by(CustomerSupport.created_at.desc())
        )
        return list(self.session.exec(statement).all())
