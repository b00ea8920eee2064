# telecom_provider/reports/transactions.py
"""
Reports over the transaction ledger.
"""
from collections import OrderedDict
from datetime import date, datetime, time
from decimal import Decimal
from typing import List, Optional

from dateutil.relativedelta import relativedelta
from sqlalchemy import func
from sqlmodel import Session, select

from ..core.constants import TransactionStatus
from ..models import Customer, CustomerSupport, Transaction
from .common import round_money
from .models import (
    CustomerTransactionVolume,
    FailedTransactionSupport,
    MonthlyTransactionVolume,
    TransactionTypeTotal,
)


def totals_by_type(session: Session) -> List[TransactionTypeTotal]:
    """Amount and number of transactions of each type, largest amount first."""
    total_amount = func.sum(Transaction.amount)
    statement = (
        select(Transaction.transaction_type, total_amount, func.count(Transaction.id))
        .group_by(Transaction.transaction_type)
        .order_by(total_amount.desc(), Transaction.transaction_type)
    )
    return [
        TransactionTypeTotal(
            transaction_type=transaction_type,
            total_amount=round_money(amount),
            num_transactions=count,
        )
        for transaction_type, amount, count in session.exec(statement).all()
    ]


def monthly_volume(session: Session, as_of: Optional[date] = None) -> List[MonthlyTransactionVolume]:
    """
    Transactions per calendar month ('YYYY-MM') since the same day three
    months before `as_of` (default: today), newest month first.
    """
    as_of = as_of or date.today()
    since = datetime.combine(as_of - relativedelta(months=3), time.min)
    statement = (
        select(Transaction.transaction_date, Transaction.amount)
        .where(Transaction.transaction_date >= since)
        .order_by(Transaction.transaction_date.desc())
    )

    months = OrderedDict()
    for transaction_date, amount in session.exec(statement).all():
        entry = months.setdefault(transaction_date.strftime("%Y-%m"), [0, Decimal("0")])
        entry[0] += 1
        entry[1] += Decimal(amount)

    return [
        MonthlyTransactionVolume(month=month, total_transactions=count, total_amount=round_money(total))
        for month, (count, total) in sorted(months.items(), reverse=True)
    ]


def top_customers_by_volume(session: Session, limit: int = 5) -> List[CustomerTransactionVolume]:
    """Customers with the largest transaction amount, across every type and status."""
    total_spent = func.sum(Transaction.amount)
    statement = (
        select(Customer.id, Customer.full_name, total_spent, func.count(Transaction.id))
        .select_from(Transaction)
        .join(Customer, Transaction.customer_id == Customer.id)
        .group_by(Customer.id, Customer.full_name)
        .order_by(total_spent.desc(), Customer.id)
        .limit(limit)
    )
    return [
        CustomerTransactionVolume(
            customer_id=customer_id,
            full_name=full_name,
            total_spent=round_money(total),
            txn_count=count,
        )
        for customer_id, full_name, total, count in session.exec(statement).all()
    ]


def failed_transactions_with_support(session: Session) -> List[FailedTransactionSupport]:
    """
    Customers with at least one failed transaction AND at least one support
    ticket. Both counts are taken independently of each other.
    """
    failed = (
        select(Transaction.customer_id, func.count(Transaction.id).label("failed_txns"))
        .where(Transaction.status == TransactionStatus.FAILED)
        .group_by(Transaction.customer_id)
        .subquery()
    )
    tickets = (
        select(CustomerSupport.customer_id, func.count(CustomerSupport.id).label("support_tickets"))
        .group_by(CustomerSupport.customer_id)
        .subquery()
    )
    statement = (
        select(Customer.id, Customer.full_name, failed.c.failed_txns, tickets.c.support_tickets)
        .join(failed, failed.c.customer_id == Customer.id)
        .join(tickets, tickets.c.customer_id == Customer.id)
        .order_by(failed.c.failed_txns.desc(), Customer.id)
    )
    return [
        FailedTransactionSupport(
            customer_id=customer_id,
            full_name=full_name,
            failed_txns=failed_txns,
            support_tickets=support_tickets,
        )
        for customer_id, full_name, failed_txns, support_tickets in session.exec(statement).all()
    ]
