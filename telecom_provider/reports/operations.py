# telecom_provider/reports/operations.py
"""
Customer base, network and support desk reports.
"""
from datetime import timedelta
from decimal import Decimal
from typing import List

from sqlalchemy import func
from sqlmodel import Session, select

from ..core.constants import NetworkElementStatus, SupportStatus
from ..models import Customer, CustomerSupport, Employee, Location, NetworkElement
from .models import ActiveElementCount, CityCustomerCount, EmployeeTicketCount, ResolutionTime

HOUR = timedelta(hours=1)


def customers_per_city(session: Session) -> List[CityCustomerCount]:
    """Number of registered customers in each city, largest first."""
    num_customers = func.count(Customer.id)
    statement = (
        select(Location.city, num_customers)
        .join(Customer, Customer.location_id == Location.id)
        .group_by(Location.city)
        .order_by(num_customers.desc(), Location.city)
    )
    return [
        CityCustomerCount(city=city, num_customers=count)
        for city, count in session.exec(statement).all()
    ]


def active_elements_per_city(session: Session) -> List[ActiveElementCount]:
    """Active towers, routers and switches per city and type."""
    active_elements = func.count(NetworkElement.id)
    statement = (
        select(Location.city, NetworkElement.element_type, active_elements)
        .select_from(NetworkElement)
        .join(Location, NetworkElement.location_id == Location.id)
        .where(NetworkElement.status == NetworkElementStatus.ACTIVE)
        .group_by(Location.city, NetworkElement.element_type)
        .order_by(Location.city, NetworkElement.element_type)
    )
    return [
        ActiveElementCount(city=city, element_type=element_type, active_elements=count)
        for city, element_type, count in session.exec(statement).all()
    ]


def tickets_per_employee(session: Session) -> List[EmployeeTicketCount]:
    """Tickets handled by each employee, split by ticket status."""
    ticket_count = func.count(CustomerSupport.id)
    statement = (
        select(Employee.full_name, Employee.role, CustomerSupport.status, ticket_count)
        .select_from(CustomerSupport)
        .join(Employee, CustomerSupport.employee_id == Employee.id)
        .group_by(Employee.id, Employee.full_name, Employee.role, CustomerSupport.status)
        .order_by(Employee.full_name, CustomerSupport.status)
    )
    return [
        EmployeeTicketCount(employee_name=name, role=role, status=status, ticket_count=count)
        for name, role, status, count in session.exec(statement).all()
    ]


def average_resolution_time(session: Session) -> ResolutionTime:
    """
    Mean resolution time of closed tickets that have a closed_at.
    Each ticket counts whole elapsed hours (partial hours are dropped),
    and the mean is reported with 4 decimal places.
    """
    statement = select(CustomerSupport.created_at, CustomerSupport.closed_at).where(
        CustomerSupport.status == SupportStatus.CLOSED,
        CustomerSupport.closed_at.is_not(None),
    )
    hours = [
        int((closed_at - created_at) / HOUR)
        for created_at, closed_at in session.exec(statement).all()
    ]
    if not hours:
        return ResolutionTime(closed_tickets=0)

    average = (Decimal(sum(hours)) / len(hours)).quantize(Decimal("0.0001"))
    return ResolutionTime(closed_tickets=len(hours), avg_resolution_hours=average)
