"""
Shared fixtures: a fresh in-memory database per test, the sample data set
and a small factory for hand-built scenarios.
"""
from datetime import date, datetime
from decimal import Decimal

import pytest
from sqlmodel import Session

from telecom_provider.core import audit
from telecom_provider.core.constants import (
    BillingStatus,
    CustomerStatus,
    EmployeeRole,
    EmployeeStatus,
    NetworkElementStatus,
    NetworkElementType,
    PlanStatus,
    PromotionStatus,
    SubscriptionStatus,
)
from telecom_provider.db.engine_sync import create_sync_db_and_tables, make_engine
from telecom_provider.db.seed import seed_sample_data
from telecom_provider.services.base_service import BaseCRUDService
from telecom_provider.services.billing_service import BillingService
from telecom_provider.services.customer_service import CustomerService
from telecom_provider.services.subscription_service import SubscriptionService
from telecom_provider.services.usage_service import UsageService
from telecom_provider.models import (
    Employee,
    Location,
    NetworkElement,
    Promotion,
    ServicePlan,
)

# Payments and transactions of the sample data are stamped with this time
SEED_TIME = datetime(2025, 6, 15, 12, 0, 0)


def _reset_audit_handlers():
    for handler in list(audit.audit_logger.handlers):
        audit.audit_logger.removeHandler(handler)
        handler.close()


@pytest.fixture(autouse=True)
def log_dir(tmp_path, monkeypatch):
    """Send the audit log of every test to its own temporary directory."""
    path = tmp_path / "logs"
    monkeypatch.setenv("LOG_DIR", str(path))
    _reset_audit_handlers()
    yield path
    _reset_audit_handlers()


@pytest.fixture
def engine():
    engine = make_engine("sqlite://")
    create_sync_db_and_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def seeded_session(session):
    seed_sample_data(session, now=SEED_TIME)
    return session


class Factory:
    """Builds minimal valid rows through the services."""

    def __init__(self, session: Session):
        self.session = session
        self._counter = 0

    def _next(self) -> int:
        self._counter += 1
        return self._counter

    def location(self) -> Location:
        n = self._next()
        return BaseCRUDService(self.session, Location).create(
            {"city": f"City {n}", "country": f"Country {n}"}
        )

    def plan(self, name: str = "Test Plan") -> ServicePlan:
        return BaseCRUDService(self.session, ServicePlan).create(
            {
                "plan_name": name,
                "price": Decimal("10.00"),
                "data_limit_gb": Decimal("5.00"),
                "call_minutes": 100,
                "sms_count": 100,
                "validity_days": 30,
                "status": PlanStatus.ACTIVE,
            }
        )

    def customer(self, location_id: int = None, **overrides):
        n = self._next()
        if location_id is None:
            location_id = self.location().id
        data = {
            "full_name": f"Customer {n}",
            "phone": f"555000{n:04d}",
            "email": f"customer{n}@example.com",
            "location_id": location_id,
            "registration_date": date(2024, 1, 1),
            "status": CustomerStatus.ACTIVE,
            **overrides,
        }
        return CustomerService(self.session).create(data)

    def subscription(self, customer_id: int, plan_id: int, **overrides):
        data = {
            "start_date": date(2025, 1, 1),
            "end_date": date(2025, 12, 31),
            "status": SubscriptionStatus.ACTIVE,
            "customer_id": customer_id,
            "plan_id": plan_id,
            **overrides,
        }
        return SubscriptionService(self.session).subscribe(data)

    def bill(self, subscription_id: int, total, discount="0.00", start=date(2025, 4, 1),
             end=date(2025, 4, 30), status=BillingStatus.UNPAID):
        return BillingService(self.session).issue_bill(
            {
                "billing_period_start": start,
                "billing_period_end": end,
                "issue_date": end,
                "due_date": end,
                "total_amount": Decimal(str(total)),
                "discount_amount": Decimal(str(discount)),
                "status": status,
                "subscription_id": subscription_id,
            }
        )

    def promotion(self, plan_id: int, name: str = None) -> Promotion:
        n = self._next()
        return BaseCRUDService(self.session, Promotion).create(
            {
                "name": name or f"Promotion {n}",
                "description": "Test promotion",
                "discount_value": Decimal("5.00"),
                "start_date": date(2025, 1, 1),
                "end_date": date(2025, 12, 31),
                "status": PromotionStatus.ACTIVE,
                "plan_id": plan_id,
            }
        )

    def network_element(self) -> NetworkElement:
        n = self._next()
        employee = BaseCRUDService(self.session, Employee).create(
            {
                "full_name": f"Employee {n}",
                "email": f"employee{n}@teleco.com",
                "role": EmployeeRole.NETWORK_ADMIN,
                "status": EmployeeStatus.ACTIVE,
            }
        )
        return BaseCRUDService(self.session, NetworkElement).create(
            {
                "name": f"Tower {n}",
                "element_type": NetworkElementType.TOWER,
                "status": NetworkElementStatus.ACTIVE,
                "location_id": self.location().id,
                "employee_id": employee.id,
            }
        )

    def usage(self, subscription_id: int, usage_type, amount, moment: datetime, network_element_id=None):
        if network_element_id is None:
            network_element_id = self.network_element().id
        return UsageService(self.session).record_usage(
            subscription_id, network_element_id, usage_type, Decimal(str(amount)), moment
        )


@pytest.fixture
def factory(session):
    return Factory(session)
