# telecom_provider/db/seed.py
"""
Sample data for a fresh database.

Rows are validated through the models (so dates, enums and amounts go
through the same checks as any other write) and inserted parent-first.
Seeding is skipped when the database already has customers.
"""
import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence, Type

from sqlmodel import Session, SQLModel, select

from ..models import (
    Billing,
    Customer,
    CustomerSupport,
    Employee,
    Location,
    NetworkElement,
    Payment,
    Promotion,
    ServicePlan,
    Subscription,
    SubscriptionPromotion,
    TimeDimension,
    Transaction,
    UsageData,
)

logger = logging.getLogger(__name__)

LOCATIONS = [
    (1, "Berlin", "Germany"),
    (2, "Barcelona", "Spain"),
    (3, "Sydney", "Australia"),
    (4, "Helsinki", "Finland"),
    (5, "Tokyo", "Japan"),
]

SERVICE_PLANS = [
    (1, "Basic Plan", "9.99", "5.00", 100, 100, 30, "active"),
    (2, "Standard Plan", "19.99", "10.00", 300, 300, 30, "active"),
    (3, "Premium Plan", "29.99", "25.00", 1000, 500, 30, "active"),
    (4, "Unlimited Talk Plan", "24.99", "3.00", 9999, 500, 30, "active"),
    (5, "Data Max Plan", "34.99", "50.00", 500, 100, 30, "active"),
]

EMPLOYEES = [
    (1, "Alice Jensen", "alice.jensen@teleco.com", "network_admin", "active"),
    (2, "Markus Lindgren", "markus.lindgren@teleco.com", "support", "active"),
    (3, "Chloe Dubois", "chloe.dubois@teleco.com", "network_admin", "active"),
]

TIME_ROWS = [
    (1, "2025-05-01 08:30:00", "Thursday", "morning"),
    (2, "2025-05-01 14:15:00", "Thursday", "afternoon"),
    (3, "2025-05-02 19:45:00", "Friday", "evening"),
    (4, "2025-05-03 23:00:00", "Saturday", "night"),
    (5, "2025-05-04 09:20:00", "Sunday", "morning"),
    (6, "2025-05-05 15:10:00", "Monday", "afternoon"),
    (7, "2025-05-06 18:00:00", "Tuesday", "evening"),
    (8, "2025-05-07 21:50:00", "Wednesday", "night"),
    (9, "2025-05-08 07:40:00", "Thursday", "morning"),
    (10, "2025-05-09 16:30:00", "Friday", "afternoon"),
]

# id, full_name, email, location_id, registration_date, status
CUSTOMERS = [
    (1, "John Smith", "john.smith@example.com", 1, "2024-01-15", "active"),
    (2, "Emily Johnson", "emily.johnson@example.com", 2, "2023-12-20", "active"),
    (3, "Michael Brown", "michael.brown@example.com", 3, "2024-02-01", "inactive"),
    (4, "Olivia Davis", "olivia.davis@example.com", 4, "2024-03-12", "active"),
    (5, "Daniel Wilson", "daniel.wilson@example.com", 5, "2024-01-30", "active"),
    (6, "Sophia Miller", "sophia.miller@example.com", 1, "2023-11-18", "inactive"),
    (7, "James Taylor", "james.taylor@example.com", 2, "2024-02-25", "active"),
    (8, "Ava Moore", "ava.moore@example.com", 3, "2024-03-05", "active"),
    (9, "William Anderson", "william.anderson@example.com", 4, "2024-01-05", "inactive"),
    (10, "Charlotte Thomas", "charlotte.thomas@example.com", 5, "2024-04-01", "active"),
    (11, "Benjamin Jackson", "ben.jackson@example.com", 1, "2024-04-10", "active"),
    (12, "Mia White", "mia.white@example.com", 2, "2024-03-15", "inactive"),
    (13, "Henry Harris", "henry.harris@example.com", 3, "2024-02-22", "active"),
    (14, "Grace Martin", "grace.martin@example.com", 4, "2024-01-08", "inactive"),
    (15, "Logan Thompson", "logan.thompson@example.com", 5, "2023-12-28", "active"),
    (16, "Ella Garcia", "ella.garcia@example.com", 1, "2024-03-01", "active"),
    (17, "Alexander Martinez", "alex.martinez@example.com", 2, "2024-02-19", "inactive"),
    (18, "Lily Robinson", "lily.robinson@example.com", 3, "2024-01-22", "active"),
    (19, "Sebastian Clark", "seb.clark@example.com", 4, "2024-02-12", "active"),
    (20, "Chloe Rodriguez", "chloe.rodriguez@example.com", 5, "2024-03-17", "inactive"),
    (21, "David Lewis", "david.lewis@example.com", 1, "2024-02-14", "active"),
    (22, "Sofia Lee", "sofia.lee@example.com", 2, "2024-03-29", "active"),
    (23, "Matthew Walker", "matthew.walker@example.com", 3, "2024-01-11", "inactive"),
    (24, "Amelia Hall", "amelia.hall@example.com", 4, "2024-04-02", "active"),
    (25, "Lucas Allen", "lucas.allen@example.com", 5, "2024-01-27", "active"),
    (26, "Harper Young", "harper.young@example.com", 1, "2024-02-07", "inactive"),
    (27, "Nathan King", "nathan.king@example.com", 2, "2024-03-06", "active"),
    (28, "Zoe Wright", "zoe.wright@example.com", 3, "2024-01-18", "active"),
    (29, "Liam Scott", "liam.scott@example.com", 4, "2024-03-10", "inactive"),
    (30, "Isabella Green", "isabella.green@example.com", 5, "2024-04-05", "active"),
    (31, "Ethan Baker", "ethan.baker@example.com", 1, "2024-01-02", "active"),
]

NETWORK_ELEMENTS = [
    (1, "Tower Alpha", "tower", "active", 1, 1),
    (2, "Router Beta", "router", "active", 2, 2),
    (3, "Switch Gamma", "switch", "active", 3, 3),
    (4, "Tower Delta", "tower", "inactive", 4, 2),
    (5, "Router Epsilon", "router", "active", 5, 3),
    (6, "Switch Zeta", "switch", "inactive", 1, 1),
    (7, "Tower Eta", "tower", "active", 2, 3),
    (8, "Router Theta", "router", "active", 3, 1),
    (9, "Switch Iota", "switch", "active", 4, 2),
    (10, "Tower Kappa", "tower", "active", 5, 2),
]

PROMOTIONS = [
    (1, "Welcome Bonus", "10% off on first month", "10.00", "2025-01-01", "2025-12-31", "active", 1),
    (2, "Data Booster", "5 GB extra data free", "5.00", "2025-02-01", "2025-08-31", "active", 2),
    (3, "Talk Time Saver", "20% off on call minutes", "8.00", "2025-01-15", "2025-06-30", "expired", 3),
    (4, "SMS Frenzy", "Unlimited SMS add-on", "6.00", "2025-03-01", "2025-07-01", "active", 4),
    (5, "Combo Deal", "All-in-one package discount", "15.00", "2025-01-20", "2025-12-31", "active", 5),
    (6, "Loyalty Reward", "Special rate for long-term users", "12.00", "2025-02-15", "2025-12-15", "active", 1),
    (7, "Night Owl", "Night usage discount", "7.00", "2025-03-01", "2025-09-30", "active", 2),
    (8, "Weekend Treat", "Weekend usage bonus", "9.00", "2025-04-01", "2025-10-01", "active", 3),
    (9, "Student Saver", "Student-exclusive discount", "10.00", "2025-01-10", "2025-12-31", "active", 4),
    (10, "Festive Offer", "Seasonal promotional package", "13.00", "2025-03-15", "2025-05-30", "expired", 5),
]

# id, start_date, end_date, status, customer_id, plan_id
SUBSCRIPTIONS = [
    (1, "2024-01-01", "2024-12-31", "active", 1, 1),
    (2, "2024-02-01", "2024-11-30", "inactive", 2, 2),
    (3, "2024-03-15", "2025-03-14", "active", 3, 3),
    (4, "2024-04-01", "2025-03-31", "inactive", 4, 4),
    (5, "2024-05-10", "2025-05-09", "active", 5, 5),
    (6, "2024-06-01", "2025-05-31", "active", 6, 1),
    (7, "2024-07-20", "2025-07-19", "active", 7, 2),
    (8, "2024-08-05", "2025-08-04", "inactive", 8, 3),
    (9, "2024-09-01", "2025-08-31", "active", 9, 4),
    (10, "2024-10-15", "2025-10-14", "active", 10, 5),
    (11, "2024-11-01", "2025-10-31", "inactive", 11, 1),
    (12, "2024-12-01", "2025-11-30", "active", 12, 2),
    (13, "2024-01-10", "2025-01-09", "inactive", 13, 3),
    (14, "2024-02-20", "2025-02-19", "active", 14, 4),
    (15, "2024-03-25", "2025-03-24", "active", 15, 5),
    (16, "2024-04-15", "2025-04-14", "inactive", 16, 1),
    (17, "2024-05-05", "2025-05-04", "active", 17, 2),
    (18, "2024-06-20", "2025-06-19", "active", 18, 3),
    (19, "2024-07-01", "2025-06-30", "inactive", 19, 4),
    (20, "2024-08-10", "2025-08-09", "active", 20, 5),
    (21, "2024-09-15", "2025-09-14", "active", 21, 1),
    (22, "2024-10-01", "2025-09-30", "inactive", 22, 2),
    (23, "2024-11-05", "2025-11-04", "active", 23, 3),
    (24, "2024-12-15", "2025-12-14", "active", 24, 4),
    (25, "2024-01-30", "2025-01-29", "inactive", 25, 5),
    (26, "2024-02-10", "2025-02-09", "active", 26, 1),
    (27, "2024-03-10", "2025-03-09", "active", 27, 2),
    (28, "2024-04-20", "2025-04-19", "inactive", 28, 3),
    (29, "2024-05-15", "2025-05-14", "active", 29, 4),
    (30, "2024-06-05", "2025-06-04", "active", 30, 5),
    (31, "2024-07-10", "2025-07-09", "active", 31, 1),
]

# subscription_id, promotion_id, applied_date
SUBSCRIPTION_PROMOTIONS = [
    (1, 2, "2025-03-01"), (2, 5, "2025-03-01"), (3, 1, "2025-03-02"), (4, 3, "2025-03-03"),
    (5, 6, "2025-03-04"), (6, 2, "2025-03-05"), (7, 7, "2025-03-06"), (8, 4, "2025-03-06"),
    (9, 9, "2025-03-07"), (10, 7, "2025-03-08"), (11, 1, "2025-03-09"), (12, 3, "2025-03-10"),
    (13, 2, "2025-03-11"), (14, 8, "2025-03-12"), (15, 5, "2025-03-13"), (16, 6, "2025-03-14"),
    (17, 9, "2025-03-15"), (18, 1, "2025-03-16"), (19, 2, "2025-03-17"), (20, 3, "2025-03-18"),
    (21, 7, "2025-03-18"), (22, 4, "2025-03-19"), (23, 5, "2025-03-20"), (24, 6, "2025-03-21"),
    (25, 2, "2025-03-22"), (26, 8, "2025-03-23"), (27, 1, "2025-03-24"), (28, 3, "2025-03-25"),
    (29, 5, "2025-03-26"), (30, 6, "2025-03-27"), (31, 7, "2025-03-28"), (1, 10, "2025-03-28"),
    (2, 9, "2025-03-29"), (3, 2, "2025-03-30"), (4, 4, "2025-03-30"), (5, 1, "2025-03-31"),
    (6, 3, "2025-03-31"), (7, 8, "2025-03-05"), (8, 9, "2025-03-14"), (9, 10, "2025-03-20"),
]

# id, usage_type, amount, subscription_id, network_element_id, time_id
USAGE = [
    (1, "call", "12.50", 1, 1, 1),
    (2, "sms", "5", 2, 2, 2),
    (3, "data", "350.75", 3, 3, 3),
    (4, "call", "7.30", 4, 1, 4),
    (5, "sms", "3", 5, 2, 5),
    (6, "data", "100.00", 6, 3, 6),
    (7, "call", "20.00", 7, 1, 7),
    (8, "data", "250.25", 8, 2, 8),
    (9, "sms", "10", 9, 3, 9),
    (10, "call", "5.00", 10, 2, 10),
    (11, "data", "500.00", 1, 1, 3),
    (12, "sms", "2", 2, 3, 1),
    (13, "call", "15.00", 3, 2, 2),
    (14, "data", "75.25", 4, 3, 4),
    (15, "sms", "6", 5, 2, 5),
    (16, "call", "9.50", 6, 1, 6),
    (17, "data", "120.75", 7, 3, 7),
    (18, "sms", "8", 8, 2, 8),
    (19, "call", "18.25", 9, 1, 9),
    (20, "data", "300.00", 10, 3, 10),
]

# id, support_type, description, status, created_at, closed_at, priority, customer_id, employee_id
SUPPORT_TICKETS = [
    (1, "technical", "Internet connection drops intermittently.", "closed",
     "2024-11-01 10:15:00", "2024-11-02 14:30:00", "high", 1, 1),
    (2, "billing", "Discrepancy in the latest invoice.", "open",
     "2025-05-30 08:45:00", None, "medium", 2, 2),
    (3, "technical", "Router is not turning on after reboot.", "in_progress",
     "2025-06-01 09:00:00", None, "high", 3, 3),
    (4, "billing", "Need clarification on VAT charges.", "closed",
     "2025-05-15 12:00:00", "2025-05-16 16:00:00", "low", 4, 2),
    (5, "technical", "Slow internet speed during evenings.", "in_progress",
     "2025-06-01 19:00:00", None, "medium", 5, 1),
]

# id, period start, period end, issue_date, due_date, discount_amount, total_amount, status, subscription_id
BILLINGS = [
    (1, "2025-04-01", "2025-04-30", "2025-05-01", "2025-05-10", "5.00", "50.00", "paid", 1),
    (2, "2025-04-01", "2025-04-30", "2025-05-01", "2025-05-10", "0.00", "60.00", "unpaid", 2),
    (3, "2025-03-01", "2025-03-31", "2025-04-01", "2025-04-10", "10.00", "55.00", "paid", 3),
    (4, "2025-04-15", "2025-05-14", "2025-05-15", "2025-05-25", "2.50", "45.00", "pending", 4),
    (5, "2025-05-01", "2025-05-31", "2025-06-01", "2025-06-10", "0.00", "70.00", "paid", 5),
    (6, "2025-04-01", "2025-04-30", "2025-05-01", "2025-05-10", "3.00", "40.00", "paid", 6),
    (7, "2025-03-01", "2025-03-31", "2025-04-01", "2025-04-10", "0.00", "65.00", "unpaid", 7),
    (8, "2025-05-01", "2025-05-31", "2025-06-01", "2025-06-10", "7.00", "80.00", "pending", 8),
    (9, "2025-05-01", "2025-05-31", "2025-06-01", "2025-06-10", "0.00", "75.00", "paid", 9),
    (10, "2025-03-15", "2025-04-14", "2025-04-15", "2025-04-25", "5.00", "50.00", "unpaid", 10),
]

# id, amount_paid, payment_status, billing_id
PAYMENTS = [
    (1, "55.00", "completed", 1),
    (2, "60.00", "completed", 2),
    (3, "45.00", "failed", 3),
    (4, "70.00", "completed", 4),
    (5, "50.00", "pending", 5),
    (6, "65.00", "completed", 6),
    (7, "80.00", "completed", 7),
    (8, "40.00", "failed", 8),
    (9, "90.00", "completed", 9),
    (10, "75.00", "pending", 10),
]

# transaction_type, amount, status, description, customer_id
TRANSACTIONS = [
    ("deposit", "100.00", "success", "Top-up via credit card", 1),
    ("withdraw", "50.00", "success", "Bill payment deduction", 2),
    ("transfer", "30.00", "success", "Transferred to family account", 3),
    ("deposit", "75.00", "pending", "Pending bank processing", 4),
    ("withdraw", "60.00", "failed", "Insufficient balance", 5),
    ("deposit", "120.00", "success", "Direct debit recharge", 6),
    ("transfer", "40.00", "success", "Transferred to another number", 7),
    ("withdraw", "55.00", "success", "Monthly bill auto-payment", 8),
    ("deposit", "90.00", "success", "Top-up via app", 9),
    ("withdraw", "65.00", "pending", "Scheduled deduction", 10),
]


def _rows(columns: Sequence[str], values: Iterable[Sequence[Any]], **extra: Any) -> List[Dict[str, Any]]:
    return [{**dict(zip(columns, row)), **extra} for row in values]


def _load(session: Session, model: Type[SQLModel], rows: List[Dict[str, Any]]) -> None:
    session.add_all([model.model_validate(row) for row in rows])
    # Flush per table so parents exist before children are inserted
    session.flush()
    logger.info(f"Seeded {len(rows)} rows into {model.__tablename__}")


def seed_sample_data(session: Session, now: Optional[datetime] = None) -> bool:
    """
    Load the sample data set. Returns False (and writes nothing) when
    customers already exist.

    Payments, transactions and employee records are stamped with `now`
    (default: the current time).
    """
    if session.exec(select(Customer.id).limit(1)).first() is not None:
        logger.info("Database already has customers; skipping sample data")
        return False

    now = now or datetime.now()
    tables = [
        (Location, _rows(("id", "city", "country"), LOCATIONS)),
        (
            ServicePlan,
            _rows(
                ("id", "plan_name", "price", "data_limit_gb", "call_minutes", "sms_count",
                 "validity_days", "status"),
                SERVICE_PLANS,
            ),
        ),
        (Employee, _rows(("id", "full_name", "email", "role", "status"), EMPLOYEES, created_at=now)),
        (TimeDimension, _rows(("id", "full_timestamp", "day_of_week", "part_of_day"), TIME_ROWS)),
        (
            Customer,
            [
                {**row, "phone": f"091212345{row['id']:02d}"}
                for row in _rows(
                    ("id", "full_name", "email", "location_id", "registration_date", "status"),
                    CUSTOMERS,
                )
            ],
        ),
        (
            NetworkElement,
            _rows(
                ("id", "name", "element_type", "status", "location_id", "employee_id"),
                NETWORK_ELEMENTS,
            ),
        ),
        (
            Promotion,
            _rows(
                ("id", "name", "description", "discount_value", "start_date", "end_date",
                 "status", "plan_id"),
                PROMOTIONS,
            ),
        ),
        (
            Subscription,
            _rows(("id", "start_date", "end_date", "status", "customer_id", "plan_id"), SUBSCRIPTIONS),
        ),
        (
            SubscriptionPromotion,
            _rows(("subscription_id", "promotion_id", "applied_date"), SUBSCRIPTION_PROMOTIONS),
        ),
        (
            UsageData,
            _rows(
                ("id", "usage_type", "amount", "subscription_id", "network_element_id", "time_id"),
                USAGE,
            ),
        ),
        (
            CustomerSupport,
            _rows(
                ("id", "support_type", "description", "status", "created_at", "closed_at",
                 "priority", "customer_id", "employee_id"),
                SUPPORT_TICKETS,
            ),
        ),
        (
            Billing,
            _rows(
                ("id", "billing_period_start", "billing_period_end", "issue_date", "due_date",
                 "discount_amount", "total_amount", "status", "subscription_id"),
                BILLINGS,
            ),
        ),
        (
            Payment,
            _rows(("id", "amount_paid", "payment_status", "billing_id"), PAYMENTS, payment_date=now),
        ),
        (
            Transaction,
            _rows(
                ("transaction_type", "amount", "status", "description", "customer_id"),
                TRANSACTIONS,
                transaction_date=now,
            ),
        ),
    ]

    try:
        for model, rows in tables:
            _load(session, model, rows)
        session.commit()
    except Exception:
        session.rollback()
        raise

    logger.info("Sample data loaded")
    return True
