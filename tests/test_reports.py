"""
Analytical reports against the sample data set and small hand-built
scenarios for the edge cases.
"""
from datetime import date, datetime
from decimal import Decimal

import pytest

from telecom_provider import reports
from telecom_provider.core.constants import (
    NetworkElementType,
    SupportStatus,
    SupportType,
    TransactionStatus,
    TransactionType,
    UsageType,
)
from telecom_provider.models import Transaction
from telecom_provider.reports.common import mb_to_gb, month_window, round_money, standard_rank
from telecom_provider.services.base_service import BaseCRUDService
from telecom_provider.services.subscription_service import SubscriptionService
from telecom_provider.services.support_service import SupportService

MAY = date(2025, 5, 1)


class TestHelpers:
    def test_round_half_up(self):
        assert round_money(Decimal("0.125")) == Decimal("0.13")
        assert round_money(Decimal("2.675")) == Decimal("2.68")

    def test_mb_to_gb(self):
        assert mb_to_gb(Decimal("1536")) == Decimal("1.50")
        assert mb_to_gb(Decimal("500.00")) == Decimal("0.49")

    def test_month_window_is_half_open(self):
        assert month_window(date(2025, 12, 17)) == (datetime(2025, 12, 1), datetime(2026, 1, 1))

    def test_month_window_defaults_to_configured_month(self, monkeypatch):
        monkeypatch.setenv("REPORT_MONTH", "2025-02")
        assert month_window() == (datetime(2025, 2, 1), datetime(2025, 3, 1))

    @pytest.mark.parametrize(
        "values, expected",
        [
            ([100, 100, 80], [1, 1, 3]),
            ([80, 100, 100], [3, 1, 1]),
            ([5, 4, 4, 4, 1], [1, 2, 2, 2, 5]),
            ([], []),
        ],
    )
    def test_standard_rank(self, values, expected):
        assert standard_rank(values) == expected


class TestOperationsReports:
    def test_customers_per_city(self, seeded_session):
        rows = reports.customers_per_city(seeded_session)

        assert (rows[0].city, rows[0].num_customers) == ("Berlin", 7)
        assert [row.city for row in rows[1:]] == ["Barcelona", "Helsinki", "Sydney", "Tokyo"]
        assert all(row.num_customers == 6 for row in rows[1:])
        assert sum(row.num_customers for row in rows) == 31

    def test_active_elements_per_city(self, seeded_session):
        rows = reports.active_elements_per_city(seeded_session)

        assert sum(row.active_elements for row in rows) == 8
        helsinki = [row for row in rows if row.city == "Helsinki"]
        assert [(row.element_type, row.active_elements) for row in helsinki] == [
            (NetworkElementType.SWITCH, 1)
        ]
        berlin = [row for row in rows if row.city == "Berlin"]
        assert [row.element_type for row in berlin] == [NetworkElementType.TOWER]

    def test_tickets_per_employee(self, seeded_session):
        rows = reports.tickets_per_employee(seeded_session)

        assert [(row.employee_name, row.status, row.ticket_count) for row in rows] == [
            ("Alice Jensen", SupportStatus.CLOSED, 1),
            ("Alice Jensen", SupportStatus.IN_PROGRESS, 1),
            ("Chloe Dubois", SupportStatus.IN_PROGRESS, 1),
            ("Markus Lindgren", SupportStatus.CLOSED, 1),
            ("Markus Lindgren", SupportStatus.OPEN, 1),
        ]

    def test_average_resolution_time(self, seeded_session):
        result = reports.average_resolution_time(seeded_session)
        assert result.closed_tickets == 2
        assert result.avg_resolution_hours == Decimal("28.0000")

    def test_resolution_time_without_closed_tickets(self, session):
        result = reports.average_resolution_time(session)
        assert result.closed_tickets == 0
        assert result.avg_resolution_hours is None

    def test_resolution_counts_whole_hours(self, seeded_session):
        service = SupportService(seeded_session)
        ticket = service.open_ticket(
            {
                "support_type": SupportType.BILLING,
                "description": "Refund request",
                "customer_id": 12,
                "employee_id": 2,
                "created_at": datetime(2025, 6, 1, 8, 0),
            }
        )
        service.close_ticket(ticket.id, datetime(2025, 6, 1, 9, 59))

        result = reports.average_resolution_time(seeded_session)

        # (28 + 28 + 1) / 3
        assert result.closed_tickets == 3
        assert result.avg_resolution_hours == Decimal("19.0000")


class TestBillingReports:
    def test_above_average_customers(self, seeded_session):
        rows = reports.above_average_customers(seeded_session)

        assert [row.customer_id for row in rows] == [9, 8, 5, 7, 2]
        assert rows[0].avg_bill == Decimal("75.00")
        assert rows[-1].avg_bill == Decimal("60.00")

    def test_average_equal_to_global_average_is_excluded(self, factory, session):
        plan = factory.plan()
        amounts = {"A": "60.00", "C": "90.00", "D": "30.00"}
        customers = {}
        for label, amount in amounts.items():
            customer = factory.customer(full_name=f"Customer {label}")
            factory.bill(factory.subscription(customer.id, plan.id).id, total=amount)
            customers[label] = customer

        rows = reports.above_average_customers(session)

        assert [row.customer_id for row in rows] == [customers["C"].id]

    def test_no_bills(self, session):
        assert reports.above_average_customers(session) == []

    def test_days_to_pay(self, seeded_session):
        rows = reports.days_to_pay(seeded_session)
        assert [(row.billing_id, row.days_to_pay) for row in rows] == [
            (1, 45),
            (2, 45),
            (4, 31),
            (6, 45),
            (7, 75),
            (9, 14),
        ]

    def test_revenue_per_plan(self, seeded_session):
        rows = reports.revenue_per_plan(seeded_session)
        assert [(row.plan_name, row.total_revenue) for row in rows] == [
            ("Standard Plan", Decimal("125.00")),
            ("Premium Plan", Decimal("118.00")),
            ("Unlimited Talk Plan", Decimal("117.50")),
            ("Data Max Plan", Decimal("115.00")),
            ("Basic Plan", Decimal("82.00")),
        ]

    def test_revenue_limit(self, seeded_session):
        assert len(reports.revenue_per_plan(seeded_session, limit=2)) == 2

    def test_latest_bills(self, seeded_session):
        rows = reports.latest_bills(seeded_session)
        assert len(rows) == 10
        assert len({row.subscription_id for row in rows}) == 10

    def test_latest_bill_is_the_latest_period(self, seeded_session, factory):
        factory.bill(1, total="40.00", start=date(2025, 3, 1), end=date(2025, 3, 31))

        rows = [row for row in reports.latest_bills(seeded_session) if row.subscription_id == 1]

        assert [(row.billing_id, row.billing_period_end) for row in rows] == [(1, date(2025, 4, 30))]

    def test_latest_bill_ties_are_all_returned(self, seeded_session, factory):
        tied = factory.bill(1, total="40.00", start=date(2025, 4, 10), end=date(2025, 4, 30))

        rows = [row for row in reports.latest_bills(seeded_session) if row.subscription_id == 1]

        assert [row.billing_id for row in rows] == [1, tied.id]


class TestUsageReports:
    def test_monthly_customer_usage(self, seeded_session):
        rows = reports.monthly_customer_usage(seeded_session, MAY)

        assert [row.full_name for row in rows] == [
            "John Smith",
            "Michael Brown",
            "Charlotte Thomas",
            "James Taylor",
            "Sophia Miller",
            "Daniel Wilson",
            "William Anderson",
        ]
        john = rows[0]
        assert john.total_data_gb == Decimal("0.49")
        assert john.total_call_minutes == Decimal("12.50")
        assert rows[5].total_sms_sent == Decimal("9.00")

    def test_other_month_is_empty(self, seeded_session):
        assert reports.monthly_customer_usage(seeded_session, date(2025, 6, 1)) == []
        assert reports.top_usage_customers(seeded_session, date(2025, 6, 1)) == []

    def test_top_usage_customers(self, seeded_session):
        rows = reports.top_usage_customers(seeded_session, MAY)
        assert [(row.full_name, row.usage_score) for row in rows] == [
            ("William Anderson", Decimal("28.25")),
            ("James Taylor", Decimal("20.12")),
            ("Michael Brown", Decimal("15.34")),
            ("John Smith", Decimal("12.99")),
            ("Sophia Miller", Decimal("9.60")),
        ]

    def test_data_is_summed_before_conversion(self, factory):
        customer = factory.customer()
        plan = factory.plan()
        subscription = factory.subscription(customer.id, plan.id)
        element = factory.network_element()
        factory.usage(subscription.id, UsageType.DATA, "1024", datetime(2025, 5, 3, 10, 0), element.id)
        factory.usage(subscription.id, UsageType.DATA, "512", datetime(2025, 5, 20, 15, 0), element.id)
        factory.usage(subscription.id, UsageType.DATA, "2048", datetime(2025, 6, 1, 0, 0), element.id)
        session = factory.session

        [monthly] = reports.monthly_customer_usage(session, MAY)
        [top] = reports.top_usage_customers(session, MAY)

        assert monthly.total_data_gb == Decimal("1.50")
        assert top.total_data_gb == Decimal("1.50")
        assert top.usage_score == Decimal("1.50")

    def test_inactive_subscriptions_are_left_out_of_monthly_usage(self, factory):
        customer = factory.customer()
        plan = factory.plan()
        subscription = factory.subscription(customer.id, plan.id, status="inactive")
        factory.usage(subscription.id, UsageType.CALL, "10.00", datetime(2025, 5, 3, 10, 0))
        session = factory.session

        assert reports.monthly_customer_usage(session, MAY) == []
        assert len(reports.top_usage_customers(session, MAY)) == 1

    def test_subscription_totals(self, seeded_session):
        rows = reports.monthly_subscription_usage(seeded_session, MAY)
        totals = {(row.subscription_id, row.usage_type): row.total_amount for row in rows}
        assert totals[(1, UsageType.DATA)] == Decimal("500.00")
        assert totals[(2, UsageType.SMS)] == Decimal("7")


class TestPromotionEffectiveness:
    def test_sample_data(self, seeded_session):
        rows = reports.promotion_effectiveness(seeded_session)

        assert len(rows) == 10
        assert (rows[0].promotion_id, rows[0].billing_rank) == (9, 1)
        assert rows[0].total_billed_after_promo == Decimal("208.00")
        by_id = {row.promotion_id: row for row in rows}
        assert by_id[2].times_applied == 6
        assert by_id[1].billing_rank == by_id[6].billing_rank == 6
        assert by_id[5].billing_rank == 8
        assert by_id[8].total_billed_after_promo == Decimal("0.00")
        assert by_id[8].billing_rank == 10

    def test_tied_promotions_share_a_rank(self, factory):
        plan = factory.plan()
        session = factory.session
        service = SubscriptionService(session)
        promotions = [factory.promotion(plan.id, name=name) for name in ("P1", "P2", "P3")]
        for promotion, amount in zip(promotions, ("100.00", "100.00", "80.00")):
            customer = factory.customer()
            subscription = factory.subscription(customer.id, plan.id)
            service.apply_promotion(subscription.id, promotion.id, date(2025, 3, 1))
            factory.bill(subscription.id, total=amount)

        rows = reports.promotion_effectiveness(session)

        assert [(row.promotion_name, row.billing_rank) for row in rows] == [
            ("P1", 1),
            ("P2", 1),
            ("P3", 3),
        ]

    def test_usage_before_application_is_ignored(self, factory):
        plan = factory.plan()
        session = factory.session
        customer = factory.customer()
        subscription = factory.subscription(customer.id, plan.id)
        promotion = factory.promotion(plan.id)
        SubscriptionService(session).apply_promotion(subscription.id, promotion.id, date(2025, 5, 10))
        element = factory.network_element()
        factory.usage(subscription.id, UsageType.CALL, "30.00", datetime(2025, 5, 1, 9, 0), element.id)
        factory.usage(subscription.id, UsageType.CALL, "12.00", datetime(2025, 5, 11, 9, 0), element.id)

        [row] = reports.promotion_effectiveness(session)

        assert row.total_call_minutes == Decimal("12.00")
        assert row.total_data_mb == Decimal("0.00")
        assert row.total_billed_after_promo == Decimal("0.00")

    def test_no_promotions_applied(self, session):
        assert reports.promotion_effectiveness(session) == []


class TestTransactionReports:
    def test_totals_by_type(self, seeded_session):
        rows = reports.totals_by_type(seeded_session)
        assert [(row.transaction_type, row.total_amount, row.num_transactions) for row in rows] == [
            (TransactionType.DEPOSIT, Decimal("385.00"), 4),
            (TransactionType.WITHDRAW, Decimal("230.00"), 4),
            (TransactionType.TRANSFER, Decimal("70.00"), 2),
        ]

    def test_monthly_volume(self, seeded_session):
        rows = reports.monthly_volume(seeded_session, as_of=date(2025, 7, 1))
        assert [(row.month, row.total_transactions, row.total_amount) for row in rows] == [
            ("2025-06", 10, Decimal("685.00"))
        ]

    def test_monthly_volume_outside_window(self, seeded_session):
        assert reports.monthly_volume(seeded_session, as_of=date(2025, 10, 1)) == []

    def test_monthly_volume_newest_month_first(self, seeded_session):
        BaseCRUDService(seeded_session, Transaction).create(
            {
                "transaction_type": TransactionType.DEPOSIT,
                "amount": Decimal("15.00"),
                "transaction_date": datetime(2025, 5, 20, 10, 0),
                "status": TransactionStatus.SUCCESS,
                "description": "Older top-up",
                "customer_id": 1,
            }
        )
        rows = reports.monthly_volume(seeded_session, as_of=date(2025, 7, 1))
        assert [row.month for row in rows] == ["2025-06", "2025-05"]

    def test_top_customers_by_volume(self, seeded_session):
        rows = reports.top_customers_by_volume(seeded_session)
        assert [(row.customer_id, row.total_spent) for row in rows] == [
            (6, Decimal("120.00")),
            (1, Decimal("100.00")),
            (9, Decimal("90.00")),
            (4, Decimal("75.00")),
            (10, Decimal("65.00")),
        ]
        assert all(row.txn_count == 1 for row in rows)

    def test_failed_transactions_with_support(self, seeded_session):
        rows = reports.failed_transactions_with_support(seeded_session)
        assert [(row.full_name, row.failed_txns, row.support_tickets) for row in rows] == [
            ("Daniel Wilson", 1, 1)
        ]

    def test_failed_and_ticket_counts_are_independent(self, seeded_session):
        support = SupportService(seeded_session)
        for description in ("Card declined", "Charged twice"):
            support.open_ticket(
                {
                    "support_type": SupportType.BILLING,
                    "description": description,
                    "customer_id": 5,
                    "employee_id": 2,
                }
            )
        BaseCRUDService(seeded_session, Transaction).create(
            {
                "transaction_type": TransactionType.DEPOSIT,
                "amount": Decimal("20.00"),
                "status": TransactionStatus.FAILED,
                "description": "Card declined",
                "customer_id": 5,
            }
        )

        [row] = reports.failed_transactions_with_support(seeded_session)

        assert (row.failed_txns, row.support_tickets) == (2, 3)


class TestRegistry:
    def test_every_report_is_registered(self):
        assert len(reports.REPORTS) == 15
        for title, report in reports.REPORTS.values():
            assert title
            assert callable(report)
