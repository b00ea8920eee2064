# telecom_provider/reports/__init__.py
"""
Read-only analytical reports. Every report is a function of a session
returning a list of pydantic rows (or a single row).
"""
from .billing import above_average_customers, days_to_pay, latest_bills, revenue_per_plan
from .operations import (
    active_elements_per_city,
    average_resolution_time,
    customers_per_city,
    tickets_per_employee,
)
from .transactions import (
    failed_transactions_with_support,
    monthly_volume,
    top_customers_by_volume,
    totals_by_type,
)
from .usage import (
    monthly_customer_usage,
    monthly_subscription_usage,
    promotion_effectiveness,
    top_usage_customers,
)

# Name used on the command line -> (title, report function)
REPORTS = {
    "customers-per-city": ("Customers per city", customers_per_city),
    "active-elements": ("Active network elements per city", active_elements_per_city),
    "tickets-per-employee": ("Support tickets per employee", tickets_per_employee),
    "resolution-time": ("Average resolution time", average_resolution_time),
    "above-average-bills": ("Customers above the average bill", above_average_customers),
    "days-to-pay": ("Days to pay completed bills", days_to_pay),
    "plan-revenue": ("Top revenue plans", revenue_per_plan),
    "latest-bills": ("Latest bill per subscription", latest_bills),
    "monthly-usage": ("Monthly usage per customer", monthly_customer_usage),
    "top-usage": ("Top customers by usage score", top_usage_customers),
    "promotion-effectiveness": ("Promotion effectiveness", promotion_effectiveness),
    "transaction-types": ("Transaction totals by type", totals_by_type),
    "transaction-months": ("Monthly transaction volume", monthly_volume),
    "top-transactors": ("Top customers by transaction volume", top_customers_by_volume),
    "failed-with-support": ("Failed transactions with support tickets", failed_transactions_with_support),
}
