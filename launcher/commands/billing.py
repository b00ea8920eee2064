from telecom_provider.services.billing_service import BillingService

from ..render import print_rows
from .base import BaseCommand


class BillingSummaryCommand(BaseCommand):
    name = "billing-summary"
    help = "Every bill of a customer with its payment and status note."

    def add_arguments(self):
        self.parser.add_argument("customer_id", type=int, help="Customer id")

    def run(self, args):
        with self.session() as session:
            rows = BillingService(session).get_customer_billing_summary(args.customer_id)
            print_rows(f"Billing summary of customer {args.customer_id}", rows)
