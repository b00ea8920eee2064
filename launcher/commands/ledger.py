from decimal import Decimal

from rich.markup import escape

from telecom_provider.core.constants import TransactionStatus, TransactionType
from telecom_provider.services.customer_service import CustomerService
from telecom_provider.services.ledger_service import TransactionLedger

from ..render import console, print_rows
from ..styles import Styles
from .base import BaseCommand


class LedgerDemoCommand(BaseCommand):
    name = "ledger-demo"
    help = "Stage ledger entries, roll an invalid one back to a savepoint and commit."

    def add_arguments(self):
        self.parser.add_argument("--customer-id", type=int, default=1, help="Customer to post entries for")

    def run(self, args):
        customer_id = args.customer_id
        with self.session() as session:
            with TransactionLedger(session) as ledger:
                ledger.stage(
                    {
                        "transaction_type": TransactionType.DEPOSIT,
                        "amount": Decimal("100.00"),
                        "status": TransactionStatus.SUCCESS,
                        "description": "Initial top-up",
                        "customer_id": customer_id,
                    }
                )
                ledger.savepoint("after_first")

                invalid = ledger.stage(
                    {
                        "transaction_type": TransactionType.WITHDRAW,
                        "amount": Decimal("-50.00"),
                        "status": TransactionStatus.FAILED,
                        "description": "System error: invalid amount",
                        "customer_id": customer_id,
                    }
                )
                if not invalid.is_valid:
                    console.print(f"[{Styles.STATUS_WARNING}]Invalid entry staged: {escape(str(invalid.errors))}[/]")
                    ledger.rollback_to("after_first")
                    console.print(f"[{Styles.STATUS_WARNING}]Rolled back to savepoint 'after_first'.[/]")

                ledger.stage(
                    {
                        "transaction_type": TransactionType.WITHDRAW,
                        "amount": Decimal("30.00"),
                        "status": TransactionStatus.SUCCESS,
                        "description": "Customer withdrawal after rollback",
                        "customer_id": customer_id,
                    }
                )
                committed = ledger.commit()

            console.print(f"[{Styles.STATUS_OK}]Committed {len(committed)} ledger entries.[/]")
            print_rows(
                f"Transactions of customer {customer_id}",
                CustomerService(session).get_transactions(customer_id),
            )
