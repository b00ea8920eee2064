from .billing import BillingSummaryCommand
from .database import InitDbCommand
from .ledger import LedgerDemoCommand
from .reports import ReportCommand
from .scheduler import SchedulerCommand
from .usage import RefreshUsageCommand

COMMANDS = [
    InitDbCommand,
    ReportCommand,
    BillingSummaryCommand,
    RefreshUsageCommand,
    LedgerDemoCommand,
    SchedulerCommand,
]
