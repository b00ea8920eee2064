import argparse
import inspect
from datetime import date

from telecom_provider.reports import REPORTS

from ..render import print_rows
from .base import BaseCommand


def _month(value: str) -> date:
    try:
        year, month = value.split("-")
        return date(int(year), int(month), 1)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid month '{value}', expected YYYY-MM")


def _day(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}', expected YYYY-MM-DD")


class ReportCommand(BaseCommand):
    name = "report"
    help = "Run one of the analytical reports (or all of them)."

    def add_arguments(self):
        self.parser.add_argument("report", choices=sorted(REPORTS) + ["all"], help="Report name")
        self.parser.add_argument("--month", type=_month, help="Reporting month (YYYY-MM) for usage reports")
        self.parser.add_argument("--as-of", type=_day, help="Reference day (YYYY-MM-DD) for trailing windows")

    def run(self, args):
        names = list(REPORTS) if args.report == "all" else [args.report]
        with self.session() as session:
            for name in names:
                title, report = REPORTS[name]
                print_rows(title, report(session, **self._options(report, args)))

    @staticmethod
    def _options(report, args) -> dict:
        parameters = inspect.signature(report).parameters
        options = {}
        if "month" in parameters and args.month:
            options["month"] = args.month
        if "as_of" in parameters and args.as_of:
            options["as_of"] = args.as_of
        return options
