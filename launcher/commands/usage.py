from telecom_provider.services.usage_snapshot_job import run_usage_snapshot
from telecom_provider.services.usage_snapshot_service import UsageSnapshotService

from ..render import print_rows
from .base import BaseCommand


class RefreshUsageCommand(BaseCommand):
    name = "refresh-usage"
    help = "Append a new service plan usage snapshot and show the latest one."

    def run(self, args):
        run_usage_snapshot()
        with self.session() as session:
            print_rows("Latest usage snapshot", UsageSnapshotService(session).latest())
