from telecom_provider.scheduler import run_scheduler

from .base import BaseCommand


class SchedulerCommand(BaseCommand):
    name = "scheduler"
    help = "Run the periodic jobs (daily usage snapshot) until interrupted."

    def run(self, args):
        run_scheduler()
