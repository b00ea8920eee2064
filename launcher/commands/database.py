from telecom_provider.db.engine_sync import create_sync_db_and_tables
from telecom_provider.db.seed import seed_sample_data

from ..render import console
from ..styles import Styles
from .base import BaseCommand


class InitDbCommand(BaseCommand):
    name = "init-db"
    help = "Create the schema (and optionally load the sample data)."

    def add_arguments(self):
        self.parser.add_argument("--seed", action="store_true", help="Load the sample data set")

    def run(self, args):
        create_sync_db_and_tables()
        console.print(f"[{Styles.STATUS_OK}]Schema ready.[/]")

        if args.seed:
            with self.session() as session:
                if seed_sample_data(session):
                    console.print(f"[{Styles.STATUS_OK}]Sample data loaded.[/]")
                else:
                    console.print(f"[{Styles.STATUS_WARNING}]Database already has data; seed skipped.[/]")
