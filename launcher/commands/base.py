import abc
import argparse
from contextlib import contextmanager

from sqlmodel import Session

from telecom_provider.db.engine_sync import get_sync_engine


class BaseCommand(abc.ABC):
    """Base class for launcher commands."""

    name = "base"
    help = "Base command"

    def __init__(self, parser: argparse.ArgumentParser):
        self.parser = parser
        self.add_arguments()

    def add_arguments(self):
        """Override to add arguments to the subparser."""
        pass

    @contextmanager
    def session(self):
        with Session(get_sync_engine()) as session:
            yield session

    @abc.abstractmethod
    def run(self, args: argparse.Namespace):
        """Main logic of the command."""
        pass
