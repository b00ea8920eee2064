# launcher/main.py
"""Main entry point of the telecom-provider command line."""

import argparse
import logging
import sys

from rich.markup import escape

from telecom_provider import __version__
from telecom_provider.core.config import get_log_level
from telecom_provider.core.exceptions import TelecomError

from .commands import COMMANDS
from .render import console
from .styles import Styles


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="telecom-provider",
        description="Telecom provider schema, reports and maintenance jobs.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", metavar="command")
    subparsers.required = True

    for command_cls in COMMANDS:
        subparser = subparsers.add_parser(command_cls.name, help=command_cls.help)
        command = command_cls(subparser)
        subparser.set_defaults(handler=command)
    return parser


def main(argv=None) -> int:
    """Parse the command line and run the selected command."""
    logging.basicConfig(
        level=get_log_level(),
        format="%(asctime)s - %(levelname)s - [Launcher] - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    args = build_parser().parse_args(argv)
    try:
        args.handler.run(args)
    except TelecomError as e:
        console.print(f"[{Styles.STATUS_ERROR}]{type(e).__name__}: {escape(str(e))}[/]")
        return 1
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
