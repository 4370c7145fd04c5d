import argparse
import os
import sys
from typing import Callable, List, Optional

from skilled.errors import UsageError


class CliParser(argparse.ArgumentParser):
    """
    ArgumentParser that reports problems by raising UsageError instead of exiting,
    so only the top-level runner decides the process exit code.
    """

    def __init__(self, prog: str, description: str, epilog: Optional[str] = None):
        super().__init__(
            prog=prog,
            description=description,
            epilog=epilog,
            add_help=False,
            allow_abbrev=False,
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        self.add_argument("-h", "--help", action="store_true", help="Show this help")

    def error(self, message: str) -> None:
        raise UsageError(message)


def add_project_root(parser: CliParser, help_text: str) -> None:
    parser.add_argument("--project-root", metavar="<path>", help=help_text)


def project_root_from(args: argparse.Namespace) -> str:
    return os.path.abspath(args.project_root or os.getcwd())


def run_cli(
    parser: CliParser,
    handler: Callable[[argparse.Namespace], int],
    argv: Optional[List[str]] = None,
) -> int:
    try:
        args = parser.parse_args(argv)
        if args.help:
            parser.print_help()
            return 0
        return handler(args)
    except UsageError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        parser.print_help(sys.stderr)
        return 1
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
