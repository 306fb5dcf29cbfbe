"""
lish - Lisp shell entry point.

  lish FILE            run a script non-interactively
  lish [-s FILE]       interactive shell, sourcing FILE (or the default
                       startup file) first
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from lish import __version__
from lish.config import get_history_path, get_log_level, get_rc_path
from lish.errors import LishError
from lish.interpreter import Interpreter, describe_error
from lish.repl import ConsoleReader, Repl

logger = logging.getLogger(__name__)


def create_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lish",
        description="Lish - a Lisp command shell",
    )
    parser.add_argument("file", nargs="?", metavar="FILE", help="Script to run")
    parser.add_argument(
        "-s", "--startup-file", metavar="FILE",
        help="Startup file to source before starting interactive shell",
    )
    parser.add_argument(
        "--log-level", default=None,
        help="Logging level (DEBUG, INFO, WARNING, ...); defaults to $LISH_LOG_LEVEL",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def run_script(path: str) -> int:
    interp = Interpreter(interactive=False)
    try:
        interp.run_file(path)
    except LishError as err:
        print(describe_error(err), file=sys.stderr)
        return 1
    return 0


def interactive_shell(startup_file: Optional[str]) -> int:
    reader = ConsoleReader(get_history_path())
    reader.load_history()
    interp = Interpreter(interactive=True)

    rc_path = Path(startup_file) if startup_file else get_rc_path()
    if rc_path is not None and rc_path.exists():
        try:
            interp.source(rc_path)
        except LishError as err:
            print(describe_error(err), file=sys.stderr)

    try:
        Repl(interp, reader).run()
    finally:
        reader.save_history()
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    args = create_arg_parser().parse_args(argv)
    level = logging.getLevelName(args.log_level.upper()) if args.log_level else get_log_level()
    logging.basicConfig(
        level=level if isinstance(level, int) else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
    )
    if args.file:
        return run_script(args.file)
    return interactive_shell(args.startup_file)


if __name__ == "__main__":
    sys.exit(main())
