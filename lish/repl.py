"""Interactive read-eval-print loop.

The loop depends only on a line reader: anything with ``readline(prompt)``
returning the next line and raising EOFError at end of input. The prompt is
whatever the ``prompt`` callable returns, so scripts can redefine it.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional, Protocol, TextIO

from lish.config import DEFAULT_PROMPT
from lish.errors import LishError
from lish.interpreter import Interpreter, describe_error
from lish.printer import to_source, type_name
from lish.types.cons_list import ConsList
from lish.types.nil import NilType
from lish.types.symbol import Symbol

try:
    import readline
    READLINE_AVAILABLE = True
except ImportError:
    READLINE_AVAILABLE = False

logger = logging.getLogger(__name__)

PROMPT_CALL = ConsList.from_iterable([Symbol("prompt")])


class LineReader(Protocol):
    def readline(self, prompt: str) -> str: ...


class ConsoleReader:
    """Reads lines with input(); uses the readline module for editing and history."""

    def __init__(self, history_path: Optional[Path] = None):
        self.history_path = history_path

    def load_history(self) -> None:
        if not READLINE_AVAILABLE or self.history_path is None:
            return
        if self.history_path.exists():
            try:
                readline.read_history_file(str(self.history_path))
            except OSError as err:
                print(f"Failed to load history: {err}", file=sys.stderr)

    def save_history(self) -> None:
        if not READLINE_AVAILABLE or self.history_path is None:
            return
        try:
            self.history_path.parent.mkdir(parents=True, exist_ok=True)
            readline.write_history_file(str(self.history_path))
        except OSError as err:
            logger.warning("failed to save history to %s: %s", self.history_path, err)

    def readline(self, prompt: str) -> str:
        return input(prompt)


class Repl:
    def __init__(
        self,
        interp: Interpreter,
        reader: LineReader,
        out: TextIO = sys.stdout,
        err: TextIO = sys.stderr,
    ):
        self.interp = interp
        self.reader = reader
        self.out = out
        self.err = err

    def current_prompt(self) -> str:
        try:
            value = self.interp.vm.eval_list(PROMPT_CALL)
        except (LishError, RecursionError) as e:
            logger.debug("prompt failed: %s", e)
            return DEFAULT_PROMPT
        if isinstance(value, str):
            return value
        print(f"prompt didn't return a String, returned {type_name(value)}", file=self.out)
        return DEFAULT_PROMPT

    def run_line(self, line: str) -> None:
        """Evaluate one line and report its result or error."""
        try:
            result = self.interp.eval_line(line)
        except LishError as e:
            print(describe_error(e), file=self.err)
            return
        if not isinstance(result, (NilType, Symbol)):
            print(to_source(result), file=self.out)

    def run(self) -> None:
        while True:
            try:
                line = self.reader.readline(self.current_prompt())
            except EOFError:
                print(file=self.out)
                break
            except KeyboardInterrupt:
                print(file=self.out)
                continue
            if not line.strip():
                continue
            self.run_line(line)
