# retail_ordering/terminal.py
import sys
from typing import Callable, Iterable, Optional, TypeVar

from tabulate import tabulate

from retail_ordering.exceptions import InvalidInputError

T = TypeVar('T')

class TerminalIO:
    """Line-oriented terminal adapter.

    ``read_line`` blocks without a timeout; end of input raises EOFError,
    which ends the session.
    """

    def __init__(self, stdin=None, stdout=None):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    def read_line(self, prompt: str = '') -> str:
        if prompt:
            self.stdout.write(prompt)
            self.stdout.flush()

        line = self.stdin.readline()
        if line == '':
            raise EOFError("End of input")
        return line.rstrip('\r\n')

    def write_line(self, text: str = '') -> None:
        self.stdout.write(f"{text}\n")
        self.stdout.flush()

    def ask(self, prompt: str, parse: Optional[Callable[[str], T]] = None) -> T:
        """Prompt until the answer parses.

        Args:
            prompt: Text shown before the input
            parse: Converter raising InvalidInputError on bad input

        Returns:
            Parsed value, or the raw line when no parser is given
        """
        while True:
            line = self.read_line(prompt)
            if parse is None:
                return line
            try:
                return parse(line)
            except InvalidInputError as e:
                self.write_line(f"\t{e.message}")

    def read_choice(self) -> int:
        """Read a menu choice, re-prompting until it is a number."""
        while True:
            line = self.read_line("Please make your choice: ")
            try:
                return int(line.strip())
            except ValueError:
                self.write_line("Your input is invalid!")

    def print_table(self, rows: Iterable, headers='keys') -> int:
        """Print rows as a table.

        Returns:
            Number of rows printed
        """
        rows = list(rows)
        if not rows:
            self.write_line("No records found.")
            return 0

        self.write_line(tabulate(rows, headers=headers))
        return len(rows)
