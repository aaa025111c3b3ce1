# retail_ordering/workflows/base.py
from dataclasses import dataclass

from retail_ordering.db import db as default_db
from retail_ordering.terminal import TerminalIO

@dataclass(frozen=True)
class UserContext:
    """Identity of the logged-in user, passed explicitly to every workflow.

    Only the name is kept; the role is looked up again on each operation.
    """
    identity: str

class Workflow:
    """Base class for interactive workflows.

    Each step runs in its own short ``session_scope``; the final commit step
    is the only one that writes.
    """

    def __init__(self, context: UserContext, terminal: TerminalIO, database=None):
        self.context = context
        self.terminal = terminal
        self.database = database or default_db

    @property
    def identity(self) -> str:
        return self.context.identity

    def scope(self):
        return self.database.session_scope()

    def say(self, text: str) -> None:
        self.terminal.write_line(text)

    def fail(self, error) -> None:
        """Report an error that ends the workflow."""
        self.terminal.write_line(f"\t{error.message}")
