from collections import namedtuple
from contextlib import contextmanager

from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from simulator.program import BLANK

# left/right are the tape either side of the head, blanks included as "_"
TapeView = namedtuple("TapeView", ["left", "head_symbol", "right", "state", "steps", "head"])


class DisplaySink:
    """Receives the visible machine state and status messages."""

    def update(self, view):
        raise NotImplementedError

    def status(self, message):
        raise NotImplementedError


class ConsoleDisplay(DisplaySink):
    """Terminal display built on rich.

    Prints a panel per update, or refreshes a single live panel while
    inside ``live()``.
    """

    def __init__(self, console=None, show_blanks=False):
        self.console = console or Console()
        self.show_blanks = show_blanks
        self.last_view = None
        self.message = ""
        self._live = None

    def _cells(self, symbols):
        return symbols if self.show_blanks else symbols.replace(BLANK, " ")

    def render(self):
        view = self.last_view
        if view is None:
            return Panel(Text(self.message or "No machine loaded."), title="Turing Machine")

        tape = Text()
        tape.append(self._cells(view.left))
        tape.append(self._cells(view.head_symbol) or " ", style="bold black on yellow")
        tape.append(self._cells(view.right))

        info = Table.grid(padding=(0, 2))
        info.add_column(style="bold cyan")
        info.add_column()
        info.add_row("State", view.state)
        info.add_row("Steps", f"{view.steps:,}")
        info.add_row("Head", str(view.head))

        parts = [tape, Text(""), info]
        if self.message:
            parts.append(Text(self.message, style="yellow"))
        return Panel(Group(*parts), title="Turing Machine")

    def update(self, view):
        self.last_view = view
        self._refresh()

    def status(self, message):
        self.message = message
        if self._live is not None:
            self._live.update(self.render())

    def _refresh(self):
        if self._live is not None:
            self._live.update(self.render())
        else:
            self.console.print(self.render())

    @contextmanager
    def live(self, refresh_per_second=20):
        with Live(self.render(), console=self.console, refresh_per_second=refresh_per_second) as live:
            self._live = live
            try:
                yield self
            finally:
                live.update(self.render())
                self._live = None
