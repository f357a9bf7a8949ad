from simulator.display import TapeView
from simulator.program import (
    HALT_STATE, WILDCARD, STAY, TransitionRule, action_letter, compile_program,
)
from simulator.tape import Tape

INITIAL_STATE = "0"


class TuringMachine:
    """A single machine session: compiled program, tape, head, state and step count.

    ``display`` (a DisplaySink) receives status messages as they happen and
    the machine view whenever ``refresh()`` is called. ``logger`` (a
    JSONLogger) receives the verbose diagnostics.
    """

    def __init__(self, source="", initial_tape="", display=None, logger=None):
        self.display = display
        self.logger = logger
        self.source = source
        self.initial_tape = initial_tape
        self.status_message = ""
        self.reset(initial_tape)

    @property
    def halted(self):
        return self.current_state == HALT_STATE

    def _debug(self, level, message, **fields):
        if level <= 0:
            self._status(message)
        if self.logger is not None:
            self.logger.debug(level, message, **fields)

    def _status(self, message):
        self.status_message = message
        if self.display is not None:
            self.display.status(message)

    def compile(self, source=None):
        """Rebuild the program from ``source`` (or the current source text)."""
        if source is not None:
            self.source = source
        self.program = compile_program(self.source, logger=self.logger)
        for message in self.program.warnings():
            self._status(message)
        return self.program

    def add_transition(self, state, symbol, new_symbol, action, new_state):
        """Insert a single rule into the compiled program without touching the source."""
        rule = TransitionRule(state, symbol, new_symbol, action, new_state)
        self.program.add_transition(rule)
        return rule

    def reset(self, initial_tape=None):
        """Reload the tape, rewind head, state and step counter, and recompile."""
        if initial_tape is not None:
            self.initial_tape = initial_tape
        self.tape = Tape(self.initial_tape)
        self.head = 0
        self.current_state = INITIAL_STATE
        self.steps = 0
        self.compile()

    def step(self):
        """Execute one transition. Returns False once the machine is halted."""
        if self.halted:
            self._debug(1, "Warning: step() called while in halt state")
            self._status("Halted.")
            return False

        symbol = self.tape.read(self.head)
        rule = self.program.lookup(self.current_state, symbol)

        if rule is not None:
            new_state = self.current_state if rule.new_state == WILDCARD else rule.new_state
            new_symbol = symbol if rule.new_symbol == WILDCARD else rule.new_symbol
            action = rule.action
            line_number = rule.line_number
        else:
            self._debug(1, f"Warning: no instruction found for state '{self.current_state}' "
                           f"symbol '{symbol}'; halting", state=self.current_state, symbol=symbol)
            self._status(f"No rule found for state '{self.current_state}', symbol '{symbol}'. Halted.")
            new_state = HALT_STATE
            new_symbol = symbol
            action = STAY
            line_number = -1

        self.tape.write(self.head, new_symbol)
        self.current_state = new_state
        self.head += action
        self.steps += 1

        self._debug(4, f"Step {self.steps}: wrote '{new_symbol}', moved {action_letter(action)}, "
                       f"state '{new_state}' (line {line_number})")

        if new_state == HALT_STATE:
            if rule is not None:
                self._status("Halted.")
            return False
        return True

    def run(self, max_steps=None):
        """Step until halted or ``max_steps`` steps have been taken. Returns steps taken."""
        taken = 0
        while not self.halted and (max_steps is None or taken < max_steps):
            taken += 1
            if not self.step():
                break
        return taken

    def view(self, radius=None):
        left, head_symbol, right = self.tape.window(self.head, radius)
        return TapeView(left, head_symbol, right, self.current_state, self.steps, self.head)

    def refresh(self, radius=None):
        """Push the current view to the display."""
        if self.display is not None:
            self.display.update(self.view(radius))

    def summary(self):
        offset, tape = self.tape.contents()
        return {
            "state": self.current_state,
            "halted": self.halted,
            "steps": self.steps,
            "head": self.head,
            "tape_offset": offset,
            "tape": tape,
            "nonblank": self.tape.count_nonblank(),
        }
