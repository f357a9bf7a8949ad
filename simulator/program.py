import re

WILDCARD = "*"
BLANK = "_"
HALT_STATE = "halt"

MOVE_LEFT = -1
STAY = 0
MOVE_RIGHT = 1

_TOKEN_SEPARATOR = re.compile(r"[ \t]+")


def normalize_symbol(symbol):
    """Map a literal space onto the blank symbol."""
    return BLANK if symbol == " " else symbol


def parse_action(token):
    """Translate an action character into a head movement (-1, 0 or +1)."""
    c = token[:1].lower()
    if c in ("r", ">"):
        return MOVE_RIGHT
    if c in ("l", "<"):
        return MOVE_LEFT
    return STAY


def action_letter(action):
    return {MOVE_LEFT: "L", MOVE_RIGHT: "R"}.get(action, "*")


class TransitionRule:
    def __init__(self, current_state, current_symbol, new_symbol, action, new_state, line_number=-1):
        self.current_state = current_state
        self.current_symbol = current_symbol
        self.new_symbol = new_symbol
        self.action = action
        self.new_state = new_state
        self.line_number = line_number

    def __repr__(self):
        return (f"TransitionRule({self.current_state!r}, {self.current_symbol!r}, "
                f"{self.new_symbol!r}, {action_letter(self.action)!r}, {self.new_state!r}, "
                f"line={self.line_number})")

    def as_tuple(self):
        return (self.current_state, self.current_symbol, self.new_symbol, self.action, self.new_state)

    def to_text(self):
        """Render the rule back into program source syntax."""
        return (f"{self.current_state} {self.current_symbol} {self.new_symbol} "
                f"{action_letter(self.action).lower()} {self.new_state}")


class Program:
    """Compiled transition table, indexed first by state then by symbol.

    Either key may be the wildcard ``*``. ``diagnostics`` holds
    ``(level, message)`` pairs collected while compiling; level 0 messages
    are meant for the status line.
    """

    def __init__(self):
        self.table = {}
        self.diagnostics = []

    def __len__(self):
        return sum(len(symbols) for symbols in self.table.values())

    def __contains__(self, key):
        state, symbol = key
        return symbol in self.table.get(state, {})

    def get(self, state, symbol):
        return self.table.get(state, {}).get(symbol)

    def add_transition(self, rule):
        """Insert a rule, returning the rule it replaced (if any)."""
        symbols = self.table.setdefault(rule.current_state, {})
        previous = symbols.get(rule.current_symbol)
        symbols[rule.current_symbol] = rule
        return previous

    def lookup(self, state, symbol):
        """Find the rule for (state, symbol), most specific match first."""
        for key in ((state, symbol), (state, WILDCARD), (WILDCARD, symbol), (WILDCARD, WILDCARD)):
            rule = self.get(*key)
            if rule is not None:
                return rule
        return None

    def rules(self):
        return sorted((rule for symbols in self.table.values() for rule in symbols.values()),
                      key=lambda rule: rule.line_number)

    def states(self):
        return list(self.table)

    def symbols(self):
        seen = []
        for symbols in self.table.values():
            for symbol in symbols:
                if symbol not in seen:
                    seen.append(symbol)
        return seen

    def warnings(self):
        return [message for level, message in self.diagnostics if level <= 0]


def tokenize_line(line):
    line = line.split(";", 1)[0]
    return [token for token in _TOKEN_SEPARATOR.split(line) if token]


def parse_line(line, line_number=-1):
    """Parse one source line into a TransitionRule, or None if it has fewer than five tokens."""
    tokens = tokenize_line(line)
    if len(tokens) < 5:
        return None
    return TransitionRule(
        current_state=tokens[0],
        current_symbol=normalize_symbol(tokens[1][0]),
        new_symbol=normalize_symbol(tokens[2][0]),
        action=parse_action(tokens[3]),
        new_state=tokens[4],
        line_number=line_number,
    )


def compile_program(source, logger=None):
    """Compile program source text into a Program.

    Never fails: malformed lines are skipped and duplicate (state, symbol)
    definitions are overwritten, both with a diagnostic.
    """
    program = Program()

    def report(level, message, **fields):
        program.diagnostics.append((level, message))
        if logger is not None:
            logger.debug(level, message, **fields)

    lines = source.replace("\r", "").split("\n")
    for line_number, line in enumerate(lines, start=1):
        rule = parse_line(line, line_number)
        if rule is None:
            if tokenize_line(line):
                report(2, f"Syntax error on line {line_number}: '{line.strip()}'", line=line_number)
            continue

        report(5, f"Parsed rule: {rule.to_text()}", line=line_number)
        previous = program.add_transition(rule)
        if previous is not None:
            report(0, f"Warning: multiple definitions for state '{rule.current_state}' "
                      f"symbol '{rule.current_symbol}' on lines {previous.line_number} and {line_number}",
                   lines=[previous.line_number, line_number])

    return program
