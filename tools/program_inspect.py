import argparse

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from simulator.program import WILDCARD, action_letter, compile_program
from simulator.source import FileSourceProvider

def format_rule(rule):
    """Compact cell text: written symbol, direction, next state (e.g. ``1RB``)."""
    if rule is None:
        return "---"
    return f"{rule.new_symbol}{action_letter(rule.action)}{rule.new_state}"

def build_transition_table(program):
    """Return ``(symbols, rows)``: column symbols and one ``[state, cell...]`` row per state.

    Wildcard columns and rows are placed last, matching their lookup priority.
    """
    symbols = sorted(program.symbols(), key=lambda s: (s == WILDCARD, s))
    states = sorted(program.states(), key=lambda s: s == WILDCARD)
    rows = []
    for state in states:
        rows.append([state] + [format_rule(program.get(state, symbol)) for symbol in symbols])
    return symbols, rows

def print_program(program, console=None, title="Transition Table"):
    console = console or Console()
    symbols, rows = build_transition_table(program)

    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("State", justify="center")
    for symbol in symbols:
        table.add_column(symbol, justify="center")
    for row in rows:
        table.add_row(*row)
    console.print(table)

    for level, message in program.diagnostics:
        if level <= 2:
            color = "yellow" if level <= 0 else "red"
            console.print(f"[{color}]{escape(message)}[/{color}]")

def main():
    parser = argparse.ArgumentParser(description="Turing Machine Program Inspector")
    parser.add_argument("program", help="Program file to compile and inspect")
    args = parser.parse_args()

    source = FileSourceProvider(args.program).load()
    program = compile_program(source.text)

    console = Console()
    console.print(f"[bold]Program {escape(source.name)}[/bold]")
    console.print(f"  Rules: {len(program)}")
    console.print(f"  States: {', '.join(program.states())}")
    if source.initial_tape is not None:
        console.print(f"  Initial Tape: {source.initial_tape}")
    print_program(program, console=console)

if __name__ == "__main__":
    main()
