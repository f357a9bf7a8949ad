# tools/run_programs.py

import argparse
import json
from pathlib import Path

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, BarColumn, TextColumn, TimeElapsedColumn

from simulator.source import FileSourceProvider
from simulator.turing_machine import TuringMachine

console = Console()

def run_program_file(path, initial_tape=None, max_steps=100_000):
    """Run one program file headless until it halts or reaches ``max_steps``."""
    source = FileSourceProvider(path).load()
    if initial_tape is None:
        initial_tape = source.initial_tape or ""

    machine = TuringMachine(source.text, initial_tape)
    machine.run(max_steps=max_steps)

    entry = {"program": source.name, "initial_tape": initial_tape}
    entry.update(machine.summary())
    entry["status"] = machine.status_message
    return entry

def collect_program_files(paths):
    files = []
    for path in map(Path, paths):
        if path.is_dir():
            files.extend(sorted(path.glob("*.txt")))
        else:
            files.append(path)
    return files

def run_programs(paths, output_file, initial_tape=None, max_steps=100_000):
    program_files = collect_program_files(paths)
    Path(output_file).parent.mkdir(parents=True, exist_ok=True)
    console.print(f"Running {len(program_files):,} programs (max {max_steps:,} steps each)...")

    results = []
    with Progress(
            SpinnerColumn(),
            BarColumn(),
            "[progress.percentage]{task.percentage:>3.0f}%",
            TextColumn("{task.completed}/{task.total} Programs"),
            TimeElapsedColumn(),
            console=console
    ) as progress:

        task = progress.add_task("[cyan]Running...", total=len(program_files))

        for program_file in program_files:
            try:
                results.append(run_program_file(program_file, initial_tape, max_steps))
            except (FileNotFoundError, OSError, UnicodeDecodeError) as e:
                console.print(f"[yellow]Warning: failed to run {program_file}: {e}[/yellow]")
            progress.update(task, advance=1)

    with open(output_file, "a", encoding="utf-8") as f:
        for entry in results:
            f.write(json.dumps(entry) + "\n")

    halted = sum(1 for entry in results if entry["halted"])
    console.print(f"[green]{halted} of {len(results)} programs halted. Results saved to {output_file}.[/green]")
    return results

# === CLI ===
def main():
    parser = argparse.ArgumentParser(description="Run Turing machine programs headless and record the results.")
    parser.add_argument("programs", nargs="+", help="Program files or directories of .txt programs")
    parser.add_argument("--output", default="results/runs.jsonl", help="JSON-lines results file")
    parser.add_argument("--tape", help="Initial tape for every program (default: each program's $INITIAL_TAPE)")
    parser.add_argument("--max_steps", type=int, default=100_000, help="Maximum steps before giving up")
    args = parser.parse_args()

    run_programs(args.programs, args.output, initial_tape=args.tape, max_steps=args.max_steps)

if __name__ == "__main__":
    main()
