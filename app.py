# app.py

import argparse
import signal
from contextlib import contextmanager

from rich.console import Console
from rich.prompt import Prompt, IntPrompt, Confirm, FloatPrompt

from config.config_loader import DEFAULT_CONFIG, DEFAULT_CONFIG_PATH, load_config, save_config, validate_config
from logger.logger import JSONLogger
from simulator.controller import Controller, STEP, RUN, RESET, SPEED
from simulator.display import ConsoleDisplay
from simulator.source import FileSourceProvider
from tools.program_inspect import print_program

console = Console()

# === Utilities ===
def load_runtime_config(path=DEFAULT_CONFIG_PATH):
    try:
        return load_config(path)
    except FileNotFoundError:
        console.print(f"[yellow]{path} not found, using default configuration.[/yellow]")
        return DEFAULT_CONFIG.copy()

def save_runtime_config(config, path=DEFAULT_CONFIG_PATH):
    save_config(config, path)
    console.print("[green]Configuration updated successfully.[/green]")

def build_controller(config, display=None):
    logger = JSONLogger(
        output_directory=config["output_directory"],
        log_file_prefix=config["log_file_prefix"],
        debug_level=config["debug_level"],
    )
    return Controller(display=display or ConsoleDisplay(console), logger=logger, config=config)

def load_program_file(controller, path):
    try:
        source = controller.load_program(FileSourceProvider(path))
    except (FileNotFoundError, OSError, UnicodeDecodeError) as e:
        console.print(f"[red]Error: {e}[/red]")
        return False
    console.print(f"[green]Loaded program '{source.name}' ({len(controller.machine.program)} rules).[/green]")
    return True

@contextmanager
def pause_on_interrupt(controller):
    """Turn Ctrl+C into a stop request while a run is in progress."""
    previous = signal.signal(signal.SIGINT, lambda signum, frame: controller.stop())
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)

def run_live(controller):
    display = controller.display
    with pause_on_interrupt(controller):
        if isinstance(display, ConsoleDisplay):
            with display.live():
                return controller.run()
        return controller.run()

def show_main_menu(controller):
    enabled = controller.enabled_actions()
    speed = "full" if controller.full_speed else "normal"

    def entry(key, label, action=None):
        if action is None or action in enabled:
            console.print(f"[{key}] {label}")
        else:
            console.print(f"[dim][{key}] {label} (unavailable)[/dim]")

    console.print("\n[bold cyan]Turing Machine Emulator[/bold cyan]")
    entry("1", "Load Program")
    entry("2", f"Edit Initial Tape (current: '{controller.machine.initial_tape}')")
    entry("3", "Step", STEP)
    entry("4", "Run (Ctrl+C to pause)", RUN)
    entry("5", "Reset", RESET)
    entry("6", f"Toggle Speed (current: {speed})", SPEED)
    entry("7", "Show Program")
    entry("8", "Edit Config")
    entry("9", "Exit")

def handle_edit_config(config, path=DEFAULT_CONFIG_PATH):
    console.print("\n[bold]Edit Configuration[/bold]")

    program_file = Prompt.ask("Program File", default=config.get("program_file", ""))
    full_speed = Confirm.ask("Run at full speed?", default=config.get("full_speed", False))
    step_interval = FloatPrompt.ask("Seconds between steps", default=float(config.get("step_interval", 0.05)))
    batch = IntPrompt.ask("Steps per full-speed batch", default=config.get("full_speed_batch", 25))
    tape_window = IntPrompt.ask("Tape window radius (0 = whole tape)", default=config.get("tape_window", 0))
    debug_level = IntPrompt.ask("Debug Level", default=config.get("debug_level", 1))

    candidate = dict(config)
    candidate.update({
        "program_file": program_file,
        "full_speed": full_speed,
        "step_interval": step_interval,
        "full_speed_batch": batch,
        "tape_window": tape_window,
        "debug_level": debug_level
    })

    try:
        validate_config(candidate)
    except (TypeError, ValueError) as e:
        console.print(f"[red]Invalid configuration, nothing changed: {e}[/red]")
        return False

    config.update(candidate)
    save_runtime_config(config, path)
    return True

def apply_config(controller, config):
    """Copy the run settings from ``config`` onto the live runner."""
    runner = controller.runner
    runner.step_interval = config["step_interval"]
    runner.full_speed_batch = config["full_speed_batch"]
    runner.tape_window = config["tape_window"] or None
    controller.set_full_speed(config["full_speed"])

def interactive_main(config):
    controller = build_controller(config)
    if config.get("program_file"):
        load_program_file(controller, config["program_file"])

    while True:
        show_main_menu(controller)
        choice = Prompt.ask("\nSelect an option", choices=[str(i) for i in range(1, 10)], default="3")
        enabled = controller.enabled_actions()

        if choice == "1":
            path = Prompt.ask("Program file", default=config.get("program_file", ""))
            load_program_file(controller, path)
        elif choice == "2":
            tape = Prompt.ask("Initial tape", default=controller.machine.initial_tape)
            controller.reset(tape)
        elif choice == "3" and STEP in enabled:
            controller.step()
        elif choice == "4" and RUN in enabled:
            run_live(controller)
        elif choice == "5":
            controller.reset()
        elif choice == "6":
            controller.set_full_speed(not controller.full_speed)
        elif choice == "7":
            print_program(controller.machine.program, console=console)
        elif choice == "8":
            if handle_edit_config(config):
                apply_config(controller, config)
        elif choice == "9":
            console.print("[bold green]Goodbye![/bold green]")
            break
        else:
            console.print("[red]That action is not available now; reset the machine first.[/red]")

# === CLI Mode for Automation ===
def cli_main(args, config):
    if args.full_speed:
        config["full_speed"] = True
    controller = build_controller(config)

    program_file = args.program or config.get("program_file")
    if not program_file or not load_program_file(controller, program_file):
        return 1
    if args.tape is not None:
        controller.reset(args.tape)

    max_steps = args.max_steps if args.max_steps is not None else config.get("max_steps", 0)
    if max_steps:
        controller.machine.run(max_steps=max_steps)
        controller.machine.refresh(controller.runner.tape_window)
    else:
        run_live(controller)

    summary = controller.machine.summary()
    console.print(f"[cyan]State: {summary['state']}  Steps: {summary['steps']:,}  "
                  f"Tape: '{summary['tape']}' at {summary['tape_offset']}[/cyan]")
    return 0

def main():
    parser = argparse.ArgumentParser(description="Turing Machine Emulator")
    parser.add_argument("--config", default=DEFAULT_CONFIG_PATH, help="Path to runtime configuration JSON")
    parser.add_argument("--program", help="Program file to load")
    parser.add_argument("--tape", help="Initial tape (overrides the program's $INITIAL_TAPE)")
    parser.add_argument("--run", action="store_true", help="Run immediately instead of showing the menu")
    parser.add_argument("--full-speed", action="store_true", help="Run in batches with no per-step delay")
    parser.add_argument("--max-steps", type=int, help="Run headless for at most this many steps")
    args = parser.parse_args()

    try:
        config = load_runtime_config(args.config)
    except (TypeError, ValueError) as e:
        console.print(f"[red]Invalid configuration in {args.config}: {e}[/red]")
        return 1

    if args.run or args.max_steps is not None:
        return cli_main(args, config)
    interactive_main(config)
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
