from simulator.runner import Runner
from simulator.turing_machine import TuringMachine

STEP = "step"
RUN = "run"
STOP = "stop"
RESET = "reset"
SPEED = "speed"


class Controller:
    """Control surface for one machine session.

    Turns step/run/stop/reset/speed requests into machine and runner calls,
    sets the status line, and reports which requests are currently valid.
    """

    def __init__(self, display=None, logger=None, config=None):
        config = config or {}
        self.display = display
        self.logger = logger
        self.machine = TuringMachine(
            initial_tape=config.get("initial_tape", ""), display=display, logger=logger
        )
        window = config.get("tape_window", 0)
        self.runner = Runner(
            self.machine,
            full_speed=config.get("full_speed", False),
            step_interval=config.get("step_interval", 0.05),
            full_speed_interval=config.get("full_speed_interval", 0.01),
            full_speed_batch=config.get("full_speed_batch", 25),
            tape_window=window or None,
        )
        self.program_name = None

    @property
    def full_speed(self):
        return self.runner.full_speed

    def set_full_speed(self, enabled):
        self.runner.full_speed = bool(enabled)

    def _status(self, message):
        self.machine.status_message = message
        if self.display is not None:
            self.display.status(message)

    def enabled_actions(self):
        if self.runner.running:
            return {STOP}
        if self.machine.halted:
            return {RESET, SPEED}
        return {STEP, RUN, RESET, SPEED}

    def load_program(self, provider, reset=True):
        """Load source text from ``provider`` and compile it.

        A default initial tape found in the source replaces the current one.
        With ``reset`` the machine is also reset onto that tape.
        """
        source = provider.load()
        self.program_name = source.name
        if self.logger is not None:
            self.logger.debug(1, f"Load '{source.name}'")
        if source.initial_tape is not None:
            self.machine.initial_tape = source.initial_tape
        if reset:
            self.machine.source = source.text
            self.reset()
        else:
            self.machine.compile(source.text)
        return source

    def step(self):
        self._status(" ")
        can_continue = self.machine.step()
        self.machine.refresh(self.runner.tape_window)
        return can_continue

    def run(self, max_ticks=None):
        """Run until halted or stopped. Returns True if the machine halted."""
        self._status("Running...")
        halted = self.runner.run(max_ticks=max_ticks)
        if not halted:
            self._status("Paused; choose 'Run' or 'Step' to resume.")
        if self.logger is not None:
            entry = self.machine.summary()
            entry["program"] = self.program_name
            entry["full_speed"] = self.full_speed
            self.logger.log_run(entry)
        return halted

    def stop(self):
        self.runner.stop()

    def reset(self, initial_tape=None):
        self._status("Machine reset.")
        # compile warnings land after the reset message
        self.machine.reset(initial_tape)
        self.machine.refresh(self.runner.tape_window)
