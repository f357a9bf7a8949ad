import threading

STEP_INTERVAL = 0.05
FULL_SPEED_INTERVAL = 0.01
FULL_SPEED_BATCH = 25


class Runner:
    """Drives a TuringMachine on timed ticks until it halts or is stopped.

    At normal speed each tick is one step followed by ``step_interval``
    seconds of waiting. At full speed each tick runs up to
    ``full_speed_batch`` steps and waits ``full_speed_interval``. The display
    is refreshed once per tick. ``stop()`` is checked between ticks only, so
    a batch in progress always finishes.
    """

    def __init__(self, machine, full_speed=False, step_interval=STEP_INTERVAL,
                 full_speed_interval=FULL_SPEED_INTERVAL, full_speed_batch=FULL_SPEED_BATCH,
                 tape_window=None):
        self.machine = machine
        self.full_speed = full_speed
        self.step_interval = step_interval
        self.full_speed_interval = full_speed_interval
        self.full_speed_batch = full_speed_batch
        self.tape_window = tape_window
        self.ticks = 0
        self._stop = threading.Event()
        self._running = False

    @property
    def full_speed_batch(self):
        return self._full_speed_batch

    @full_speed_batch.setter
    def full_speed_batch(self, value):
        if value < 1:
            raise ValueError("full_speed_batch must be at least 1")
        self._full_speed_batch = value

    @property
    def running(self):
        return self._running

    @property
    def stopped(self):
        return self._stop.is_set()

    @property
    def interval(self):
        return self.full_speed_interval if self.full_speed else self.step_interval

    def stop(self):
        """Request cancellation; takes effect before the next tick."""
        self._stop.set()

    def tick(self):
        """Run one tick under the current speed policy. Returns False once halted."""
        if self.full_speed:
            can_continue = True
            for _ in range(self.full_speed_batch):
                can_continue = self.machine.step()
                if not can_continue:
                    break
        else:
            can_continue = self.machine.step()
        self.ticks += 1
        self.machine.refresh(self.tape_window)
        return can_continue

    def run(self, max_ticks=None):
        """Tick until the machine halts, ``stop()`` is called or ``max_ticks`` ticks ran.

        Returns True if the machine halted.
        """
        self._stop.clear()
        self._running = True
        ticks = 0
        try:
            while not self._stop.is_set():
                if not self.tick():
                    return True
                ticks += 1
                if max_ticks is not None and ticks >= max_ticks:
                    break
                # wait() returns early when stop() is called
                if self._stop.wait(self.interval):
                    break
            return self.machine.halted
        finally:
            self._running = False
