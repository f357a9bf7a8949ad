import threading

import pytest

from simulator.runner import Runner
from simulator.turing_machine import TuringMachine

COUNT_TO_FIFTY = "\n".join(f"{i} _ 1 r {i + 1}" for i in range(49)) + "\n49 _ 1 r halt"


class CountingDisplay:
    def __init__(self):
        self.updates = 0

    def update(self, view):
        self.updates += 1

    def status(self, message):
        pass


def make_runner(source, full_speed=False, **kwargs):
    display = CountingDisplay()
    machine = TuringMachine(source, display=display)
    runner = Runner(machine, full_speed=full_speed, step_interval=0, full_speed_interval=0, **kwargs)
    return runner, display


def test_normal_speed_one_step_per_tick():
    runner, display = make_runner(COUNT_TO_FIFTY)
    assert runner.run() is True
    assert runner.machine.steps == 50
    assert runner.ticks == 50
    assert display.updates == 50


def test_full_speed_batches_and_stops_early():
    runner, display = make_runner(COUNT_TO_FIFTY, full_speed=True)
    assert runner.run() is True
    assert runner.machine.steps == 50
    # 25 + 25 steps, halting on the last step of the second batch
    assert runner.ticks == 2
    assert display.updates == 2


def test_full_speed_partial_last_batch():
    runner, _ = make_runner(COUNT_TO_FIFTY, full_speed=True, full_speed_batch=20)
    runner.run()
    assert runner.machine.steps == 50
    assert runner.ticks == 3


def test_max_ticks_pauses_and_resume_continues():
    runner, _ = make_runner(COUNT_TO_FIFTY)
    assert runner.run(max_ticks=10) is False
    assert runner.machine.steps == 10
    assert runner.run() is True
    assert runner.machine.steps == 50


def test_stop_between_ticks_keeps_state():
    runner, _ = make_runner("0 * * r 0")
    runner.step_interval = 0.01

    timer = threading.Timer(0.05, runner.stop)
    timer.start()
    try:
        halted = runner.run()
    finally:
        timer.cancel()

    assert halted is False
    assert runner.stopped
    assert not runner.running
    steps = runner.machine.steps
    assert steps > 0
    assert runner.machine.head == steps
    assert runner.machine.current_state == "0"


def test_stop_lets_the_batch_finish():
    runner, _ = make_runner("0 * * r 0", full_speed=True)
    original_step = runner.machine.step

    def step_and_stop():
        runner.stop()
        return original_step()

    runner.machine.step = step_and_stop
    runner.run()
    assert runner.machine.steps == 25
    assert runner.ticks == 1


def test_invalid_batch_size():
    with pytest.raises(ValueError):
        Runner(TuringMachine(), full_speed_batch=0)


def test_interval_follows_speed_flag():
    runner = Runner(TuringMachine(), step_interval=0.05, full_speed_interval=0.01)
    assert runner.interval == 0.05
    runner.full_speed = True
    assert runner.interval == 0.01


def test_batch_size_checked_on_assignment():
    runner = Runner(TuringMachine("0 * * r 0"), full_speed=True)
    with pytest.raises(ValueError):
        runner.full_speed_batch = 0
    assert runner.full_speed_batch == 25
    assert runner.run(max_ticks=2) is False
    assert runner.machine.steps == 50
