import json

from logger.logger import JSONLogger
from simulator.controller import Controller, RESET, RUN, SPEED, STEP, STOP
from simulator.source import TextSourceProvider

INCREMENT = """; $INITIAL_TAPE: 1011
0 * * r 0
0 _ _ l 1
1 1 0 l 1
1 0 1 * halt
1 _ 1 * halt
"""

FAST_CONFIG = {"step_interval": 0, "full_speed_interval": 0}


class RecordingDisplay:
    def __init__(self):
        self.views = []
        self.messages = []

    def update(self, view):
        self.views.append(view)

    def status(self, message):
        self.messages.append(message)


def make_controller(**config):
    display = RecordingDisplay()
    settings = dict(FAST_CONFIG)
    settings.update(config)
    return Controller(display=display, config=settings), display


def test_load_program_uses_initial_tape_directive():
    controller, display = make_controller()
    source = controller.load_program(TextSourceProvider(INCREMENT, name="increment"))
    assert source.initial_tape == "1011"
    assert controller.program_name == "increment"
    assert controller.machine.tape.contents() == (0, "1011")
    assert display.messages[-1] == "Machine reset."
    assert display.views, "reset should refresh the display"


def test_load_without_reset_keeps_machine_state():
    controller, _ = make_controller(initial_tape="11")
    controller.machine.step()
    controller.load_program(TextSourceProvider("0 1 1 r 0"), reset=False)
    assert controller.machine.steps == 1
    assert controller.machine.initial_tape == "11"
    assert len(controller.machine.program) == 1


def test_step_refreshes_and_clears_status():
    controller, display = make_controller()
    controller.load_program(TextSourceProvider(INCREMENT))
    assert controller.step() is True
    assert controller.machine.steps == 1
    assert display.views[-1].steps == 1
    assert display.messages[-1] == " "


def test_run_to_halt_and_enabled_actions():
    controller, display = make_controller()
    controller.load_program(TextSourceProvider(INCREMENT))
    assert controller.enabled_actions() == {STEP, RUN, RESET, SPEED}

    assert controller.run() is True
    assert controller.machine.tape.contents() == (0, "1100")
    assert controller.machine.steps == 8
    assert display.messages[-1] == "Halted."
    assert controller.enabled_actions() == {RESET, SPEED}

    controller.reset()
    assert controller.enabled_actions() == {STEP, RUN, RESET, SPEED}
    assert controller.machine.tape.contents() == (0, "1011")


def test_run_interrupted_reports_pause():
    controller, display = make_controller()
    controller.load_program(TextSourceProvider(INCREMENT))
    assert controller.run(max_ticks=3) is False
    assert display.messages[-1].startswith("Paused")
    assert controller.machine.steps == 3
    assert controller.run() is True
    assert controller.machine.steps == 8


def test_only_stop_is_enabled_while_running():
    controller, _ = make_controller()
    controller.load_program(TextSourceProvider("0 * * r 0"))
    seen = []

    def refresh(radius=None):
        seen.append(controller.enabled_actions())
        controller.stop()

    controller.machine.refresh = refresh
    controller.run()
    assert seen == [{STOP}]


def test_reset_keeps_speed_flag():
    controller, _ = make_controller(full_speed=True)
    controller.load_program(TextSourceProvider(INCREMENT))
    controller.run()
    controller.reset("1")
    assert controller.full_speed is True
    controller.set_full_speed(False)
    controller.reset()
    assert controller.full_speed is False
    assert controller.machine.tape.contents() == (0, "1")


def test_run_is_logged(tmp_path):
    logger = JSONLogger(output_directory=str(tmp_path))
    controller = Controller(display=RecordingDisplay(), logger=logger, config=FAST_CONFIG)
    controller.load_program(TextSourceProvider(INCREMENT, name="increment"))
    controller.run()

    run_logs = list(tmp_path.glob("runs_*.jsonl"))
    assert len(run_logs) == 1
    entry = json.loads(run_logs[0].read_text(encoding="utf-8").splitlines()[0])
    assert entry["program"] == "increment"
    assert entry["halted"] is True
    assert entry["steps"] == 8
    assert entry["tape"] == "1100"


def test_load_program_compiles_once(tmp_path):
    logger = JSONLogger(output_directory=str(tmp_path), debug_level=2)
    display = RecordingDisplay()
    controller = Controller(display=display, logger=logger, config=FAST_CONFIG)
    controller.load_program(TextSourceProvider("0 1\n0 1 0 r 1\n0 1 1 l 2"))

    lines = open(logger.current_log, encoding="utf-8").read().splitlines()
    assert sum("Syntax error" in line for line in lines) == 1
    assert sum("multiple definitions" in line for line in lines) == 1

    warnings = [message for message in display.messages if "multiple definitions" in message]
    assert len(warnings) == 1
    assert display.messages.index("Machine reset.") < display.messages.index(warnings[0])
