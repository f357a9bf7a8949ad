import json
import os
from datetime import datetime, timezone

class JSONLogger:
    """JSON-lines diagnostic log for the emulator.

    ``debug_level`` works like the emulator's verbosity setting: an entry
    passed to ``debug()`` is written only when its level is at or below it.
    Level 0 is status-worthy, 1 warnings, 2 syntax errors, 4-5 traces.
    """

    def __init__(self, output_directory="logs/", log_file_prefix="turing_", debug_level=1):
        self.output_directory = output_directory
        self.log_file_prefix = log_file_prefix
        self.debug_level = debug_level
        os.makedirs(self.output_directory, exist_ok=True)
        self.today = datetime.now(timezone.utc).strftime("%Y-%m-%d")
        self.current_log = self._get_log_filename()

    def _get_log_filename(self):
        filename = f"{self.log_file_prefix}{self.today}.jsonl"  # JSON lines format
        return os.path.join(self.output_directory, filename)

    def _log_to_file(self, filename, entries):
        path = os.path.join(self.output_directory, filename)
        with open(path, "a", encoding="utf-8") as f:
            for entry in entries:
                f.write(json.dumps(entry) + "\n")

    def log(self, entry: dict):
        """Log a single entry to the main diagnostic log."""
        with open(self.current_log, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry) + "\n")

    def debug(self, level: int, message: str, **fields):
        """Log a diagnostic message if ``level`` is within the configured verbosity."""
        if level > self.debug_level:
            return False
        entry = {
            "time": datetime.now(timezone.utc).isoformat(),
            "level": level,
            "message": message,
        }
        entry.update(fields)
        self.log(entry)
        return True

    def log_run(self, entry: dict):
        """Log the summary of a finished or paused run."""
        filename = f"runs_{self.today}.jsonl"
        self._log_to_file(filename, [entry])
