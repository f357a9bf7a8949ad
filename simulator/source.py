import re
from collections import namedtuple
from pathlib import Path

ProgramSource = namedtuple("ProgramSource", ["name", "text", "initial_tape"])

_INITIAL_TAPE = re.compile(r";.*\$INITIAL_TAPE:? *(.+)$", re.MULTILINE)


def extract_initial_tape(text):
    """Return the value of the first ``$INITIAL_TAPE:`` comment directive, or None."""
    match = _INITIAL_TAPE.search(text.replace("\r", ""))
    if match is None:
        return None
    value = match.group(1).strip()
    return value or None


class SourceProvider:
    def load(self):
        raise NotImplementedError


class TextSourceProvider(SourceProvider):
    def __init__(self, text, name="<memory>", initial_tape=None):
        self.text = text
        self.name = name
        self.initial_tape = initial_tape

    def load(self):
        initial_tape = self.initial_tape
        if initial_tape is None:
            initial_tape = extract_initial_tape(self.text)
        return ProgramSource(self.name, self.text, initial_tape)


class FileSourceProvider(SourceProvider):
    """Reads program text from a file; a bare name also tries ``<name>.txt``."""

    def __init__(self, path):
        self.path = Path(path)

    def resolve(self):
        if self.path.exists():
            return self.path
        with_suffix = self.path.with_suffix(".txt")
        if not self.path.suffix and with_suffix.exists():
            return with_suffix
        raise FileNotFoundError(f"Program file not found at: {self.path}")

    def load(self):
        path = self.resolve()
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
        return ProgramSource(path.stem, text, extract_initial_tape(text))
