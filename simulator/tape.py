import numpy as np

from simulator.program import BLANK, normalize_symbol


class Tape:
    """Two-way infinite tape backed by a bounded buffer.

    ``_cells[0]`` sits at logical position ``_offset``. Everything outside the
    buffer is blank, and the buffer is kept trimmed so that its first and
    last cells are never blank (unless it is empty).
    """

    def __init__(self, initial="", offset=0):
        self._cells = np.empty(0, dtype="<U1")
        self._offset = 0
        self.load(initial, offset)

    def load(self, initial, offset=0):
        """Replace the tape contents with ``initial`` starting at ``offset``."""
        symbols = [normalize_symbol(c) for c in initial]
        self._cells = np.array(symbols, dtype="<U1") if symbols else np.empty(0, dtype="<U1")
        self._offset = offset
        self._trim()

    def __len__(self):
        return len(self._cells)

    def __str__(self):
        return "".join(self._cells)

    def __eq__(self, other):
        if not isinstance(other, Tape):
            return NotImplemented
        return self.contents() == other.contents()

    @property
    def start(self):
        """Logical position of the leftmost stored cell."""
        return self._offset

    @property
    def end(self):
        """Logical position one past the rightmost stored cell."""
        return self._offset + len(self._cells)

    def read(self, position):
        index = position - self._offset
        if index < 0 or index >= len(self._cells):
            return BLANK
        return str(self._cells[index])

    def write(self, position, symbol):
        symbol = normalize_symbol(symbol)
        index = position - self._offset

        if 0 <= index < len(self._cells):
            self._cells[index] = symbol
            if symbol == BLANK and (index == 0 or index == len(self._cells) - 1):
                self._trim()
        elif symbol == BLANK:
            # Outside the extent a blank is already there
            return
        elif len(self._cells) == 0:
            self._cells = np.array([symbol], dtype="<U1")
            self._offset = position
        elif index < 0:
            padding = np.full(-index, BLANK, dtype="<U1")
            padding[0] = symbol
            self._cells = np.concatenate((padding, self._cells))
            self._offset = position
        else:
            padding = np.full(index - len(self._cells) + 1, BLANK, dtype="<U1")
            padding[-1] = symbol
            self._cells = np.concatenate((self._cells, padding))

    def _trim(self):
        filled = np.flatnonzero(self._cells != BLANK)
        if len(filled) == 0:
            self._cells = np.empty(0, dtype="<U1")
            self._offset = 0
            return
        first, last = filled[0], filled[-1]
        self._cells = self._cells[first:last + 1].copy()
        self._offset += int(first)

    def contents(self):
        """Return ``(offset, text)`` for the non-blank extent of the tape."""
        return self._offset, str(self)

    def count_nonblank(self):
        return int(np.count_nonzero(self._cells != BLANK))

    def segment(self, start, stop):
        """Symbols at logical positions ``start`` up to (not including) ``stop``."""
        return "".join(self.read(position) for position in range(start, stop))

    def window(self, head, radius=None):
        """Split the tape around ``head`` into ``(left, head_symbol, right)``.

        With ``radius`` the window covers ``head - radius`` to
        ``head + radius``; without it the window spans the stored extent and
        the head.
        """
        if radius is None:
            start = min(self.start, head)
            stop = max(self.end, head + 1)
        else:
            start = head - radius
            stop = head + radius + 1
        return self.segment(start, head), self.read(head), self.segment(head + 1, stop)
