"""
LineReader: assembles serial bytes into protocol lines.

Fixed 32-byte buffer, written at ptr % 32. A line that reaches the buffer
capacity before its newline is flagged invalid; the remaining bytes keep
wrapping into the buffer but the whole line is dropped at the terminator.
"""

from typing import Optional

import numpy as np

LINE_CAPACITY = 32

CR = 0x0D
LF = 0x0A


class LineReader:
    def __init__(self, capacity=LINE_CAPACITY):
        self.capacity = capacity
        self._buf = np.zeros(capacity, dtype=np.uint8)
        self.reset()

    def reset(self):
        self._buf[:] = 0
        self.ptr = 0
        self.is_invalid = False
        self._line_len = 0

    def feed(self, byte: int) -> Optional[int]:
        """
        Feed one byte. Returns the length of the completed line (0 for an
        empty one) when a newline arrives, None otherwise. Overflowed lines
        return None at their newline too.
        """
        if byte == CR:
            return None
        if byte == LF:
            length, invalid = self.ptr, self.is_invalid
            self.ptr = 0
            self.is_invalid = False
            if invalid:
                return None
            self._line_len = length
            return length

        self._buf[self.ptr % self.capacity] = byte
        self.ptr += 1
        if self.ptr >= self.capacity:
            self.is_invalid = True
        return None

    def line(self) -> bytes:
        """Content of the most recently reported line."""
        return self._buf[:self._line_len].tobytes()
