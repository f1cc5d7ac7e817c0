"""Buffer utilities shared by the adapter, the recognizer, and the engine.

WHY: ``ast`` reports positions as (1-based line, UTF-8 byte column) pairs,
while the core slices a Python ``str`` by code-point offsets. Both sides
need the same conversion and the same slicing rules.

HOW: LineIndex precomputes the offset of every line start once per
buffer. extract_by_location() slices with bounds checking.

RULES:
- Line breaks are "\\r\\n", a lone "\\r", or "\\n", as in the tokenizer
- The buffer is never mutated
- Columns from ``ast`` are UTF-8 byte counts within the line
"""

from __future__ import annotations

import re
from typing import List

from toplevel_expect.core.ir import Location


# Line breaks as the tokenizer sees them.
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def extract_by_location(contents: str, location: Location) -> str:
    """Return the text of ``contents`` covered by ``location``."""
    if location.end > len(contents):
        raise ValueError(
            f"Location {location} is outside a buffer of length {len(contents)}"
        )
    return contents[location.start:location.end]


class LineIndex:
    """Maps ``ast`` positions to ``str`` offsets for one buffer."""

    def __init__(self, contents: str) -> None:
        self.contents = contents
        self._line_starts: List[int] = [0]
        self._line_starts.extend(m.end() for m in _LINE_BREAK.finditer(contents))

    def line_text(self, lineno: int) -> str:
        start = self._line_starts[lineno - 1]
        match = _LINE_BREAK.search(self.contents, start)
        return self.contents[start:match.start()] if match else self.contents[start:]

    def offset(self, lineno: int, col_offset: int) -> int:
        """Convert an ``ast`` (lineno, byte column) pair to a ``str`` offset."""
        line = self.line_text(lineno)
        prefix = line.encode("utf-8")[:col_offset].decode("utf-8")
        return self._line_starts[lineno - 1] + len(prefix)
