"""Toplevel expect files: span partitioning for Python expect tests.

WHY: A toplevel expect file is ordinary Python interleaved with marker
calls (``expect(...)``, ``org(...)``, ``part(...)``). Test drivers need
the file cut into (code, expectation) chunks, and round-trip tools need
the whole file classified into blocks without losing a character, even
though ``ast`` drops comments and blank lines from statement ranges.

HOW: Three-stage pipeline: parse (source adapter over ``ast``), partition
(core: marker recognition, chunk splitting, span reconstruction), print
(pluggable formatters). Each stage is independently testable.

RULES:
- The core never executes code and never compares output
- All formatters consume the same Block list
- The Block list is the stable contract between reconstruction and printing
"""

__version__ = "0.1.0"
