"""Error taxonomy for marker recognition, chunk splitting, and reconstruction.

WHY: Every failure in the core is either an authoring mistake in the
expect file or a broken invariant in the parser's output. Callers need a
typed exception that carries enough context (source excerpt or ranges)
to point at the offending text.

HOW: One base class, one subclass per failure. Each subclass keeps its
diagnostic fields as attributes and builds a readable message.

RULES:
- Nothing in the core catches these; there is no partial result
- Messages always include the excerpt, location, or both ranges
"""

from __future__ import annotations

from toplevel_expect.core.ir import Location


class ToplevelExpectError(Exception):
    """Base class for all errors raised by the core."""


class ConflictingMarkers(ToplevelExpectError):
    """Raised when one unit matches both an assertion and a directive shape.

    WHY: Silently preferring one kind would turn an expectation into prose
    (or the reverse) without telling anyone.

    RULES:
    - source_excerpt is the exact text of the offending statement
    """

    def __init__(self, source_excerpt: str) -> None:
        self.source_excerpt = source_excerpt
        super().__init__(f"Both a directive and an assertion marker: {source_excerpt!r}")


class MisplacedPartLabel(ToplevelExpectError):
    """Raised when ``part(...)`` appears after code has started accumulating."""

    def __init__(self, location: Location, source_name: str, line: int) -> None:
        self.location = location
        self.source_name = source_name
        self.line = line
        super().__init__(
            f"{source_name}:{line}: a part declaration cannot appear "
            f"in the middle of a code block"
        )


class OverlappingSpans(ToplevelExpectError):
    """Raised when recorded spans are not ordered and disjoint.

    WHY: Spans come straight from parser ranges in source order. An overlap
    means the parser (or the caller building units by hand) is broken, and
    any output built on top of it would duplicate or reorder text.

    RULES:
    - Always carries both ranges
    """

    def __init__(self, prev: Location, next: Location) -> None:
        self.prev = prev
        self.next = next
        super().__init__(f"Overlap: prev={prev} next={next}")


class UnhandledExtensionShape(ToplevelExpectError):
    """Raised when a marker-named call has arguments markers do not accept."""

    def __init__(self, name: str, reason: str, source_excerpt: str) -> None:
        self.name = name
        self.reason = reason
        self.source_excerpt = source_excerpt
        super().__init__(f"Malformed {name}(...) marker ({reason}): {source_excerpt!r}")
