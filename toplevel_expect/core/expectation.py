"""Default rendering of assertion markers into expectation text.

WHY: The splitter and the reconstruction engine take the render function
as a dependency, so test drivers can plug in their own normalization.
Most callers just want the recorded text, normalized the way a tolerant
comparison would read it.

HOW: Placeholders render to nothing. Exact assertions render verbatim.
Tolerant assertions lose trailing whitespace on every line and any
trailing blank lines; leading lines are kept so the body still starts
where the author put it.

RULES:
- expect()                → None (placeholder, no text)
- expect_exact("...")     → payload unchanged
- expect("...")           → payload with trailing whitespace trimmed
"""

from __future__ import annotations

from typing import Callable, Optional

from toplevel_expect.core.ir import AssertionKind, AssertionMarker

Renderer = Callable[[AssertionMarker], Optional[str]]
"""Turns an assertion marker into its canonical text, or None."""


def normalize_tolerant(text: str) -> str:
    lines = [line.rstrip() for line in text.split("\n")]
    while len(lines) > 1 and not lines[-1]:
        lines.pop()
    return "\n".join(lines)


def render_expectation(marker: AssertionMarker) -> Optional[str]:
    """Render an assertion marker's payload for output and comparison."""
    if marker.payload is None:
        return None
    if marker.kind is AssertionKind.EXACT:
        return marker.payload
    return normalize_tolerant(marker.payload)
