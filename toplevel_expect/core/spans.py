"""Span queue: ordered, range-tagged records with gap filling and merging.

WHY: ``ast`` statement ranges skip comments, blank lines, and separators.
To classify every character of the buffer, the engine records what it
knows about each statement as a span, then recovers everything between
spans as code.

HOW: Three span kinds:
  Expansive — content unknown yet, re-sliced from the buffer later
  Fixed     — content already rendered (directive or assertion block)
  Ignored   — produces nothing (part declarations)
without_gaps() appends a zero-width boundary at the end of the buffer,
inserts an Expansive filler wherever two neighbours leave a gap, drops
the boundary, then merges runs of adjacent Expansive spans.

RULES:
- Spans are enqueued in source order
- prev.end < next.start → filler; prev.end == next.start → nothing;
  prev.end > next.start → OverlappingSpans (never recovered)
- Fixed and Ignored spans are never merged with anything
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Union

from toplevel_expect.core.errors import OverlappingSpans
from toplevel_expect.core.ir import Block, Location

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Expansive:
    location: Location


@dataclass(frozen=True)
class Fixed:
    location: Location
    block: Block


@dataclass(frozen=True)
class Ignored:
    location: Location


Span = Union[Expansive, Fixed, Ignored]


class SpanQueue:
    """Spans recorded in source order during the scan phase."""

    def __init__(self) -> None:
        self._spans: List[Span] = []

    def __len__(self) -> int:
        return len(self._spans)

    def __iter__(self) -> Iterator[Span]:
        return iter(self._spans)

    def expansive(self, location: Location) -> None:
        self._spans.append(Expansive(location))

    def fixed(self, location: Location, block: Block) -> None:
        self._spans.append(Fixed(location, block))

    def ignored(self, location: Location) -> None:
        self._spans.append(Ignored(location))

    def without_gaps(self, final_pos: int) -> List[Span]:
        """Fill every gap up to ``final_pos`` and merge adjacent Expansive spans.

        Raises:
            OverlappingSpans: Two consecutive spans overlap, or a span runs
                past ``final_pos``.
        """
        filled = fill_gaps(self._spans, final_pos)
        merged = merge_expansive(filled)
        logger.debug(
            "Span queue: %d recorded, %d after gap fill, %d after merge",
            len(self._spans),
            len(filled),
            len(merged),
        )
        return merged


def fill_gaps(spans: List[Span], final_pos: int) -> List[Span]:
    """Insert Expansive fillers between spans and up to ``final_pos``.

    A leading gap (before the first span) is covered too, since the walk
    starts from a zero-width boundary at offset 0.
    """
    boundary = Location.empty(final_pos)
    result: List[Span] = []
    prev = Location.empty(0)
    for span in [*spans, Ignored(boundary)]:
        following = span.location
        if prev.end < following.start:
            result.append(Expansive(Location(prev.end, following.start)))
        elif prev.end > following.start:
            raise OverlappingSpans(prev, following)
        result.append(span)
        prev = following
    # Drop the synthetic end boundary.
    return result[:-1]


def merge_expansive(spans: List[Span]) -> List[Span]:
    """Combine runs of adjacent Expansive spans into one span each."""
    result: List[Span] = []
    for span in spans:
        last = result[-1] if result else None
        if isinstance(span, Expansive) and isinstance(last, Expansive):
            result[-1] = Expansive(Location(last.location.start, span.location.end))
        else:
            result.append(span)
    return result
