"""Chunk splitting: pairing accumulated code with the assertion that closes it.

WHY: A test driver runs an expect file one chunk at a time: the code
written since the previous expectation, then a comparison of what it
printed against the next ``expect(...)``. Chunks also carry the current
``part(...)`` label so results can be grouped.

HOW: One forward pass over the units with explicit running state
(part label, accumulated code, start of accumulation). Assertion markers
close a chunk, part markers relabel, everything else accumulates.

RULES:
- Empty units are skipped without touching the state
- Only single-statement units can be markers
- An assertion closes a chunk spanning [accumulation start, marker start);
  accumulation restarts at the marker's end
- A part marker with code already accumulated → MisplacedPartLabel;
  otherwise it relabels and moves the accumulation start to its end
- The part label persists until the next part marker
- Trailing code with no assertion becomes the Leftover
- The buffer is never read (contents only quotes errors)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from toplevel_expect import config
from toplevel_expect.core.errors import MisplacedPartLabel
from toplevel_expect.core.expectation import Renderer, render_expectation
from toplevel_expect.core.ir import (
    AssertionMarker,
    Chunk,
    Leftover,
    Location,
    Marker,
    PartMarker,
    Unit,
)
from toplevel_expect.core.markers import MarkerVocabulary, classify

logger = logging.getLogger(__name__)


@dataclass
class _SplitState:
    """Running state of the forward pass; never shared outside it."""

    part: Optional[str]
    start: int
    accumulated: List[Unit] = field(default_factory=list)


def _unit_marker(
    unit: Unit, vocabulary: Optional[MarkerVocabulary], contents: Optional[str]
) -> Optional[Marker]:
    if len(unit.items) != 1:
        return None
    return classify(unit.items[0], vocabulary, contents)


def split_chunks(
    units: Iterable[Unit],
    source_name: Optional[str] = None,
    *,
    start: int = 0,
    render: Renderer = render_expectation,
    vocabulary: Optional[MarkerVocabulary] = None,
    contents: Optional[str] = None,
) -> Tuple[List[Chunk], Optional[Leftover]]:
    """Split a unit stream into chunks closed by assertion markers.

    Args:
        units: Top-level units in source order.
        source_name: File name used in chunks and diagnostics.
        start: Offset where the first chunk's accumulation starts.
        render: Turns each closing marker into its expectation text.
        vocabulary: Marker names to recognize (configured default if None).
        contents: Source buffer, only used to quote offending statements.

    Returns:
        The chunks in source order, and the trailing code (or None).

    Raises:
        MisplacedPartLabel: A part marker follows code in the same chunk.
        ConflictingMarkers, UnhandledExtensionShape: From classification.
    """
    if source_name is None:
        source_name = config.DEFAULT_SOURCE_NAME

    state = _SplitState(part=None, start=start)
    chunks: List[Chunk] = []

    for unit in units:
        if unit.is_empty:
            continue
        marker = _unit_marker(unit, vocabulary, contents)

        if isinstance(marker, AssertionMarker):
            chunks.append(Chunk(
                part=state.part,
                units=tuple(state.accumulated),
                marker=marker,
                location=Location(state.start, marker.location.start),
                source_name=source_name,
                expectation=render(marker),
            ))
            state.accumulated = []
            state.start = marker.location.end
        elif isinstance(marker, PartMarker):
            if state.accumulated:
                raise MisplacedPartLabel(
                    marker.location, source_name, unit.items[0].node.lineno
                )
            state.part = marker.label
            state.start = marker.location.end
        else:
            state.accumulated.append(unit)

    leftover = None
    if state.accumulated:
        leftover = Leftover(
            part=state.part,
            units=tuple(state.accumulated),
            start=state.start,
            source_name=source_name,
        )

    logger.debug(
        "Split %s into %d chunks (%s)",
        source_name,
        len(chunks),
        "with leftover code" if leftover else "no leftover",
    )
    return chunks, leftover
