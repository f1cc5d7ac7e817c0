"""Span reconstruction: classify the whole buffer into ordered blocks.

WHY: Round-trip and diff tools need the entire expect file back as
directive, assertion, and code blocks, in order, without losing or
duplicating a character. ``ast`` only tells us where statements are, so
comments and blank lines have to be recovered from the gaps.

HOW: Four strictly sequential phases:
  1. Scan — classify every statement of every unit into the span queue
  2. Gap fill — recover the text between recorded spans as Expansive
  3. Merge — combine adjacent Expansive spans
  4. Materialize — slice Expansive spans into Code blocks, emit Fixed blocks
Any error aborts the whole reconstruction; there is no partial result.

RULES:
- Directive → Fixed block with its literal text
- Assertion → Fixed block with the rendered text; if the render function
  returns None the marker is Ignored, so its bytes vanish from the output
- Part declaration → Ignored (consumed, never re-surfaced as code)
- Anything else → Expansive
- Empty Code slices produce no block
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from toplevel_expect.core.expectation import Renderer, render_expectation
from toplevel_expect.core.ir import (
    AssertionMarker,
    Block,
    DirectiveMarker,
    PartMarker,
    Unit,
)
from toplevel_expect.core.markers import MarkerVocabulary, classify
from toplevel_expect.core.source import extract_by_location
from toplevel_expect.core.spans import Expansive, Fixed, Span, SpanQueue

logger = logging.getLogger(__name__)


def _scan(
    units: Iterable[Unit],
    contents: str,
    render: Renderer,
    vocabulary: Optional[MarkerVocabulary],
) -> SpanQueue:
    queue = SpanQueue()
    for unit in units:
        for item in unit.items:
            marker = classify(item, vocabulary, contents)
            location = item.location
            if isinstance(marker, AssertionMarker):
                text = render(marker)
                if text is None:
                    queue.ignored(location)
                else:
                    queue.fixed(location, Block.assertion(text, location))
            elif isinstance(marker, DirectiveMarker):
                queue.fixed(location, Block.directive(marker.text, location))
            elif isinstance(marker, PartMarker):
                queue.ignored(location)
            else:
                queue.expansive(location)
    return queue


def _materialize(spans: List[Span], contents: str) -> List[Block]:
    blocks: List[Block] = []
    for span in spans:
        if isinstance(span, Fixed):
            blocks.append(span.block)
        elif isinstance(span, Expansive) and not span.location.is_empty:
            code = extract_by_location(contents, span.location)
            blocks.append(Block.code(code, span.location))
        # Ignored spans produce nothing.
    return blocks


def reconstruct(
    units: Iterable[Unit],
    contents: str,
    *,
    render: Renderer = render_expectation,
    vocabulary: Optional[MarkerVocabulary] = None,
) -> List[Block]:
    """Classify the whole of ``contents`` into directive, assertion, and code blocks.

    Args:
        units: Top-level units parsed from ``contents``, in source order.
        contents: The full source buffer.
        render: Turns assertion markers into text (None drops the marker).
        vocabulary: Marker names to recognize (configured default if None).

    Returns:
        Blocks in source order.

    Raises:
        OverlappingSpans: Unit ranges overlap or run past the buffer.
        ConflictingMarkers, UnhandledExtensionShape: From classification.
    """
    queue = _scan(units, contents, render, vocabulary)
    spans = queue.without_gaps(final_pos=len(contents))
    blocks = _materialize(spans, contents)
    logger.debug(
        "Reconstructed %d characters into %d blocks", len(contents), len(blocks)
    )
    return blocks
