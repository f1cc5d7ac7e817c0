"""End-to-end helpers: source text in, chunks / blocks / diff out.

WHY: Most callers hold the text of one expect file and want one of three
answers: its chunks, its blocks, or whether it round-trips. Wiring the
adapter, the core, and a formatter by hand each time is repetitive.

HOW: Each helper parses with parse_units() and hands the units to the
matching core entry point. All keyword options pass straight through.

RULES:
- No file I/O; callers read files themselves
- Errors from parsing and from the core propagate unchanged
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from toplevel_expect.adapters.python_source import parse_units
from toplevel_expect.core.chunks import split_chunks
from toplevel_expect.core.expectation import Renderer, render_expectation
from toplevel_expect.core.ir import Block, Chunk, Leftover
from toplevel_expect.core.markers import MarkerVocabulary
from toplevel_expect.core.reconstruct import reconstruct
from toplevel_expect.formatters.round_trip import RoundTripFormatter, diff_round_trip

logger = logging.getLogger(__name__)


def split_source(
    contents: str,
    source_name: Optional[str] = None,
    *,
    render: Renderer = render_expectation,
    vocabulary: Optional[MarkerVocabulary] = None,
) -> Tuple[List[Chunk], Optional[Leftover]]:
    """Parse ``contents`` and split it into chunks."""
    units = parse_units(contents, source_name)
    return split_chunks(
        units, source_name, render=render, vocabulary=vocabulary, contents=contents
    )


def partition_source(
    contents: str,
    source_name: Optional[str] = None,
    *,
    render: Renderer = render_expectation,
    vocabulary: Optional[MarkerVocabulary] = None,
) -> List[Block]:
    """Parse ``contents`` and classify all of it into blocks."""
    units = parse_units(contents, source_name)
    return reconstruct(units, contents, render=render, vocabulary=vocabulary)


def round_trip_diff(
    contents: str,
    source_name: Optional[str] = None,
    *,
    render: Renderer = render_expectation,
    vocabulary: Optional[MarkerVocabulary] = None,
) -> str:
    """Print the blocks of ``contents`` back to source and diff against it."""
    blocks = partition_source(contents, source_name, render=render, vocabulary=vocabulary)
    rendered = RoundTripFormatter().format(blocks).content
    diff = diff_round_trip(contents, rendered, source_name)
    if diff:
        logger.info("Round trip of %s differs from the source", source_name or "source")
    return diff
