"""Intermediate representation dataclasses for partitioned expect files.

WHY: ``ast`` gives us a flat list of top-level statements with positions
but no notion of markers, chunks, or the text it silently dropped
(comments, blank lines). The chunk splitter, the reconstruction engine,
and every formatter need one well-typed vocabulary for ranges, units,
markers, chunks, and output blocks.

HOW: Plain dataclasses form the hierarchy:
  Location        — a [start, end) range of offsets into the source text
  UnitItem / Unit — one top-level phrase as handed in by the parser
  *Marker         — classification of a unit item (assertion, directive, part)
  Chunk/Leftover  — accumulated code closed by an assertion marker
  Block           — one classified output unit of the reconstruction

RULES:
- Offsets are ``str`` indices (code points), never UTF-8 byte offsets
- Locations are half-open and never inverted
- Everything is frozen once built; passes create new objects
"""

from __future__ import annotations

import ast
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple, Union


@dataclass(frozen=True)
class Location:
    """A half-open ``[start, end)`` range over the source text."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid location [{self.start}, {self.end})")

    @classmethod
    def empty(cls, pos: int) -> Location:
        return cls(pos, pos)

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def __str__(self) -> str:
        return f"[{self.start}, {self.end})"


@dataclass(frozen=True)
class UnitItem:
    """One statement inside a unit, with its own source range."""

    node: ast.stmt
    location: Location


@dataclass(frozen=True)
class Unit:
    """One top-level phrase as produced by the parser.

    WHY: The interactive interpreter reads a phrase at a time: usually a
    single statement, but ``a = 1; b = 2`` on one line is read together.
    Marker recognition only applies to single-statement phrases, while the
    reconstruction engine looks at every statement individually.

    RULES:
    - location covers all items (and the separators between them)
    - items are ordered and never overlap
    - an empty unit (no items) is skipped by the chunk splitter
    """

    location: Location
    items: Tuple[UnitItem, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.items

    @classmethod
    def single(cls, node: ast.stmt, location: Location) -> Unit:
        return cls(location=location, items=(UnitItem(node, location),))


class AssertionKind(str, Enum):
    """How strictly captured output must match the recorded expectation."""

    TOLERANT = "tolerant"
    EXACT = "exact"


@dataclass(frozen=True)
class AssertionMarker:
    """An ``expect(...)`` / ``expect_exact(...)`` call.

    payload is None for a bare ``expect()`` placeholder.
    """

    name: str
    kind: AssertionKind
    payload: Optional[str]
    location: Location


@dataclass(frozen=True)
class DirectiveMarker:
    """An ``org(...)`` narrative block; a missing payload reads as ""."""

    name: str
    text: str
    location: Location


@dataclass(frozen=True)
class PartMarker:
    """A ``part("name")`` declaration grouping the chunks that follow."""

    name: str
    label: str
    location: Location


Marker = Union[AssertionMarker, DirectiveMarker, PartMarker]


@dataclass(frozen=True)
class Chunk:
    """Code accumulated since the previous boundary plus the assertion closing it.

    WHY: A test driver runs each chunk's code and compares what it printed
    against the chunk's expectation. The part label lets it group results.

    RULES:
    - location runs from the end of the previous boundary (previous
      assertion or part declaration, or the initial position) to the
      start of the closing marker
    - units holds only ordinary code, in source order
    - expectation is the render function's output for the marker
      (None for a placeholder marker)
    """

    part: Optional[str]
    units: Tuple[Unit, ...]
    marker: AssertionMarker
    location: Location
    source_name: str
    expectation: Optional[str] = None

    @property
    def node_location(self) -> Location:
        return self.marker.location


@dataclass(frozen=True)
class Leftover:
    """Trailing code with no closing assertion."""

    part: Optional[str]
    units: Tuple[Unit, ...]
    start: int
    source_name: str


class BlockKind(str, Enum):
    DIRECTIVE = "directive"
    ASSERTION = "assertion"
    CODE = "code"


@dataclass(frozen=True)
class Block:
    """One classified output unit of the reconstruction.

    RULES:
    - text is either a slice of the source (CODE) or the rendered marker
      body (DIRECTIVE, ASSERTION)
    - location is the source range the block stands for; it orders the
      blocks but is not re-read by printers
    """

    kind: BlockKind
    text: str
    location: Location = field(default=Location(0, 0), compare=False)

    @classmethod
    def directive(cls, text: str, location: Location = Location(0, 0)) -> Block:
        return cls(BlockKind.DIRECTIVE, text, location)

    @classmethod
    def assertion(cls, text: str, location: Location = Location(0, 0)) -> Block:
        return cls(BlockKind.ASSERTION, text, location)

    @classmethod
    def code(cls, text: str, location: Location = Location(0, 0)) -> Block:
        return cls(BlockKind.CODE, text, location)
