"""Adapter: Python source text to the core's Unit list.

WHY: The core works on units with ``str`` offsets and has no opinion on
how they were parsed. ``ast`` is the parser Python gives us, but its
positions are (line, UTF-8 byte column) pairs, decorated definitions
start at ``def``/``class`` rather than at their first ``@``, and a line
like ``a = 1; b = 2`` yields two statements the interactive interpreter
would read as one phrase.

HOW: Parse once, convert every top-level statement's start and end to
``str`` offsets through a LineIndex, widen decorated definitions back to
their first ``@``, then group statements separated by nothing but a ``;``
on the same line into one Unit.

RULES:
- SyntaxError from ``ast.parse`` propagates unchanged
- Comments, blank lines, and separators belong to no statement
- A unit's location runs from its first statement's start to its last
  statement's end
"""

from __future__ import annotations

import ast
from typing import List, Optional

from toplevel_expect import config
from toplevel_expect.core.ir import Location, Unit, UnitItem
from toplevel_expect.core.source import LineIndex


def _statement_location(node: ast.stmt, contents: str, index: LineIndex) -> Location:
    start = index.offset(node.lineno, node.col_offset)
    decorators = getattr(node, "decorator_list", None)
    if decorators:
        first = decorators[0]
        expr_start = index.offset(first.lineno, first.col_offset)
        at = contents.rfind("@", 0, expr_start)
        if at != -1:
            start = min(start, at)
    end = index.offset(node.end_lineno, node.end_col_offset)
    return Location(start, end)


def _joined_by_semicolon(contents: str, prev: UnitItem, item: UnitItem) -> bool:
    gap = contents[prev.location.end:item.location.start]
    return gap.strip(" \t") == ";"


def _make_unit(items: List[UnitItem]) -> Unit:
    location = Location(items[0].location.start, items[-1].location.end)
    return Unit(location=location, items=tuple(items))


def parse_units(contents: str, source_name: Optional[str] = None) -> List[Unit]:
    """Parse ``contents`` into top-level units with ``str`` offsets.

    Args:
        contents: Full text of the expect file.
        source_name: File name reported in SyntaxError messages.

    Returns:
        Units in source order.
    """
    if source_name is None:
        source_name = config.DEFAULT_SOURCE_NAME
    module = ast.parse(contents, filename=source_name)
    index = LineIndex(contents)

    units: List[Unit] = []
    group: List[UnitItem] = []
    for node in module.body:
        item = UnitItem(node, _statement_location(node, contents, index))
        if group and _joined_by_semicolon(contents, group[-1], item):
            group.append(item)
            continue
        if group:
            units.append(_make_unit(group))
        group = [item]
    if group:
        units.append(_make_unit(group))
    return units
