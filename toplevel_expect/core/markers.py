"""Marker recognition for top-level statements.

WHY: Markers are ordinary-looking calls (``expect("...")``,
``org("...")``, ``part("...")``) among otherwise opaque statements. Both
the chunk splitter and the reconstruction engine must agree on exactly
which statements are markers and what they carry.

HOW: classify() looks at one statement. Only an expression statement
whose value is a call to a plain or dotted name from the vocabulary can
be a marker. The call's arguments are then checked against the payload
shape markers accept: nothing, or one string literal.

RULES:
- A name registered as both assertion and directive → ConflictingMarkers
- Keyword, extra, starred, or non-literal arguments → UnhandledExtensionShape
- ``part(...)`` must carry a string literal
- A bare assertion (``expect()``) has payload None; a bare directive reads as ""
- Everything else is ordinary code (classify returns None)
"""

from __future__ import annotations

import ast
import functools
import logging
from dataclasses import dataclass
from typing import Optional

from toplevel_expect import config
from toplevel_expect.core.errors import ConflictingMarkers, UnhandledExtensionShape
from toplevel_expect.core.ir import (
    AssertionKind,
    AssertionMarker,
    DirectiveMarker,
    Marker,
    PartMarker,
    UnitItem,
)
from toplevel_expect.core.source import extract_by_location

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarkerVocabulary:
    """The call names recognized as each marker kind.

    RULES:
    - tolerant and exact names must be disjoint
    - part names must not be used by any other kind
    - assertion/directive overlap is allowed here but fails on use
    """

    tolerant: frozenset[str]
    exact: frozenset[str]
    directives: frozenset[str]
    parts: frozenset[str]

    def __post_init__(self) -> None:
        both_kinds = self.tolerant & self.exact
        if both_kinds:
            raise ValueError(
                f"Names registered as both tolerant and exact: {sorted(both_kinds)}"
            )
        clash = self.parts & (self.tolerant | self.exact | self.directives)
        if clash:
            raise ValueError(f"Part names reused by other markers: {sorted(clash)}")
        ambiguous = (self.tolerant | self.exact) & self.directives
        if ambiguous:
            logger.warning(
                "Marker names registered as both assertion and directive: %s",
                ", ".join(sorted(ambiguous)),
            )

    def assertion_kind(self, name: str) -> Optional[AssertionKind]:
        if name in self.tolerant:
            return AssertionKind.TOLERANT
        if name in self.exact:
            return AssertionKind.EXACT
        return None

    def __contains__(self, name: str) -> bool:
        return (
            name in self.tolerant
            or name in self.exact
            or name in self.directives
            or name in self.parts
        )


@functools.lru_cache(maxsize=None)
def default_vocabulary() -> MarkerVocabulary:
    """The vocabulary configured through the environment (see config)."""
    return MarkerVocabulary(
        tolerant=config.TOLERANT_ASSERTION_NAMES,
        exact=config.EXACT_ASSERTION_NAMES,
        directives=config.DIRECTIVE_NAMES,
        parts=config.PART_NAMES,
    )


def _dotted_name(func: ast.expr) -> Optional[str]:
    if isinstance(func, ast.Name):
        return func.id
    if isinstance(func, ast.Attribute):
        base = _dotted_name(func.value)
        return None if base is None else f"{base}.{func.attr}"
    return None


def source_excerpt(item: UnitItem, contents: Optional[str]) -> str:
    """The statement's text, from the buffer when available."""
    if contents is not None:
        return extract_by_location(contents, item.location)
    return ast.unparse(item.node)


def _literal_payload(
    name: str, call: ast.Call, item: UnitItem, contents: Optional[str]
) -> Optional[str]:
    def malformed(reason: str) -> UnhandledExtensionShape:
        return UnhandledExtensionShape(name, reason, source_excerpt(item, contents))

    if call.keywords:
        raise malformed("keyword arguments are not allowed")
    if len(call.args) > 1:
        raise malformed("expected at most one argument")
    if not call.args:
        return None
    arg = call.args[0]
    if isinstance(arg, ast.Constant) and isinstance(arg.value, str):
        return arg.value
    raise malformed("the argument must be a string literal")


def classify(
    item: UnitItem,
    vocabulary: Optional[MarkerVocabulary] = None,
    contents: Optional[str] = None,
) -> Optional[Marker]:
    """Classify one statement as a marker, or None for ordinary code.

    Args:
        item: The statement and its source range.
        vocabulary: Marker names to recognize. Defaults to the configured
            vocabulary.
        contents: The source buffer, used only to quote the statement in
            error messages.

    Raises:
        ConflictingMarkers: The call name is both an assertion and a directive.
        UnhandledExtensionShape: A marker call has arguments markers reject.
    """
    if vocabulary is None:
        vocabulary = default_vocabulary()

    node = item.node
    if not isinstance(node, ast.Expr) or not isinstance(node.value, ast.Call):
        return None
    call = node.value
    name = _dotted_name(call.func)
    if name is None or name not in vocabulary:
        return None

    kind = vocabulary.assertion_kind(name)
    is_directive = name in vocabulary.directives
    if kind is not None and is_directive:
        raise ConflictingMarkers(source_excerpt(item, contents))

    payload = _literal_payload(name, call, item, contents)
    if kind is not None:
        return AssertionMarker(name=name, kind=kind, payload=payload, location=item.location)
    if is_directive:
        return DirectiveMarker(name=name, text=payload or "", location=item.location)
    if payload is None:
        raise UnhandledExtensionShape(
            name, "a part declaration needs a name", source_excerpt(item, contents)
        )
    return PartMarker(name=name, label=payload, location=item.location)
