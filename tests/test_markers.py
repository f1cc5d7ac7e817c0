"""Unit tests for marker recognition.

WHY: Both the chunk splitter and the reconstruction engine trust
classify() completely. A statement misread as a marker (or a marker
missed) silently changes what a test checks.

HOW: Tests cover each marker kind, payload shapes, malformed marker
calls, the assertion/directive conflict, and vocabulary validation.

RULES:
- Statements are parsed with ``ast`` and wrapped in a UnitItem spanning
  the whole snippet, so excerpts equal the snippet text.
"""

import ast
import logging

import pytest

from toplevel_expect.core.errors import ConflictingMarkers, UnhandledExtensionShape
from toplevel_expect.core.ir import (
    AssertionKind,
    AssertionMarker,
    DirectiveMarker,
    Location,
    PartMarker,
    UnitItem,
)
from toplevel_expect.core.markers import MarkerVocabulary, classify


def _item(code):
    return UnitItem(ast.parse(code).body[0], Location(0, len(code)))


class TestAssertionMarkers:
    """expect / expect_exact calls become AssertionMarkers."""

    def test_tolerant(self, vocabulary):
        marker = classify(_item('expect("2")'), vocabulary)
        assert marker == AssertionMarker(
            name="expect",
            kind=AssertionKind.TOLERANT,
            payload="2",
            location=Location(0, 11),
        )

    def test_exact(self, vocabulary):
        marker = classify(_item('expect_exact("2 ")'), vocabulary)
        assert isinstance(marker, AssertionMarker)
        assert marker.kind is AssertionKind.EXACT
        assert marker.payload == "2 "

    def test_placeholder_has_no_payload(self, vocabulary):
        marker = classify(_item("expect()"), vocabulary)
        assert isinstance(marker, AssertionMarker)
        assert marker.payload is None

    def test_triple_quoted_payload(self, vocabulary):
        marker = classify(_item('expect("""\nline\n""")'), vocabulary)
        assert marker.payload == "\nline\n"

    def test_dotted_name(self, vocabulary_with):
        vocabulary = vocabulary_with(tolerant={"tt.expect"})
        marker = classify(_item('tt.expect("x")'), vocabulary)
        assert isinstance(marker, AssertionMarker)
        assert marker.name == "tt.expect"


class TestDirectiveAndPartMarkers:
    """org and part calls carry a literal string."""

    def test_directive(self, vocabulary):
        marker = classify(_item('org("hello")'), vocabulary)
        assert marker == DirectiveMarker(name="org", text="hello", location=Location(0, 12))

    def test_bare_directive_reads_empty(self, vocabulary):
        marker = classify(_item("org()"), vocabulary)
        assert isinstance(marker, DirectiveMarker)
        assert marker.text == ""

    def test_part(self, vocabulary):
        marker = classify(_item('part("foo")'), vocabulary)
        assert marker == PartMarker(name="part", label="foo", location=Location(0, 11))

    def test_part_requires_a_name(self, vocabulary):
        with pytest.raises(UnhandledExtensionShape) as exc_info:
            classify(_item("part()"), vocabulary)
        assert exc_info.value.name == "part"


class TestOrdinaryCode:
    """Anything that is not a vocabulary call is ordinary code."""

    @pytest.mark.parametrize("code", [
        "x = 1",
        'print("expect")',
        "expect",
        'f()("x")',
        'x = expect("1")',
        "def expect():\n    pass",
        '"""Module docstring."""',
    ])
    def test_not_a_marker(self, vocabulary, code):
        assert classify(_item(code), vocabulary) is None

    def test_unknown_attribute_call(self, vocabulary):
        assert classify(_item('tt.expect("x")'), vocabulary) is None


class TestMalformedMarkers:
    """Marker calls with unexpected arguments are rejected, not ignored."""

    @pytest.mark.parametrize("code", [
        'expect("x", strict=True)',
        'expect("x", "y")',
        "expect(42)",
        'expect(f"{x}")',
        "expect(*args)",
        "org(text)",
        "part(1)",
    ])
    def test_rejected(self, vocabulary, code):
        with pytest.raises(UnhandledExtensionShape) as exc_info:
            classify(_item(code), vocabulary, contents=code)
        assert exc_info.value.source_excerpt == code


class TestConflictingMarkers:
    """A name that is both an assertion and a directive fails on use."""

    def test_conflict_quotes_source(self, vocabulary_with):
        vocabulary = vocabulary_with(directives={"org", "expect"})
        code = 'expect("x")'
        with pytest.raises(ConflictingMarkers) as exc_info:
            classify(_item(code), vocabulary, contents=code)
        assert exc_info.value.source_excerpt == code

    def test_conflict_without_contents_unparses(self, vocabulary_with):
        vocabulary = vocabulary_with(directives={"org", "expect"})
        with pytest.raises(ConflictingMarkers) as exc_info:
            classify(_item('expect("x")'), vocabulary)
        assert exc_info.value.source_excerpt == "expect('x')"

    def test_non_conflicting_names_still_work(self, vocabulary_with):
        vocabulary = vocabulary_with(directives={"org", "expect"})
        assert isinstance(classify(_item('org("x")'), vocabulary), DirectiveMarker)


class TestVocabularyValidation:

    def test_tolerant_and_exact_overlap(self):
        with pytest.raises(ValueError):
            MarkerVocabulary(
                tolerant=frozenset({"expect"}),
                exact=frozenset({"expect"}),
                directives=frozenset({"org"}),
                parts=frozenset({"part"}),
            )

    def test_part_name_reused(self):
        with pytest.raises(ValueError):
            MarkerVocabulary(
                tolerant=frozenset({"expect"}),
                exact=frozenset({"expect_exact"}),
                directives=frozenset({"part"}),
                parts=frozenset({"part"}),
            )

    def test_ambiguous_names_warn(self, caplog):
        with caplog.at_level(logging.WARNING, logger="toplevel_expect.core.markers"):
            MarkerVocabulary(
                tolerant=frozenset({"expect"}),
                exact=frozenset({"expect_exact"}),
                directives=frozenset({"expect"}),
                parts=frozenset({"part"}),
            )
        assert "expect" in caplog.text
