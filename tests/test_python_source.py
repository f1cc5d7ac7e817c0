"""Unit tests for the Python source adapter.

WHY: Every range the core works with comes from this adapter. A wrong
offset shifts every following block, and the mistake only shows up as
a garbled round trip.

HOW: Tests cover offset conversion (including non-ASCII text, where
``ast`` byte columns differ from ``str`` offsets), decorated
definitions, multi-line statements, ``;``-joined phrases, and errors.
"""

import ast

import pytest

from toplevel_expect.adapters.python_source import parse_units
from toplevel_expect.core.ir import Location
from toplevel_expect.core.source import LineIndex, extract_by_location


class TestStatementRanges:

    def test_one_unit_per_line(self):
        units = parse_units("x = 1\ny = 2\n")
        assert [u.location for u in units] == [Location(0, 5), Location(6, 11)]
        assert all(len(u.items) == 1 for u in units)

    def test_empty_source(self):
        assert parse_units("") == []
        assert parse_units("# only a comment\n") == []

    def test_multi_line_string(self):
        contents = 'x = """a\nb"""\ny = 1\n'
        units = parse_units(contents)
        assert units[0].location == Location(0, 13)
        assert units[1].location == Location(14, 19)

    def test_compound_statement_excludes_trailing_comment(self):
        contents = "if x:\n    y = 1  # note\n"
        (unit,) = parse_units(contents)
        assert extract_by_location(contents, unit.location) == "if x:\n    y = 1"

    def test_non_ascii(self):
        contents = 's = "héllo"\nt = 1\n'
        units = parse_units(contents)
        assert units[0].location == Location(0, 11)
        assert units[1].location == Location(12, 17)


class TestDecorators:
    """Decorated definitions start at their first ``@``."""

    def test_function(self):
        contents = "# c\n@dec\ndef f():\n    pass\n"
        (unit,) = parse_units(contents)
        assert unit.location == Location(4, len(contents) - 1)

    def test_class_with_spaced_decorator(self):
        contents = "@ deco(1)\n@other\nclass C:\n    pass\n"
        (unit,) = parse_units(contents)
        assert unit.location.start == 0


class TestSemicolonPhrases:
    """Statements joined by ``;`` on one line form a single unit."""

    def test_joined(self):
        contents = 'a = "é"; b = 1\n'
        (unit,) = parse_units(contents)
        assert unit.location == Location(0, 14)
        assert [item.location for item in unit.items] == [Location(0, 7), Location(9, 14)]

    def test_semicolon_at_line_end_does_not_join(self):
        units = parse_units("a = 1;\nb = 2\n")
        assert len(units) == 2

    def test_items_keep_their_nodes(self):
        (unit,) = parse_units("a = 1; print(a)\n")
        assert [ast.unparse(item.node) for item in unit.items] == ["a = 1", "print(a)"]


class TestLineEndings:
    """Old Mac and Windows line endings count as line breaks."""

    def test_carriage_return_only(self):
        contents = "a = 1\rb = 2\r"
        units = parse_units(contents)
        assert [u.location for u in units] == [Location(0, 5), Location(6, 11)]

    def test_mixed_endings(self):
        contents = "a = 1\r\nb = 2\rc = '\u00e9'\nd = 4\n"
        units = parse_units(contents)
        assert [u.location for u in units] == [
            Location(0, 5),
            Location(7, 12),
            Location(13, 20),
            Location(21, 26),
        ]
        assert extract_by_location(contents, units[2].location) == "c = '\u00e9'"


class TestErrors:

    def test_syntax_error_propagates(self):
        with pytest.raises(SyntaxError):
            parse_units("def (:\n", "broken.py")


class TestLineIndex:

    def test_offset_converts_byte_columns(self):
        index = LineIndex("é = 1\nx = 'ü'; y = 2\n")
        # "x = 'ü'; " is 10 bytes but 9 code points
        assert index.offset(2, 10) == 6 + 9

    def test_lone_carriage_return_starts_a_line(self):
        index = LineIndex("a\rbc\r\nd\ne")
        assert index.line_text(2) == "bc"
        assert index.offset(3, 0) == 6
        assert index.offset(4, 0) == 8

    def test_extract_out_of_bounds(self):
        with pytest.raises(ValueError):
            extract_by_location("abc", Location(0, 4))
