"""Shared test fixtures for the toplevel_expect test suite.

WHY: Most test modules need the same marker vocabulary, a way to build
units with hand-picked ranges (to exercise overlap and zero-width cases
the real parser never produces), and one realistic expect file.

HOW: Pytest fixtures provide an explicit vocabulary, a unit factory, and
the sample file text. SAMPLE_SOURCE mirrors a typical expect file: a
title directive, comments the parser drops, a part declaration, a
decorated definition, and a tolerant expectation with trailing spaces.

RULES:
- The explicit vocabulary matches the configured defaults, so tests do
  not depend on the environment.
- Synthetic units always carry a parseable statement as payload.
"""

import ast

import pytest

from toplevel_expect.core.ir import Location, Unit
from toplevel_expect.core.markers import MarkerVocabulary


SAMPLE_SOURCE = '''org("""
* Title
** Subtitle""")

# Comment before
part("foo")
@decorator
def f(x):
    # inner comment
    return x + 1  # trailing


# Toplevel comment
print(f(1))
expect("""
some output.
 Not the real thing.
 """)

# Trailing comment
'''


def make_vocabulary(**overrides):
    names = {
        "tolerant": frozenset({"expect"}),
        "exact": frozenset({"expect_exact"}),
        "directives": frozenset({"org"}),
        "parts": frozenset({"part"}),
    }
    names.update({key: frozenset(value) for key, value in overrides.items()})
    return MarkerVocabulary(**names)


@pytest.fixture
def vocabulary():
    """The default marker vocabulary, independent of the environment."""
    return make_vocabulary()


@pytest.fixture
def make_unit():
    """Factory for single-statement units with an arbitrary range."""

    def _make_unit(code, start, end):
        node = ast.parse(code).body[0]
        return Unit.single(node, Location(start, end))

    return _make_unit


@pytest.fixture
def sample_source():
    return SAMPLE_SOURCE


@pytest.fixture
def vocabulary_with():
    """Factory for vocabularies that override some of the default names."""
    return make_vocabulary
