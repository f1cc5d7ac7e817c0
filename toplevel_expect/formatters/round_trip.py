"""Round-trip printer: blocks back to expect-file source, plus a diff.

WHY: The strongest check on reconstruction is printing the blocks back
as source and diffing against the original file. Anything lost,
duplicated, or reordered shows up as a hunk.

HOW: Code blocks are emitted verbatim. Directive and assertion blocks are
wrapped in a marker call whose argument is a triple-quoted literal when
that reads back to the same text, and ``repr()`` otherwise.
diff_round_trip() produces a unified diff with difflib.

RULES:
- Directives print as an ``org(...)`` call and assertions as an
  ``expect(...)`` call, both with a triple-quoted argument (call names
  from config)
- Part declarations and placeholder assertions are not in the blocks, so
  they are absent from the printed source
- An empty diff means the file round-trips exactly
"""

from __future__ import annotations

import difflib
from typing import List, Optional

from toplevel_expect import config
from toplevel_expect.core.ir import Block, BlockKind
from toplevel_expect.formatters.base import BaseFormatter, FormatterOutput


def quote_literal(text: str) -> str:
    """Quote ``text`` as a Python string literal, preferring triple quotes."""
    if '"""' in text or "\\" in text or "\r" in text or text.endswith('"'):
        return repr(text)
    return f'"""{text}"""'


class RoundTripFormatter(BaseFormatter):
    """Prints blocks as expect-file source."""

    def __init__(
        self,
        directive_name: Optional[str] = None,
        assertion_name: Optional[str] = None,
    ) -> None:
        self.directive_name = directive_name or config.PRINT_DIRECTIVE_NAME
        self.assertion_name = assertion_name or config.PRINT_ASSERTION_NAME

    @property
    def name(self) -> str:
        return "Round-trip source"

    def render_block(self, block: Block) -> str:
        if block.kind is BlockKind.DIRECTIVE:
            return f"{self.directive_name}({quote_literal(block.text)})"
        if block.kind is BlockKind.ASSERTION:
            return f"{self.assertion_name}({quote_literal(block.text)})"
        return block.text

    def format(self, blocks: List[Block]) -> FormatterOutput:
        return FormatterOutput(
            suffix="-roundtrip.py",
            content="".join(self.render_block(block) for block in blocks),
            media_type="text/x-python",
        )


def diff_round_trip(original: str, rendered: str, source_name: Optional[str] = None) -> str:
    """Unified diff from ``original`` to ``rendered``; empty when identical."""
    if source_name is None:
        source_name = config.DEFAULT_SOURCE_NAME
    return "".join(difflib.unified_diff(
        original.splitlines(keepends=True),
        rendered.splitlines(keepends=True),
        fromfile=source_name,
        tofile=f"{source_name} (round trip)",
    ))
