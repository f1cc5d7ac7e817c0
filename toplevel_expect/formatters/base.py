"""Abstract base formatter and output container.

WHY: Every printer consumes the same Block list but produces different
content (source text for round-tripping, JSON for tooling). This base
class enforces a consistent interface so callers can work with any
formatter generically.

HOW: BaseFormatter is an ABC with two requirements, a ``name`` property
and a ``format()`` method. FormatterOutput is a plain dataclass that
bundles a file suffix with its content and MIME type.

RULES:
- Subclasses MUST implement ``name`` (human-readable) and ``format()``
- ``suffix`` starts with a hyphen, e.g. ``"-blocks.json"``
- The caller is responsible for prepending the source filename stem
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

from toplevel_expect.core.ir import Block


@dataclass
class FormatterOutput:
    """One output file produced by a formatter.

    Attributes:
        suffix: File suffix appended to the source stem,
                e.g. ``"-blocks.json"`` → ``"intro-blocks.json"``.
        content: The file content.
        media_type: MIME type for the content, e.g. ``"application/json"``.
    """

    suffix: str
    content: str
    media_type: str


class BaseFormatter(ABC):
    """Abstract base for all block printers.

    To add a new output format:
    1. Create a new file in formatters/
    2. Subclass BaseFormatter
    3. Implement format() and name
    4. Register in FORMATTERS dict in formatters/__init__.py
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable format name, e.g. 'Round-trip source'."""

    @abstractmethod
    def format(self, blocks: List[Block]) -> FormatterOutput:
        """Render the blocks of one reconstructed file.

        Args:
            blocks: Blocks in source order, as returned by ``reconstruct``.

        Returns:
            The rendered file.
        """
