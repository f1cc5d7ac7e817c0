"""JSON export of reconstructed blocks for editor and CI tooling.

WHY: Tools outside Python (editor plugins, review bots) want the block
partition without re-implementing marker recognition. A small, schema
checked JSON document is the simplest contract.

HOW: Each block becomes ``{kind, text, start, end}`` with the offsets of
the source range it stands for. The document is validated against
blocks_schema.json before it is returned.

RULES:
- Blocks keep their source order
- ``kind`` is "directive", "assertion", or "code"
- Output is validated with jsonschema; invalid output raises
- Output suffix: "-blocks.json", media type "application/json"
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Optional

import jsonschema

from toplevel_expect import config
from toplevel_expect.core.ir import Block
from toplevel_expect.formatters.base import BaseFormatter, FormatterOutput

SCHEMA_PATH = Path(__file__).resolve().parent / "blocks_schema.json"

_CACHED_SCHEMA: Optional[dict] = None


def get_schema() -> dict:
    """Load and cache the blocks JSON schema."""
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def block_to_dict(block: Block) -> dict[str, Any]:
    return {
        "kind": block.kind.value,
        "text": block.text,
        "start": block.location.start,
        "end": block.location.end,
    }


class JsonBlocksFormatter(BaseFormatter):
    """Exports blocks as a schema-validated JSON document."""

    def __init__(self, source_name: Optional[str] = None) -> None:
        self.source_name = source_name or config.DEFAULT_SOURCE_NAME

    @property
    def name(self) -> str:
        return "Blocks JSON"

    def format(self, blocks: List[Block]) -> FormatterOutput:
        """Serialize the blocks.

        Raises:
            jsonschema.ValidationError: If the document does not conform
                to blocks_schema.json.
        """
        output_dict: dict[str, Any] = {
            "source": self.source_name,
            "blocks": [block_to_dict(block) for block in blocks],
        }
        jsonschema.validate(instance=output_dict, schema=get_schema())
        return FormatterOutput(
            suffix="-blocks.json",
            content=json.dumps(output_dict, indent=2, ensure_ascii=False),
            media_type="application/json",
        )
