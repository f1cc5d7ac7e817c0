"""Configuration constants, marker vocabulary names, and .env loading.

WHY: Projects name their markers differently (``expect`` vs ``check``,
``org`` vs ``doc``). Keeping the names as plain data in one place lets
both humans and tooling change them without touching recognition logic.

HOW: python-dotenv loads the .env file on import. Each marker kind reads
a comma-separated list of names from the environment, falling back to
the defaults below. parse_name_list() gives a clear error on empty input.

RULES:
- Every marker kind has at least one name
- Names may be dotted (``tt.expect``) to match attribute calls
- All defaults can be overridden via environment variables
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the working directory
load_dotenv()


def parse_name_list(value: str) -> frozenset[str]:
    """Split a comma-separated list of marker names.

    RULES:
    - Whitespace around names is ignored, empty entries are dropped
    - Raises ValueError if no name remains
    """
    names = frozenset(part.strip() for part in value.split(",") if part.strip())
    if not names:
        raise ValueError(f"Expected at least one marker name, got {value!r}")
    return names


# ---------------------------------------------------------------------------
# Marker vocabulary
# ---------------------------------------------------------------------------

TOLERANT_ASSERTION_NAMES = parse_name_list(
    os.getenv("TOPLEVEL_EXPECT_TOLERANT_NAMES", "expect")
)
EXACT_ASSERTION_NAMES = parse_name_list(
    os.getenv("TOPLEVEL_EXPECT_EXACT_NAMES", "expect_exact")
)
DIRECTIVE_NAMES = parse_name_list(os.getenv("TOPLEVEL_EXPECT_DIRECTIVE_NAMES", "org"))
PART_NAMES = parse_name_list(os.getenv("TOPLEVEL_EXPECT_PART_NAMES", "part"))

# ---------------------------------------------------------------------------
# Defaults for callers that do not name their source
# ---------------------------------------------------------------------------

DEFAULT_SOURCE_NAME = os.getenv("TOPLEVEL_EXPECT_SOURCE_NAME", "<toplevel>")
"""Name used in diagnostics when the caller gives none."""

# ---------------------------------------------------------------------------
# Round-trip printing
# ---------------------------------------------------------------------------

PRINT_DIRECTIVE_NAME = os.getenv("TOPLEVEL_EXPECT_PRINT_DIRECTIVE", "org")
PRINT_ASSERTION_NAME = os.getenv("TOPLEVEL_EXPECT_PRINT_ASSERTION", "expect")
"""Call names used when printing blocks back to source."""
