"""Block formatter registry.

WHY: Callers need a single lookup to find a printer by name. A central
dict makes adding formats trivial: create the class, import it here,
add one line.

HOW: FORMATTERS maps string keys to formatter *classes* (not instances).
Callers instantiate as needed: ``formatter = FORMATTERS["round_trip"]()``.

RULES:
- Keys are snake_case identifiers
- Values are BaseFormatter subclasses (not instances)
- Every formatter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from toplevel_expect.formatters.json_blocks import JsonBlocksFormatter
from toplevel_expect.formatters.round_trip import RoundTripFormatter

if TYPE_CHECKING:
    from toplevel_expect.formatters.base import BaseFormatter

FORMATTERS: dict[str, type[BaseFormatter]] = {
    "round_trip": RoundTripFormatter,
    "json_blocks": JsonBlocksFormatter,
}
