"""Adapters converting external representations into the core IR.

WHY: The core only knows Units with ``str`` offsets. Parsers with other
position conventions need a small, testable bridge.

HOW: python_source wraps ``ast.parse``.
"""

from toplevel_expect.adapters.python_source import parse_units

__all__ = ["parse_units"]
