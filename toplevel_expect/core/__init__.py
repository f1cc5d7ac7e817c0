"""Core partitioning modules.

WHY: The core package contains the stable heart of the project: the IR
dataclasses, the marker recognizer, and the two single-pass consumers of
the unit stream (chunk splitter and span reconstruction engine).

HOW: ir.py defines the data structures, markers.py classifies units,
chunks.py builds (code, assertion) chunks, spans.py and reconstruct.py
classify the whole buffer into blocks.

RULES:
- IR dataclasses are the contract; change with care
- The core is parser-agnostic beyond ``ast.stmt`` payloads
- Every function is pure: no I/O, no shared state
"""
