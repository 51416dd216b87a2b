"""
MCP tool implementations.

Tools are organized by domain:
- chords - Chord symbol parsing, voicing and identification
- intervals - Interval measurement and transposition
"""

from chuk_mcp_theory.tools.chords import register_chord_tools
from chuk_mcp_theory.tools.intervals import register_interval_tools

__all__ = [
    "register_chord_tools",
    "register_interval_tools",
]
