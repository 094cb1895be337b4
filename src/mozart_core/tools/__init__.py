"""
MCP tool implementations.

Tools are organized by domain:
- score - Score lifecycle, settings, accents, notes, files, export
- transpose - Transposition, scale detection, scale lookup
"""

from mozart_core.tools.score import register_score_tools
from mozart_core.tools.transpose import register_transpose_tools

__all__ = [
    "register_score_tools",
    "register_transpose_tools",
]
