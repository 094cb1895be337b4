"""
Session management - the current score of an editor.
"""

from mozart_core.session.manager import TRANSPOSE_KINDS, ScoreSession

__all__ = ["TRANSPOSE_KINDS", "ScoreSession"]
