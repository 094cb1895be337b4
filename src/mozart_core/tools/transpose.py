"""
Transposition tools - MCP tools for transposing and key analysis.

Tools for chromatic and diatonic transposition of the current score,
scale detection and scale lookup.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from mozart_core.constants import SuccessMessages
from mozart_core.core.pitch import PitchClass
from mozart_core.core.scale import Scale, ScaleType
from mozart_core.session import ScoreSession
from mozart_core.transpose import detect_scale

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_transpose_tools(
    mcp: ChukMCPServer,
    session: ScoreSession,
) -> dict[str, Any]:
    """
    Register transposition and theory tools with the MCP server.

    Args:
        mcp: The MCP server instance
        session: The score session the tools act on

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def mozart_transpose(
        kind: str,
        semitones: int = 0,
        degrees: int = 0,
        target_root: str | None = None,
        target_scale_type: str | None = None,
    ) -> str:
        """
        Transpose every note in the score.

        Kinds:
        - chromatic: shift by semitones
        - diatonic: move by scale degrees within the current key
        - diatonic_key_change: move by degrees and land in a new key

        Diatonic kinds set the key to the target scale. If any note would
        leave the MIDI range nothing is changed.

        Args:
            kind: 'chromatic', 'diatonic' or 'diatonic_key_change'
            semitones: Semitones to move (chromatic)
            degrees: Scale degrees to move (diatonic kinds)
            target_root: New key root, e.g. 'G' (diatonic_key_change)
            target_scale_type: New key scale, e.g. 'major' (diatonic_key_change)

        Returns:
            JSON string with a description and the new key

        Example:
            mozart_transpose(kind="diatonic", degrees=2)
        """
        try:
            mode = session.transpose(kind, semitones, degrees, target_root, target_scale_type)
            description = mode.describe()
            return json.dumps(
                {
                    "status": "success",
                    "message": SuccessMessages.TRANSPOSED.format(
                        count=len(session.score.notes), description=description
                    ),
                    "description": description,
                    "key": str(session.score.settings.key),
                    "melody": session.melody_text(),
                }
            )
        except Exception as e:
            logger.exception("Failed to transpose")
            return json.dumps({"status": "error", "message": str(e)})

    tools["mozart_transpose"] = mozart_transpose

    @mcp.tool  # type: ignore[arg-type]
    async def mozart_describe_transposition(
        kind: str,
        semitones: int = 0,
        degrees: int = 0,
        target_root: str | None = None,
        target_scale_type: str | None = None,
    ) -> str:
        """
        Describe a transposition without applying it.

        Takes the same arguments as mozart_transpose.

        Returns:
            JSON string with the description, e.g. "up a major 3rd"
        """
        try:
            description = session.transposition_description(
                kind, semitones, degrees, target_root, target_scale_type
            )
            return json.dumps({"status": "success", "description": description})
        except Exception as e:
            logger.exception("Failed to describe transposition")
            return json.dumps({"status": "error", "message": str(e)})

    tools["mozart_describe_transposition"] = mozart_describe_transposition

    @mcp.tool  # type: ignore[arg-type]
    async def mozart_detect_scale() -> str:
        """
        Guess the key of the current melody.

        Only major and natural minor keys are considered. Keys containing
        every pitch of the melody win, then keys whose root is the last note,
        then minor over major.

        Returns:
            JSON string with the detected key, or null for an empty score
        """
        try:
            scale = detect_scale(session.score.notes)
            if scale is None:
                return json.dumps({"status": "success", "scale": None})
            return json.dumps(
                {
                    "status": "success",
                    "scale": str(scale),
                    "root": str(scale.root),
                    "scale_type": scale.scale_type.value,
                    "current_key": str(session.score.settings.key),
                }
            )
        except Exception as e:
            logger.exception("Failed to detect scale")
            return json.dumps({"status": "error", "message": str(e)})

    tools["mozart_detect_scale"] = mozart_detect_scale

    @mcp.tool  # type: ignore[arg-type]
    async def mozart_list_scale_types() -> str:
        """
        List the supported scale types and pitch classes.

        Returns:
            JSON string with scale type names and the twelve pitch classes
        """
        try:
            return json.dumps(
                {
                    "status": "success",
                    "scale_types": [
                        {"name": st.value, "display_name": st.display_name}
                        for st in ScaleType.all()
                    ],
                    "pitch_classes": [str(pc) for pc in PitchClass.all()],
                }
            )
        except Exception as e:
            logger.exception("Failed to list scale types")
            return json.dumps({"status": "error", "message": str(e)})

    tools["mozart_list_scale_types"] = mozart_list_scale_types

    @mcp.tool  # type: ignore[arg-type]
    async def mozart_get_scale_notes(root: str, scale_type: str = "major") -> str:
        """
        Get the seven pitch classes of a scale.

        Args:
            root: Root pitch class (e.g. 'A')
            scale_type: Scale name (e.g. 'minor')

        Returns:
            JSON string with the scale's pitch classes in degree order

        Example:
            mozart_get_scale_notes(root="A", scale_type="harmonic_minor")
        """
        try:
            scale = Scale(PitchClass.parse(root), ScaleType.parse(scale_type))
            return json.dumps(
                {
                    "status": "success",
                    "scale": str(scale),
                    "notes": [str(pc) for pc in scale.pitch_classes()],
                }
            )
        except Exception as e:
            logger.exception("Failed to get scale notes")
            return json.dumps({"status": "error", "message": str(e)})

    tools["mozart_get_scale_notes"] = mozart_get_scale_notes

    return tools
