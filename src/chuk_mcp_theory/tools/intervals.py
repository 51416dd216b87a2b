"""
Interval tools - MCP tools for measuring and transposing by intervals.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_theory.constants import TransposeDirection
from chuk_mcp_theory.core import Interval, Pitch
from chuk_mcp_theory.models import IntervalModel

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_interval_tools(mcp: ChukMCPServer) -> dict[str, Any]:
    """
    Register interval tools with the MCP server.

    Args:
        mcp: The MCP server instance

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def theory_interval_between(first: str, second: str) -> str:
        """
        Measure the interval between two pitches.

        Order does not matter; the interval is measured up from the lower
        pitch and named by letter distance, so C4-D#4 is an augmented
        second while C4-Eb4 is a minor third.

        Args:
            first: Pitch name such as "C4"
            second: Pitch name such as "Eb4"

        Returns:
            JSON string with the interval's name, quality, degree and semitones

        Example:
            theory_interval_between(first="C4", second="G4")
        """
        try:
            interval = Pitch.parse(first).interval_to(Pitch.parse(second))
            return json.dumps(
                {
                    "status": "success",
                    "interval": interval.abbreviation,
                    "description": interval.description,
                    **IntervalModel.from_core(interval).model_dump(mode="json"),
                }
            )
        except Exception as e:
            logger.exception("Failed to measure interval")
            return json.dumps({"status": "error", "message": str(e)})

    tools["theory_interval_between"] = theory_interval_between

    @mcp.tool  # type: ignore[arg-type]
    async def theory_transpose(
        pitch: str,
        interval: str,
        direction: TransposeDirection = "up",
    ) -> str:
        """
        Transpose a pitch by an interval, keeping correct spelling.

        Args:
            pitch: Pitch name such as "C4"
            interval: Interval abbreviation such as "M3", "P5", "A4" or "m9"
            direction: "up" or "down"

        Returns:
            JSON string with the transposed pitch

        Example:
            theory_transpose(pitch="F#4", interval="M3")
        """
        try:
            result = Pitch.parse(pitch).transposed(Interval.parse(interval), direction)
            return json.dumps(
                {
                    "status": "success",
                    "pitch": str(result),
                    "midi": result.raw_value,
                    "frequency": round(result.frequency, 3),
                }
            )
        except Exception as e:
            logger.exception("Failed to transpose pitch")
            return json.dumps({"status": "error", "message": str(e)})

    tools["theory_transpose"] = theory_transpose

    return tools
