"""
Chord tools - MCP tools for parsing, voicing and identifying chords.

Tools for reading chord symbols, listing their pitches and inversions,
naming a set of pitches, and browsing the chord quality catalogues.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_theory.catalogue import CatalogueLoader
from chuk_mcp_theory.constants import DEFAULT_OCTAVE, ErrorMessages
from chuk_mcp_theory.core import Chord, ChordParseError, ChordType, Pitch
from chuk_mcp_theory.models import ChordModel

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def _parse_error(e: ChordParseError) -> str:
    return json.dumps(
        {
            "status": "error",
            "message": str(e),
            "stage": e.stage.value,
            "token": e.token,
        }
    )


def _chord_summary(chord: Chord, octave: int) -> dict[str, Any]:
    return {
        "notation": chord.notation,
        "description": chord.description,
        "inversion": chord.inversion,
        "pitches": [str(p) for p in chord.pitches(octave)],
        "midi": [p.raw_value for p in chord.pitches(octave)],
    }


def register_chord_tools(mcp: ChukMCPServer, catalogue_loader: CatalogueLoader) -> dict[str, Any]:
    """
    Register chord tools with the MCP server.

    Args:
        mcp: The MCP server instance
        catalogue_loader: The chord quality catalogue loader

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def theory_parse_chord(symbol: str) -> str:
        """
        Parse a chord symbol into its parts.

        Accepts symbols like "C", "F#m7(b5)", "E♭9(sus4)(no5)(add6)" or
        "C/E" (slash bass selects the inversion).

        Args:
            symbol: Chord symbol

        Returns:
            JSON string with the chord's structure, notation and intervals

        Example:
            theory_parse_chord(symbol="Dm7")
        """
        try:
            chord = Chord.parse(symbol)
            return json.dumps(
                {
                    "status": "success",
                    "chord": ChordModel.from_core(chord).model_dump(mode="json"),
                    "notation": chord.notation,
                    "description": chord.description,
                    "intervals": [str(i) for i in chord.type.intervals],
                }
            )
        except ChordParseError as e:
            logger.info("Rejected chord symbol %r: %s", symbol, e)
            return _parse_error(e)
        except Exception as e:
            logger.exception("Failed to parse chord")
            return json.dumps({"status": "error", "message": str(e)})

    tools["theory_parse_chord"] = theory_parse_chord

    @mcp.tool  # type: ignore[arg-type]
    async def theory_chord_pitches(symbol: str, octave: int = DEFAULT_OCTAVE) -> str:
        """
        Get the spelled pitches of a chord.

        Args:
            symbol: Chord symbol
            octave: Octave of the root (default 4, where C4 = middle C)

        Returns:
            JSON string with pitch names and MIDI note numbers

        Example:
            theory_chord_pitches(symbol="C13", octave=3)
        """
        try:
            chord = Chord.parse(symbol)
            return json.dumps({"status": "success", **_chord_summary(chord, octave)})
        except ChordParseError as e:
            logger.info("Rejected chord symbol %r: %s", symbol, e)
            return _parse_error(e)
        except Exception as e:
            logger.exception("Failed to get chord pitches")
            return json.dumps({"status": "error", "message": str(e)})

    tools["theory_chord_pitches"] = theory_chord_pitches

    @mcp.tool  # type: ignore[arg-type]
    async def theory_chord_inversions(symbol: str, octave: int = DEFAULT_OCTAVE) -> str:
        """
        List every inversion of a chord.

        Args:
            symbol: Chord symbol
            octave: Octave of the root before inverting

        Returns:
            JSON string with one entry per inversion, root position first

        Example:
            theory_chord_inversions(symbol="C7")
        """
        try:
            chord = Chord.parse(symbol)
            inversions = [_chord_summary(inversion, octave) for inversion in chord.inversions]
            return json.dumps(
                {"status": "success", "inversions": inversions, "count": len(inversions)}
            )
        except ChordParseError as e:
            logger.info("Rejected chord symbol %r: %s", symbol, e)
            return _parse_error(e)
        except Exception as e:
            logger.exception("Failed to list chord inversions")
            return json.dumps({"status": "error", "message": str(e)})

    tools["theory_chord_inversions"] = theory_chord_inversions

    @mcp.tool  # type: ignore[arg-type]
    async def theory_identify_chord(pitches: list[str]) -> str:
        """
        Name the chord formed by a set of pitches.

        The lowest pitch is taken as the root. Intervals above it are matched
        to chord parts and then looked up in the catalogues.

        Args:
            pitches: Pitch names such as ["C4", "E4", "G4", "Bb4"]

        Returns:
            JSON string with the chord notation and matching catalogue names

        Example:
            theory_identify_chord(pitches=["D4", "F4", "A4", "C5"])
        """
        try:
            parsed = sorted(Pitch.parse(p) for p in pitches)
            if not parsed:
                return json.dumps({"status": "error", "message": "No pitches given"})

            root = parsed[0]
            chord_type = ChordType.from_intervals(p - root for p in parsed)
            if chord_type is None:
                return json.dumps(
                    {
                        "status": "error",
                        "message": ErrorMessages.UNIDENTIFIED_CHORD.format(pitches=pitches),
                    }
                )

            chord = Chord(root.key, chord_type)
            matches = catalogue_loader.identify(chord_type)
            return json.dumps(
                {
                    "status": "success",
                    "notation": chord.notation,
                    "description": chord.description,
                    "matches": [
                        {"catalogue": catalogue.name, "name": entry.name, "symbol": entry.symbol}
                        for catalogue, entry in matches
                    ],
                }
            )
        except Exception as e:
            logger.exception("Failed to identify chord")
            return json.dumps({"status": "error", "message": str(e)})

    tools["theory_identify_chord"] = theory_identify_chord

    @mcp.tool  # type: ignore[arg-type]
    async def theory_validate_chord_symbol(symbol: str) -> str:
        """
        Check whether a chord symbol is well formed.

        Args:
            symbol: Chord symbol

        Returns:
            JSON string with valid flag, and the failing stage and token if invalid

        Example:
            theory_validate_chord_symbol(symbol="Dxyz")
        """
        try:
            chord = Chord.parse(symbol)
            return json.dumps({"status": "success", "valid": True, "notation": chord.notation})
        except ChordParseError as e:
            return json.dumps(
                {
                    "status": "success",
                    "valid": False,
                    "message": str(e),
                    "stage": e.stage.value,
                    "token": e.token,
                }
            )
        except Exception as e:
            logger.exception("Failed to validate chord symbol")
            return json.dumps({"status": "error", "message": str(e)})

    tools["theory_validate_chord_symbol"] = theory_validate_chord_symbol

    @mcp.tool  # type: ignore[arg-type]
    async def theory_list_chord_qualities(catalogue: str | None = None) -> str:
        """
        List named chord qualities.

        Args:
            catalogue: Optional catalogue name (e.g., "common", "jazz")

        Returns:
            JSON string with qualities grouped by catalogue

        Example:
            theory_list_chord_qualities(catalogue="jazz")
        """
        try:
            if catalogue:
                found = catalogue_loader.get_catalogue(catalogue)
                if found is None:
                    return json.dumps(
                        {
                            "status": "error",
                            "message": ErrorMessages.CATALOGUE_NOT_FOUND.format(name=catalogue),
                        }
                    )
                catalogues = [found]
            else:
                catalogues = catalogue_loader.list_catalogues()

            return json.dumps(
                {
                    "status": "success",
                    "catalogues": [
                        {
                            "name": c.name,
                            "description": c.description,
                            "qualities": [
                                {
                                    "name": e.name,
                                    "symbol": e.symbol,
                                    "aliases": e.aliases,
                                    "intervals": [str(i) for i in e.to_core().intervals],
                                }
                                for e in c.entries
                            ],
                        }
                        for c in catalogues
                    ],
                    "count": sum(len(c.entries) for c in catalogues),
                }
            )
        except Exception as e:
            logger.exception("Failed to list chord qualities")
            return json.dumps({"status": "error", "message": str(e)})

    tools["theory_list_chord_qualities"] = theory_list_chord_qualities

    return tools
