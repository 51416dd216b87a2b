#!/usr/bin/env python3
"""
Async Music Theory MCP Server using chuk-mcp-server

This server provides MCP tools for working with chord symbols, intervals
and correctly spelled pitches.

The server provides tools for:
- Parsing chord symbols into structured chord types
- Voicing chords and listing their inversions
- Identifying chords from a set of pitches
- Measuring intervals and transposing pitches
- Browsing chord quality catalogues
"""

import logging
import os
from pathlib import Path

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_theory.catalogue import CatalogueLoader
from chuk_mcp_theory.constants import CATALOGUES_DIR_NAME, CATALOGUES_ENV_VAR
from chuk_mcp_theory.tools import register_chord_tools, register_interval_tools

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-mcp-theory")

# Paths - project catalogues default to ./catalogues, overridable from the environment
CATALOGUES_DIR = Path(os.environ.get(CATALOGUES_ENV_VAR, Path.cwd() / CATALOGUES_DIR_NAME))
CATALOGUE_LIBRARY_PATH = Path(__file__).parent / "catalogue" / "library"

catalogue_loader = CatalogueLoader(
    library_path=CATALOGUE_LIBRARY_PATH,
    project_path=CATALOGUES_DIR,
)

# Register all tools
chord_tools = register_chord_tools(mcp, catalogue_loader)
interval_tools = register_interval_tools(mcp)

# Export tool functions for direct access
theory_parse_chord = chord_tools["theory_parse_chord"]
theory_chord_pitches = chord_tools["theory_chord_pitches"]
theory_chord_inversions = chord_tools["theory_chord_inversions"]
theory_identify_chord = chord_tools["theory_identify_chord"]
theory_validate_chord_symbol = chord_tools["theory_validate_chord_symbol"]
theory_list_chord_qualities = chord_tools["theory_list_chord_qualities"]

theory_interval_between = interval_tools["theory_interval_between"]
theory_transpose = interval_tools["theory_transpose"]

logger.info("CHUK Theory MCP Server initialized")
logger.info(f"  Catalogue library: {CATALOGUE_LIBRARY_PATH}")
logger.info(f"  Project catalogues: {CATALOGUES_DIR}")
