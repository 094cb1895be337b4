#!/usr/bin/env python3
"""
Async Mozart MCP Server using chuk-mcp-server

This server exposes the Mozart engine as MCP tools so an editor (or any
MCP client) can build a melody, transpose it and export it.

The server provides tools for:
- Creating a score and editing its title, tempo, meter, accents and key
- Adding, removing and listing notes, or writing a melody as text
- Chromatic and diatonic transposition, with optional key change
- Guessing the key of a melody
- Saving/loading .mozart.json files and exporting Standard MIDI Files
"""

import logging
import os
from pathlib import Path

from chuk_mcp_server import ChukMCPServer

from mozart_core.session import ScoreSession
from mozart_core.tools import register_score_tools, register_transpose_tools

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("mozart-core")

# Paths - overridable through the environment (see server.py)
BASE_PATH = Path.cwd()
SCORES_DIR = Path(os.environ.get("MOZART_SCORES_DIR", BASE_PATH / "scores"))
OUTPUT_DIR = Path(os.environ.get("MOZART_OUTPUT_DIR", BASE_PATH / "output"))

# One score per server process
session = ScoreSession(scores_dir=SCORES_DIR, output_dir=OUTPUT_DIR)

# Register all tools
score_tools = register_score_tools(mcp, session)
transpose_tools = register_transpose_tools(mcp, session)

# Export tool functions for direct access
mozart_new_score = score_tools["mozart_new_score"]
mozart_get_score_info = score_tools["mozart_get_score_info"]
mozart_set_title = score_tools["mozart_set_title"]
mozart_set_tempo = score_tools["mozart_set_tempo"]
mozart_set_time_signature = score_tools["mozart_set_time_signature"]
mozart_set_key = score_tools["mozart_set_key"]
mozart_get_accents = score_tools["mozart_get_accents"]
mozart_set_accents = score_tools["mozart_set_accents"]
mozart_cycle_accent = score_tools["mozart_cycle_accent"]
mozart_get_notes = score_tools["mozart_get_notes"]
mozart_add_note = score_tools["mozart_add_note"]
mozart_remove_note = score_tools["mozart_remove_note"]
mozart_clear_notes = score_tools["mozart_clear_notes"]
mozart_parse_melody = score_tools["mozart_parse_melody"]
mozart_get_melody_text = score_tools["mozart_get_melody_text"]
mozart_save_score = score_tools["mozart_save_score"]
mozart_load_score = score_tools["mozart_load_score"]
mozart_get_score_json = score_tools["mozart_get_score_json"]
mozart_load_score_json = score_tools["mozart_load_score_json"]
mozart_export_midi = score_tools["mozart_export_midi"]
mozart_export_yaml = score_tools["mozart_export_yaml"]

mozart_transpose = transpose_tools["mozart_transpose"]
mozart_describe_transposition = transpose_tools["mozart_describe_transposition"]
mozart_detect_scale = transpose_tools["mozart_detect_scale"]
mozart_list_scale_types = transpose_tools["mozart_list_scale_types"]
mozart_get_scale_notes = transpose_tools["mozart_get_scale_notes"]

logger.info("Mozart MCP Server initialized")
logger.info(f"  Scores dir: {SCORES_DIR}")
logger.info(f"  Output dir: {OUTPUT_DIR}")
