#!/usr/bin/env python3
"""
Command-line entry point for the Mozart MCP Server.

Storage locations come from --scores-dir / --output-dir, falling back to
the MOZART_SCORES_DIR / MOZART_OUTPUT_DIR environment variables and then
to ./scores and ./output. The server module reads them at import time,
so they are settled before it is imported.
"""

import argparse
import asyncio
import logging
import os
from collections.abc import MutableMapping, Sequence
from pathlib import Path

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

SCORES_DIR_ENV = "MOZART_SCORES_DIR"
OUTPUT_DIR_ENV = "MOZART_OUTPUT_DIR"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mozart-core",
        description="Mozart MCP Server - score editing, transposition and MIDI export",
    )
    parser.add_argument("--transport", choices=["stdio", "http"], default="stdio")
    parser.add_argument("--port", type=int, default=8000, help="HTTP port (http transport)")
    parser.add_argument("--scores-dir", type=Path, help=f"Score directory (env {SCORES_DIR_ENV})")
    parser.add_argument("--output-dir", type=Path, help=f"Export directory (env {OUTPUT_DIR_ENV})")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def resolve_storage(
    args: argparse.Namespace,
    environ: MutableMapping[str, str] | None = None,
) -> tuple[Path, Path]:
    """
    Settle the scores and output directories and publish them to the environment.

    Command-line values win over existing environment values.
    """
    env = os.environ if environ is None else environ
    if args.scores_dir is not None:
        env[SCORES_DIR_ENV] = str(args.scores_dir)
    if args.output_dir is not None:
        env[OUTPUT_DIR_ENV] = str(args.output_dir)

    scores_dir = Path(env.get(SCORES_DIR_ENV, Path.cwd() / "scores"))
    output_dir = Path(env.get(OUTPUT_DIR_ENV, Path.cwd() / "output"))
    return scores_dir, output_dir


def main(argv: Sequence[str] | None = None) -> None:
    """Parse arguments, configure storage and run the chosen transport."""
    args = build_parser().parse_args(argv)

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    scores_dir, output_dir = resolve_storage(args)
    logger.debug("Storage: scores=%s output=%s", scores_dir, output_dir)

    from mozart_core.async_server import mcp

    if args.transport == "stdio":
        logger.info("Starting Mozart MCP Server (stdio)")
        asyncio.run(mcp.run_stdio())
    else:
        logger.info(f"Starting Mozart MCP Server (http:{args.port})")
        asyncio.run(mcp.run_http(port=args.port))


if __name__ == "__main__":
    main()
