#!/usr/bin/env python3
"""
Entry point for the CHUK Theory MCP Server.

This module provides the main entry point for the MCP server,
supporting multiple transport modes (stdio, http) and an optional
project catalogue directory.
"""

import argparse
import asyncio
import logging
import os

from chuk_mcp_theory.constants import CATALOGUES_ENV_VAR

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main() -> None:
    """Main entry point with transport detection."""
    parser = argparse.ArgumentParser(description="CHUK Theory MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "http"],
        default="stdio",
        help="Transport mode (default: stdio)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="HTTP port (only for http transport)",
    )
    parser.add_argument(
        "--catalogues",
        help="Project chord catalogue directory (default: ./catalogues)",
    )
    parser.add_argument(
        "--list-catalogues",
        action="store_true",
        help="Print the available chord catalogues and exit",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)
    if args.catalogues:
        os.environ[CATALOGUES_ENV_VAR] = args.catalogues

    # Tools register on import, after the catalogue directory is known
    from chuk_mcp_theory.async_server import catalogue_loader, mcp

    if args.list_catalogues:
        for catalogue in catalogue_loader.list_catalogues():
            print(f"{catalogue.name}: {len(catalogue.entries)} qualities - {catalogue.description}")
        return

    if args.transport == "stdio":
        logger.info("Starting CHUK Theory MCP Server (stdio)")
        asyncio.run(mcp.run_stdio())
    else:
        logger.info(f"Starting CHUK Theory MCP Server (http:{args.port})")
        asyncio.run(mcp.run_http(port=args.port))


if __name__ == "__main__":
    main()
