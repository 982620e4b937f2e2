#!/usr/bin/env python3
"""Sox Bridge - sox audio editing exposed as an MCP server.

Tools run the sox command-line sound editor as a subprocess:
- Length inspection (sox stat)
- Trimming and fading into derived output files
- Mixing and concatenating multiple files

The sox binary must already be installed in the configured bin directory.
"""

from mcp.server.fastmcp import FastMCP

from ..utils.logging_utils import setup_logging
from .config import VERSION, get_log_level
from .tools import register_all_tools

# Server version (should match pyproject.toml)
__version__ = VERSION

# Create MCP server
mcp = FastMCP("Sox Bridge")

register_all_tools(mcp)


# ============================================================================
# Server Entry Point
# ============================================================================


def main():
    """Run the MCP server."""
    setup_logging(get_log_level())
    mcp.run()


if __name__ == "__main__":
    main()
