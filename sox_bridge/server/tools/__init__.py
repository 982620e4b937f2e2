"""MCP tool modules for the sox-bridge server.

- audio: sox-backed length, trim, fade, mix and concatenate tools
"""

from .audio import register_audio_tools


def register_all_tools(mcp):
    """Register all tool modules with the MCP server."""
    register_audio_tools(mcp)


__all__ = ["register_all_tools"]
