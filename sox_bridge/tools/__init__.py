"""Tool implementations for sox-bridge."""
