"""Shared utilities: logging setup and the sox process layer."""
