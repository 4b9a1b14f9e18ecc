"""Memo tree parser and MCP server for heading-structured notes."""

__version__ = "0.1.0"
