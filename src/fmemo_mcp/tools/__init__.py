"""MCP tool implementations."""

from .parse_text import parse_text
from .get_tree import get_tree
from .get_file import get_file
from .get_outline import get_outline
from .search_memos import search_memos

__all__ = ["parse_text", "get_tree", "get_file", "get_outline", "search_memos"]
