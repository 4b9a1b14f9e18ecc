"""Memo document parsing."""

from .markdown import segment_memos, extract_description
from .hierarchy import build_memo_tree, parse_memo
from .memo import CodeBlock, FlatMemo, Memo, memos_to_dicts

__all__ = [
    "segment_memos",
    "extract_description",
    "build_memo_tree",
    "parse_memo",
    "CodeBlock",
    "FlatMemo",
    "Memo",
    "memos_to_dicts",
]
