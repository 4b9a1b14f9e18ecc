"""Tool to get the heading outline of a memo file."""

from typing import Optional

from ..config import Settings
from ..errors import MemoFileError
from ..parser import Memo
from ..parser.hierarchy import flatten_tree
from .get_file import load_memo_file


def _memo_to_outline(memo: Memo) -> dict:
    return {
        "title": memo.title,
        "level": memo.level,
        "description": memo.description,
        "code_block_count": len(memo.code_blocks),
        "children": [_memo_to_outline(child) for child in memo.children],
    }


def get_outline(
    file_path: str,
    root: Optional[str] = None,
    max_level: Optional[int] = None,
    settings: Optional[Settings] = None,
) -> dict:
    """
    Get the hierarchical outline of a single file.

    Titles, levels and descriptions only; bodies and code are left out.

    Args:
        file_path: Path of the file relative to the root
        root: Subdirectory of the served root to resolve against (defaults to FMEMO_ROOT)
        max_level: Only list memos with level <= this value in ``entries``
        settings: Settings override (defaults to environment)

    Returns:
        Dict with nested outline and an indented flat listing
    """
    try:
        _, content = load_memo_file(file_path, root, settings)
    except MemoFileError as e:
        return e.to_dict()

    entries = [
        {"title": memo.title, "level": memo.level, "indent": indent}
        for memo, indent in flatten_tree(content.memos)
        if max_level is None or memo.level <= max_level
    ]

    return {
        "file": file_path,
        "outline": [_memo_to_outline(memo) for memo in content.memos],
        "entries": entries,
        "last_modified": content.last_modified,
    }
