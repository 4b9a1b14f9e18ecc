"""Tool to read and parse a single memo file."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..config import Settings
from ..errors import MemoFileError
from ..parser import Memo, memos_to_dicts, parse_memo
from ..security import resolve_memo_path, resolve_served_root

logger = logging.getLogger(__name__)


@dataclass
class FileContent:
    """Parsed memos of one file, with its modification time."""
    memos: list[Memo]
    last_modified: Optional[int]

    def to_dict(self) -> dict:
        return {
            "memos": memos_to_dicts(self.memos),
            "last_modified": self.last_modified,
        }


def read_memo_file(file_path: Path, settings: Optional[Settings] = None) -> FileContent:
    """
    Read a memo file from disk and parse it.

    Args:
        file_path: Absolute path to the file
        settings: Settings override (for accepted extensions)

    Returns:
        FileContent with the memo forest and mtime in whole seconds

    Raises:
        MemoFileError: for a wrong extension, a missing file, or a read failure
    """
    settings = settings or Settings.from_env()
    path = Path(file_path)

    if not settings.accepts(path):
        raise MemoFileError(
            MemoFileError.KIND_INVALID_EXTENSION,
            f"File must have one of these extensions: {', '.join(settings.extensions)}",
            str(path),
        )
    if not path.is_file():
        raise MemoFileError(MemoFileError.KIND_NOT_FOUND, f"File not found: {path}", str(path))

    try:
        content = path.read_text(encoding='utf-8', errors='replace')
        last_modified: Optional[int] = int(path.stat().st_mtime)
    except OSError as e:
        raise MemoFileError(
            MemoFileError.KIND_UNREADABLE, f"Could not read file: {e}", str(path)
        ) from e

    return FileContent(memos=parse_memo(content), last_modified=last_modified)


def load_memo_file(
    file_path: str,
    root: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> tuple[Path, FileContent]:
    """Resolve ``file_path`` under the root, then read and parse it."""
    settings = settings or Settings.from_env()
    base = resolve_served_root(root, settings.root)
    full_path = resolve_memo_path(base, file_path)
    return full_path, read_memo_file(full_path, settings)


def get_file(
    file_path: str,
    root: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> dict:
    """
    Get the parsed memo tree of a file.

    Args:
        file_path: Path of the file relative to the root (e.g. 'notes/todo.fmemo')
        root: Subdirectory of the served root to resolve against (defaults to FMEMO_ROOT)
        settings: Settings override (defaults to environment)

    Returns:
        Dict with the memo forest and last-modified time, or an error dict
    """
    try:
        _, content = load_memo_file(file_path, root, settings)
    except MemoFileError as e:
        logger.debug("get_file failed for %s: %s", file_path, e)
        return e.to_dict()

    result = content.to_dict()
    result["file"] = file_path
    result["memo_count"] = sum(1 for memo in content.memos for _ in memo.walk())
    return result
