"""Tool to scan the served root for memo files."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import pathspec

from ..config import Settings
from ..errors import MemoFileError
from ..security import is_sensitive_filename, resolve_served_root, validate_path_traversal

logger = logging.getLogger(__name__)

# Directories to skip during scanning
SKIP_DIRS = {
    'node_modules',
    '__pycache__',
    'venv',
    'env',
    'dist',
    'build',
    'target',
}


@dataclass
class DirectoryTree:
    """Memo files in one directory plus the subdirectories that hold any."""
    path: str
    files: list[str] = field(default_factory=list)
    subdirectories: list["DirectoryTree"] = field(default_factory=list)

    def has_memo_files(self) -> bool:
        return bool(self.files) or any(d.has_memo_files() for d in self.subdirectories)

    def file_paths(self) -> list[str]:
        """All memo files in the tree as root-relative POSIX paths."""
        prefix = "" if self.path == "." else f"{self.path}/"
        result = [f"{prefix}{name}" for name in self.files]
        for subdir in self.subdirectories:
            result.extend(subdir.file_paths())
        return result

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "files": list(self.files),
            "subdirectories": [d.to_dict() for d in self.subdirectories],
        }


def _load_gitignore_spec(base_path: Path) -> Optional[pathspec.GitIgnoreSpec]:
    """Load .gitignore patterns from the base path if available."""
    gitignore_path = base_path / '.gitignore'
    if not gitignore_path.is_file():
        return None
    try:
        with open(gitignore_path, 'r', encoding='utf-8') as f:
            return pathspec.GitIgnoreSpec.from_lines(f)
    except OSError as e:
        logger.warning("Could not read %s: %s", gitignore_path, e)
        return None


def scan_directory(
    root: Path,
    settings: Optional[Settings] = None,
) -> DirectoryTree:
    """
    Build the tree of memo files under ``root``.

    Hidden directories, well-known build directories and gitignored paths
    are skipped, and subdirectories without any memo files (at any depth)
    are left out of the result.

    Raises:
        MemoFileError: if ``root`` is not an existing directory
    """
    settings = settings or Settings.from_env()
    base = Path(root).resolve()
    if not base.is_dir():
        raise MemoFileError(
            MemoFileError.KIND_NOT_A_DIRECTORY,
            f"Path is not a directory: {root}",
            str(root),
        )

    gitignore_spec = _load_gitignore_spec(base)

    def is_gitignored(rel_path: str) -> bool:
        return bool(gitignore_spec and gitignore_spec.match_file(rel_path))

    def should_skip_dir(item: Path) -> bool:
        name = item.name
        if name in SKIP_DIRS:
            return True
        if not settings.include_hidden and name.startswith('.'):
            return True
        return is_gitignored(item.relative_to(base).as_posix() + '/')

    def scan(current: Path, depth: int) -> DirectoryTree:
        rel = current.relative_to(base).as_posix()
        tree = DirectoryTree(path=rel)

        try:
            entries = sorted(current.iterdir(), key=lambda p: p.name)
        except OSError as e:
            logger.warning("Cannot read directory %s: %s", current, e)
            return tree

        for item in entries:
            try:
                if item.is_symlink():
                    if not settings.follow_symlinks:
                        logger.debug("Skipping symlink: %s", item)
                        continue
                    if not validate_path_traversal(item.resolve(), base):
                        logger.warning("Symlink escapes root directory, skipping: %s", item)
                        continue

                if item.is_file():
                    if not settings.accepts(item):
                        continue
                    rel_file = item.relative_to(base).as_posix()
                    if is_sensitive_filename(rel_file):
                        logger.info("Skipping sensitive file: %s", rel_file)
                        continue
                    if is_gitignored(rel_file):
                        logger.debug("Skipping gitignored file: %s", rel_file)
                        continue
                    tree.files.append(item.name)

                elif item.is_dir():
                    if depth >= settings.max_depth or should_skip_dir(item):
                        continue
                    subtree = scan(item, depth + 1)
                    if subtree.has_memo_files():
                        tree.subdirectories.append(subtree)
            except OSError:
                continue

        return tree

    return scan(base, 0)


def get_tree(
    root: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> dict:
    """
    Get the directory tree of memo files.

    Args:
        root: Subdirectory of the served root to scan (defaults to FMEMO_ROOT)
        settings: Settings override (defaults to environment)

    Returns:
        Dict with nested tree and a flat file list
    """
    settings = settings or Settings.from_env()
    try:
        base = resolve_served_root(root, settings.root)
        tree = scan_directory(base, settings)
    except MemoFileError as e:
        return e.to_dict()

    files = tree.file_paths()
    return {
        "root": str(base),
        "file_count": len(files),
        "files": files,
        "tree": tree.to_dict(),
    }
