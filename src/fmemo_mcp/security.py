"""Security utilities: sensitive file filtering, path validation."""

import fnmatch
import logging
from pathlib import Path
from typing import Optional

from .errors import MemoFileError

logger = logging.getLogger(__name__)

# Files that should never be served
SKIP_FILES = {
    '.env',
    '.env.local',
    '.env.production',
    'credentials.json',
    'secrets.yaml',
    'secrets.yml',
    '.netrc',
}

# Glob patterns for sensitive files
SENSITIVE_PATTERNS = [
    '*.pem',
    '*.key',
    '*.p12',
    'id_rsa*',
    'id_ed25519*',
]


def is_sensitive_filename(filename: str) -> bool:
    """Check if a filename matches known sensitive file patterns."""
    basename = Path(filename).name
    if basename.lower() in SKIP_FILES:
        return True
    return any(fnmatch.fnmatch(basename, pattern) for pattern in SENSITIVE_PATTERNS)


def validate_path_traversal(resolved_path: Path, base_path: Path) -> bool:
    """Check that a resolved path is within the base directory (no traversal/symlink escape)."""
    try:
        resolved_path.relative_to(base_path)
        return True
    except ValueError:
        return False


def resolve_memo_path(root: Path, relative_path: str) -> Path:
    """
    Resolve a client-supplied path against the served root.

    Raises:
        MemoFileError: if the path escapes the root or names a sensitive file
    """
    base = root.resolve()
    candidate = (base / relative_path).resolve()
    if not validate_path_traversal(candidate, base):
        logger.warning("Path traversal rejected: %s", relative_path)
        raise MemoFileError(
            MemoFileError.KIND_OUTSIDE_ROOT,
            f"Path escapes root directory: {relative_path}",
            relative_path,
        )
    if is_sensitive_filename(relative_path):
        logger.info("Refusing sensitive file: %s", relative_path)
        raise MemoFileError(
            MemoFileError.KIND_SENSITIVE,
            f"Refusing to serve sensitive file: {relative_path}",
            relative_path,
        )
    return candidate


def resolve_served_root(root: Optional[str], served_root: Path) -> Path:
    """
    Pick the directory a request operates on.

    ``root`` may narrow the request to a subdirectory of ``served_root``
    but never widen it.

    Raises:
        MemoFileError: if ``root`` resolves outside ``served_root``
    """
    base = served_root.resolve()
    if not root:
        return base
    candidate = (base / root).resolve()
    if not validate_path_traversal(candidate, base):
        logger.warning("Root override rejected: %s", root)
        raise MemoFileError(
            MemoFileError.KIND_OUTSIDE_ROOT,
            f"Root escapes served directory: {root}",
            root,
        )
    return candidate
