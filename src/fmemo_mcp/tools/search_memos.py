"""Tool to search memos across the served root."""

import logging
from typing import Optional

from ..config import Settings
from ..errors import MemoFileError
from ..parser import Memo
from ..parser.hierarchy import iter_memo_paths
from ..security import resolve_served_root
from .get_file import read_memo_file
from .get_tree import scan_directory

logger = logging.getLogger(__name__)


def score_memo(memo: Memo, query: str) -> int:
    """Score a memo against a query by title, description and body matches."""
    query_lower = query.lower()
    query_words = set(query_lower.split())
    score = 0

    title_lower = memo.title.lower()
    if query_lower in title_lower:
        score += 10
    for word in query_words:
        if word in title_lower:
            score += 3

    description_lower = (memo.description or "").lower()
    if query_lower in description_lower:
        score += 5
    for word in query_words:
        if word in description_lower:
            score += 2

    content_lower = memo.content.lower()
    for word in query_words:
        if word in content_lower:
            score += 1

    return score


def search_memos(
    query: str,
    root: Optional[str] = None,
    max_results: int = 10,
    settings: Optional[Settings] = None,
) -> dict:
    """
    Search every memo file under the root for matching memos.

    Args:
        query: Search query (matches titles, descriptions, content)
        root: Subdirectory of the served root to search (defaults to FMEMO_ROOT)
        max_results: Maximum number of results to return (negative counts as 0)
        settings: Settings override (defaults to environment)

    Returns:
        Dict with matching memos (titles and paths, no bodies)
    """
    settings = settings or Settings.from_env()
    if not query.strip():
        return {"error": "Query must not be empty"}

    try:
        base = resolve_served_root(root, settings.root)
        tree = scan_directory(base, settings)
    except MemoFileError as e:
        return e.to_dict()

    scored: list[tuple[int, dict]] = []
    for rel_path in tree.file_paths():
        try:
            content = read_memo_file(base / rel_path, settings)
        except MemoFileError as e:
            logger.debug("Skipping %s during search: %s", rel_path, e)
            continue

        for memo, title_path in iter_memo_paths(content.memos):
            score = score_memo(memo, query)
            if score <= 0:
                continue
            scored.append((score, {
                "file": rel_path,
                "title": memo.title,
                "level": memo.level,
                "description": memo.description,
                "path": title_path,
                "score": score,
            }))

    # Sort by score descending; stable, so ties keep file/document order
    scored.sort(key=lambda x: -x[0])
    results = [entry for _, entry in scored[:max(max_results, 0)]]

    return {
        "root": str(base),
        "query": query,
        "result_count": len(results),
        "results": results,
    }
