"""Build hierarchical memo tree from flat section list."""

from typing import Iterable, Iterator, Optional

from .markdown import segment_memos
from .memo import FlatMemo, Memo, MemoBuilder


def build_memo_tree(sections: list[FlatMemo]) -> list[Memo]:
    """
    Fold flat sections into a forest of memos.

    Keeps a stack of open builders with strictly increasing levels. Each
    incoming section closes every open builder whose level is not lower
    than its own, attaching each closed memo to the builder beneath it
    (or to the roots when the stack empties). Skipped levels are kept as
    they are, so a level-3 heading directly under a level-0 heading
    becomes its direct child.

    Returns a list of root memos in document order.
    """
    roots: list[Memo] = []
    stack: list[MemoBuilder] = []

    def close_top():
        """Pop the innermost builder and attach it to its parent."""
        completed = stack.pop().build()
        if stack:
            stack[-1].add_child(completed)
        else:
            roots.append(completed)

    for section in sections:
        while stack and stack[-1].level >= section.level:
            close_top()
        stack.append(MemoBuilder.from_flat(section))

    while stack:
        close_top()

    return roots


def parse_memo(content: str) -> list[Memo]:
    """Parse a memo document into its memo forest. Never raises."""
    return build_memo_tree(segment_memos(content))


def flatten_tree(memos: list[Memo], depth: int = 0) -> list[tuple[Memo, int]]:
    """
    Flatten tree back to list with indent depth.

    Returns list of (memo, indent_depth) tuples.
    """
    result: list[tuple[Memo, int]] = []
    for memo in memos:
        result.append((memo, depth))
        result.extend(flatten_tree(list(memo.children), depth + 1))
    return result


def iter_memo_paths(
    memos: Iterable[Memo],
    trail: Optional[list[str]] = None,
) -> Iterator[tuple[Memo, list[str]]]:
    """Yield (memo, titles from its root down to itself) in document order."""
    trail = trail or []
    for memo in memos:
        path = trail + [memo.title]
        yield memo, path
        yield from iter_memo_paths(memo.children, path)
