"""Tool to parse memo text supplied directly by the caller."""

from ..parser import memos_to_dicts, parse_memo


def parse_text(text: str) -> dict:
    """
    Parse a memo document held in memory.

    Returns:
        Dict with the memo forest; never an error
    """
    memos = parse_memo(text)
    return {
        "memo_count": sum(1 for memo in memos for _ in memo.walk()),
        "memos": memos_to_dicts(memos),
    }
