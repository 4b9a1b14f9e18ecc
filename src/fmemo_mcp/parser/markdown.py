"""Segment memo documents into flat heading sections."""

from typing import Optional

from .memo import CodeBlock, FlatMemo, level_from_heading

FENCE_MARKER = "```"
DESC_OPEN = "<desc>"
DESC_CLOSE = "</desc>"


def split_lines(text: str) -> list[str]:
    """Split text on newlines, treating CRLF the same as LF."""
    return text.replace('\r\n', '\n').split('\n')


def is_fence_line(line: str) -> bool:
    return line.lstrip().startswith(FENCE_MARKER)


def _trim_blank_lines(lines: list[str]) -> str:
    """Join code lines, dropping blank lines at either end."""
    start = 0
    end = len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return '\n'.join(lines[start:end])


def extract_description(raw_body: str) -> tuple[str, Optional[str]]:
    """
    Pull the first <desc>...</desc> tag out of a section body.

    An opening tag with no closing tag after it is left in place as
    literal text. Tags after the first well-formed one are not touched.

    Returns:
        Tuple of (trimmed content, description or None)
    """
    start = raw_body.find(DESC_OPEN)
    if start == -1:
        return raw_body.strip(), None

    inner_start = start + len(DESC_OPEN)
    end = raw_body.find(DESC_CLOSE, inner_start)
    if end == -1:
        return raw_body.strip(), None

    description = raw_body[inner_start:end]
    content = raw_body[:start] + raw_body[end + len(DESC_CLOSE):]
    return content.strip(), description


def segment_memos(content: str) -> list[FlatMemo]:
    """
    Split a memo document into flat sections, one per heading.

    A heading is any line starting with '#' outside a code fence; its
    level is the number of leading '#' minus one. Fences toggle on lines
    whose left-trimmed text starts with three backticks, and everything
    inside them is kept verbatim as a code block of the enclosing section.

    Text and fences that appear before the first heading have no owning
    section and are dropped, as is a fence still open at end of input.
    """
    sections: list[FlatMemo] = []

    current_header: Optional[tuple[int, str]] = None  # (level, title)
    current_body: list[str] = []
    current_blocks: list[CodeBlock] = []

    in_fence = False
    fence_language = ""
    fence_lines: list[str] = []

    def finalize_section():
        """Turn the open heading and its accumulated body into a FlatMemo."""
        nonlocal current_body, current_blocks

        if current_header is None:
            return
        level, title = current_header
        body, description = extract_description(''.join(current_body))
        sections.append(FlatMemo(
            level=level,
            title=title,
            description=description,
            content=body,
            code_blocks=tuple(current_blocks),
        ))
        current_body = []
        current_blocks = []

    for line in split_lines(content):
        if is_fence_line(line):
            if in_fence:
                # No heading yet means nothing can own the block
                if current_header is not None:
                    current_blocks.append(CodeBlock(
                        language=fence_language,
                        code=_trim_blank_lines(fence_lines),
                    ))
                fence_lines = []
                fence_language = ""
                in_fence = False
            else:
                fence_language = line.lstrip()[len(FENCE_MARKER):]
                in_fence = True
        elif in_fence:
            fence_lines.append(line)
        elif line.startswith('#'):
            finalize_section()

            marker_count = len(line) - len(line.lstrip('#'))
            title = line[marker_count:].strip()
            current_header = (level_from_heading(marker_count), title)
        elif current_header is not None:
            current_body.append(line + '\n')

    finalize_section()

    return sections
