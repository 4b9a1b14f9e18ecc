"""Memo tree data model."""

from dataclasses import dataclass, field
from typing import Iterator, Optional


def level_from_heading(marker_count: int) -> int:
    """Convert a run of leading '#' characters into a zero-indexed level."""
    return marker_count - 1


@dataclass(frozen=True)
class CodeBlock:
    """A fenced code block attached to a memo."""
    language: str
    code: str

    def to_dict(self) -> dict:
        return {"language": self.language, "code": self.code}


@dataclass(frozen=True)
class FlatMemo:
    """A heading section before it is placed in the tree."""
    level: int
    title: str
    description: Optional[str]
    content: str
    code_blocks: tuple[CodeBlock, ...] = ()


@dataclass(frozen=True)
class Memo:
    """A node in the memo tree.

    Children always have a strictly greater level than their parent, but
    not necessarily ``level + 1``.
    """
    level: int
    title: str
    description: Optional[str] = None
    content: str = ""
    code_blocks: tuple[CodeBlock, ...] = ()
    children: tuple["Memo", ...] = ()

    def walk(self) -> Iterator["Memo"]:
        """Yield this memo and all descendants in document order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def to_dict(self) -> dict:
        return {
            "level": self.level,
            "title": self.title,
            "description": self.description,
            "content": self.content,
            "code_blocks": [block.to_dict() for block in self.code_blocks],
            "children": [child.to_dict() for child in self.children],
        }


@dataclass
class MemoBuilder:
    """Mutable accumulator for a memo while its tree position is open."""
    level: int
    title: str
    description: Optional[str] = None
    content: str = ""
    code_blocks: list[CodeBlock] = field(default_factory=list)
    children: list[Memo] = field(default_factory=list)

    @classmethod
    def from_flat(cls, flat: FlatMemo) -> "MemoBuilder":
        return cls(
            level=flat.level,
            title=flat.title,
            description=flat.description,
            content=flat.content,
            code_blocks=list(flat.code_blocks),
        )

    def add_child(self, child: Memo) -> None:
        self.children.append(child)

    def build(self) -> Memo:
        return Memo(
            level=self.level,
            title=self.title,
            description=self.description,
            content=self.content,
            code_blocks=tuple(self.code_blocks),
            children=tuple(self.children),
        )


def memos_to_dicts(memos: list[Memo]) -> list[dict]:
    """Serialize a memo forest to plain JSON-compatible dicts."""
    return [memo.to_dict() for memo in memos]
