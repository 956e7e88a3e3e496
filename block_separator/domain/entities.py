"""Block tree entities produced by the separator."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Union


@dataclass(frozen=True)
class TextSpan:
    """A run of plain text, kept as offsets into the original source.

    The span holds a reference to the source string and slices it on demand,
    so building the tree never copies input text.
    """

    source: str = field(repr=False, compare=False)
    start: int
    end: int

    @property
    def text(self) -> str:
        return self.source[self.start:self.end]

    def __len__(self) -> int:
        return self.end - self.start

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class Block:
    """Ordered text spans and nested blocks.

    The root block returned by the separator has no markers and spans the
    whole input. An inner block spans from its open marker up to and including
    its close marker.
    """

    content: tuple[BlockContent, ...] = ()
    open_marker: str | None = None
    close_marker: str | None = None
    start: int = 0
    end: int = 0

    def __iter__(self) -> Iterator[BlockContent]:
        return iter(self.content)

    def __len__(self) -> int:
        return len(self.content)

    def __getitem__(self, index: int) -> BlockContent:
        return self.content[index]

    @property
    def is_root(self) -> bool:
        return self.open_marker is None

    def texts(self) -> list[TextSpan]:
        return [item for item in self.content if isinstance(item, TextSpan)]

    def inner_blocks(self) -> list[Block]:
        return [item for item in self.content if isinstance(item, Block)]

    def walk(self) -> Iterator[tuple[int, BlockContent]]:
        """Yield ``(depth, item)`` for every descendant in source order.

        Direct children have depth 1.
        """
        stack: list[tuple[int, Iterator[BlockContent]]] = [(1, iter(self.content))]
        while stack:
            depth, items = stack[-1]
            item = next(items, None)
            if item is None:
                stack.pop()
                continue
            yield depth, item
            if isinstance(item, Block):
                stack.append((depth + 1, iter(item.content)))

    def depth(self) -> int:
        """Deepest nesting level of inner blocks below this block."""
        return max((d for d, item in self.walk() if isinstance(item, Block)), default=0)

    def reconstruct(self) -> str:
        """Rebuild the source text covered by this block, markers included."""
        parts: list[str] = []
        if self.open_marker is not None:
            parts.append(self.open_marker)
        stack: list[tuple[Block, Iterator[BlockContent]]] = [(self, iter(self.content))]
        while stack:
            block, items = stack[-1]
            item = next(items, None)
            if item is None:
                stack.pop()
                if block.close_marker is not None:
                    parts.append(block.close_marker)
            elif isinstance(item, Block):
                if item.open_marker is not None:
                    parts.append(item.open_marker)
                stack.append((item, iter(item.content)))
            else:
                parts.append(item.text)
        return "".join(parts)

    def to_list(self) -> list:
        """Nested lists of strings, e.g. ``["X", ["Y ", ["Z"], " W"]]``."""
        return [
            item.to_list() if isinstance(item, Block) else item.text
            for item in self.content
        ]


BlockContent = Union[TextSpan, Block]
