"""Block separator: splits text into nested blocks by delimiter pairs.

The scan is a single left-to-right pass. Open blocks are kept on an explicit
stack of frames rather than on the Python call stack, so nesting depth is not
limited by the interpreter recursion limit.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache

from block_separator.domain.entities import Block, BlockContent, TextSpan
from block_separator.domain.exceptions import (
    MismatchedDelimiterException,
    NestingTooDeepException,
    UnterminatedBlockException,
)
from block_separator.domain.value_objects import DEFAULT_DELIMITERS, DelimiterTable


@dataclass
class _Frame:
    """An open block waiting for its close marker."""
    open_marker: str
    close_marker: str
    open_position: int
    flush_start: int
    content: list[BlockContent] = field(default_factory=list)

    def flush(self, source: str, position: int) -> None:
        if self.flush_start < position:
            self.content.append(TextSpan(source, self.flush_start, position))

    def close(self, source: str, position: int) -> Block:
        self.flush(source, position)
        return Block(
            content=tuple(self.content),
            open_marker=self.open_marker,
            close_marker=self.close_marker,
            start=self.open_position,
            end=position + 1,
        )


@lru_cache(maxsize=64)
def _marker_pattern(delimiters: DelimiterTable, extra: str = "") -> re.Pattern[str]:
    markers = {pair.open for pair in delimiters} | delimiters.close_markers | set(extra)
    if not markers:
        return re.compile(r"(?!)")
    return re.compile("[" + "".join(re.escape(m) for m in sorted(markers)) + "]")


def separate(
    source: str,
    delimiters: DelimiterTable = DEFAULT_DELIMITERS,
    *,
    strict: bool = False,
    max_depth: int | None = None,
) -> Block:
    """Split ``source`` into a root block of text spans and nested blocks.

    Raises:
        UnterminatedBlockException: an open marker is never closed.
        MismatchedDelimiterException: ``strict`` is set and a close marker
            does not belong to the innermost open block.
        NestingTooDeepException: nesting exceeds ``max_depth``.
    """
    opens = delimiters.open_lookup()
    closes = delimiters.close_markers
    pattern = _marker_pattern(delimiters)
    length = len(source)

    content: list[BlockContent] = []
    flush_start = 0
    position = 0

    while True:
        match = pattern.search(source, position)
        if match is None:
            break
        position = match.start()
        char = match.group()

        pair = opens.get(char)
        if pair is not None:
            if flush_start < position:
                content.append(TextSpan(source, flush_start, position))
            block, position = encapsulate(
                source,
                position + 1,
                pair.close,
                delimiters,
                strict=strict,
                max_depth=max_depth,
            )
            content.append(block)
            flush_start = position
            continue

        if strict and char in closes:
            raise MismatchedDelimiterException(char, None, position)
        position += 1

    if flush_start < length:
        content.append(TextSpan(source, flush_start, length))

    return Block(content=tuple(content), start=0, end=length)


def encapsulate(
    source: str,
    cursor: int,
    close_marker: str,
    delimiters: DelimiterTable = DEFAULT_DELIMITERS,
    *,
    strict: bool = False,
    max_depth: int | None = None,
    depth: int = 1,
) -> tuple[Block, int]:
    """Consume one block whose open marker sits at ``cursor - 1``.

    Returns the completed block and the position just past its close marker.
    ``depth`` is the nesting level of this block (1 for a block opened at the
    top level) and only matters when ``max_depth`` is set.
    """
    if not 0 < cursor <= len(source):
        raise ValueError(f"Cursor {cursor} is not just past an open marker")

    opens = delimiters.open_lookup()
    closes = delimiters.close_markers
    pattern = _marker_pattern(delimiters, close_marker)

    if max_depth is not None and depth > max_depth:
        raise NestingTooDeepException(max_depth, cursor - 1)

    stack = [_Frame(source[cursor - 1], close_marker, cursor - 1, cursor)]
    position = cursor

    while True:
        match = pattern.search(source, position)
        if match is None:
            innermost = stack[-1]
            raise UnterminatedBlockException(
                innermost.open_marker, innermost.close_marker, innermost.open_position
            )
        position = match.start()
        char = match.group()
        frame = stack[-1]

        if char == frame.close_marker:
            block = frame.close(source, position)
            stack.pop()
            position += 1
            if not stack:
                return block, position
            parent = stack[-1]
            parent.content.append(block)
            parent.flush_start = position
            continue

        pair = opens.get(char)
        if pair is not None:
            if max_depth is not None and depth + len(stack) > max_depth:
                raise NestingTooDeepException(max_depth, position)
            frame.flush(source, position)
            stack.append(_Frame(pair.open, pair.close, position, position + 1))
            position += 1
            continue

        if strict and char in closes:
            raise MismatchedDelimiterException(char, frame.close_marker, position)
        position += 1
