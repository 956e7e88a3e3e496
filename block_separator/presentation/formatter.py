"""Formatters for block trees, split results and errors."""

from __future__ import annotations

import json
from typing import Any

from block_separator.domain.entities import Block, TextSpan
from block_separator.domain.enums import OutputFormat

PREVIEW_LENGTH = 60


class BlockFormatter:
    """Renders parsed block trees for the CLI and MCP tool responses."""

    def __init__(self, indent: str = "  ") -> None:
        self._indent = indent

    def format(self, block: Block, output_format: OutputFormat = OutputFormat.DEBUG) -> str:
        if output_format == OutputFormat.TREE:
            return self.format_tree(block)
        if output_format == OutputFormat.JSON:
            return self.format_json(block)
        return self.format_debug(block)

    def format_debug(self, block: Block) -> str:
        return repr(block.to_list())

    def format_tree(self, block: Block) -> str:
        lines: list[str] = [_block_label(block)]
        for depth, item in block.walk():
            prefix = self._indent * depth
            if isinstance(item, Block):
                lines.append(prefix + _block_label(item))
            else:
                lines.append(f"{prefix}text [{item.start}:{item.end}] {_preview(item)}")
        return "\n".join(lines)

    def format_json(self, block: Block) -> str:
        return json.dumps(_block_to_dict(block), ensure_ascii=False, indent=2)

    def format_split(self, pieces: list[str]) -> str:
        if not pieces:
            return "No pieces.\n"
        return "\n".join(f"{i}: {piece!r}" for i, piece in enumerate(pieces, 1))

    def format_error(self, exception: Exception) -> str:
        return f"Error: {exception}\n"


def _block_label(block: Block) -> str:
    if block.is_root:
        return f"root [{block.start}:{block.end}] ({len(block)} items)"
    return f"block {block.open_marker}{block.close_marker} [{block.start}:{block.end}] ({len(block)} items)"


def _preview(span: TextSpan) -> str:
    text = span.text
    if len(text) > PREVIEW_LENGTH:
        return repr(text[:PREVIEW_LENGTH]) + "..."
    return repr(text)


def _block_to_dict(block: Block) -> dict[str, Any]:
    content: list[dict[str, Any]] = []
    for item in block.content:
        if isinstance(item, Block):
            content.append(_block_to_dict(item))
        else:
            content.append(
                {"type": "text", "start": item.start, "end": item.end, "text": item.text}
            )
    return {
        "type": "block",
        "open": block.open_marker,
        "close": block.close_marker,
        "start": block.start,
        "end": block.end,
        "content": content,
    }
