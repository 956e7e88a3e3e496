"""FastMCP server with block separation tools."""

from __future__ import annotations

import logging

from block_separator.config import AppConfig
from block_separator.domain.enums import OutputFormat
from block_separator.domain.exceptions import DomainException
from block_separator.domain.services import BlockSeparationService
from block_separator.infrastructure.source.loader import SourceLoader
from block_separator.presentation.formatter import BlockFormatter

logger = logging.getLogger(__name__)


def create_server(config: AppConfig):
    """Create and configure the MCP server.

    Args:
        config: Application configuration (YAML + env + CLI merged).
    """
    from fastmcp import FastMCP

    mcp = FastMCP("block-separator")

    loader = SourceLoader(encoding=config.source.encoding)
    service = BlockSeparationService(config.parser, loader)
    formatter = BlockFormatter()

    def _resolve_format(format: str | None) -> OutputFormat:
        effective = format or config.output.format
        output_format = OutputFormat.from_string(effective)
        if output_format is None:
            valid = ", ".join(f.value for f in OutputFormat)
            raise ValueError(f"Invalid output format: '{effective}'. Use: {valid}")
        return output_format

    @mcp.tool()
    def separate_blocks(
        text: str,
        delimiters: str | None = None,
        format: str | None = None,
    ) -> str:
        """Split text into nested blocks by matched delimiter pairs.

        Args:
            text: Text to separate
            delimiters: Space-separated open/close pairs, e.g. '{} ()' (default from config)
            format: Output format: 'debug', 'tree' or 'json' (default from config)
        """
        try:
            output_format = _resolve_format(format)
            block = service.separate_text(text, delimiters)
            return formatter.format(block, output_format)
        except (DomainException, ValueError) as e:
            return formatter.format_error(e)

    @mcp.tool()
    def separate_file(
        path: str,
        delimiters: str | None = None,
        format: str | None = None,
    ) -> str:
        """Read a text file and split it into nested blocks.

        Args:
            path: Path to the file on the server machine
            delimiters: Space-separated open/close pairs, e.g. '{} ()' (default from config)
            format: Output format: 'debug', 'tree' or 'json' (default from config)
        """
        try:
            output_format = _resolve_format(format)
            block = service.separate_file(path, delimiters)
            return formatter.format(block, output_format)
        except (DomainException, ValueError) as e:
            return formatter.format_error(e)

    @mcp.tool()
    def split_text(text: str, separators: str) -> str:
        """Split text on any of the given single characters. No nesting.

        Args:
            text: Text to split
            separators: Characters to split on, e.g. ' ,;'
        """
        try:
            pieces = service.split_text(text, separators)
            return formatter.format_split(pieces)
        except DomainException as e:
            return formatter.format_error(e)

    logger.info("MCP server ready with delimiters '%s'", service.delimiters)
    return mcp
