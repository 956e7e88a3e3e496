"""Domain service: BlockSeparationService."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Iterable

from block_separator.infrastructure.parser.separator import separate
from block_separator.infrastructure.parser.splitter import split_by_delimiters
from block_separator.infrastructure.source.loader import SourceLoader

from .entities import Block
from .exceptions import BlockParseException, InvalidDelimiterTableException
from .value_objects import DelimiterTable

if TYPE_CHECKING:
    from block_separator.config import ParserConfig

logger = logging.getLogger(__name__)


class BlockSeparationService:
    def __init__(self, config: ParserConfig, loader: SourceLoader | None = None) -> None:
        self._config = config
        self._loader = loader or SourceLoader()
        self._delimiters = DelimiterTable.parse(config.delimiters)

    @property
    def delimiters(self) -> DelimiterTable:
        return self._delimiters

    def separate_text(
        self,
        text: str,
        delimiters: DelimiterTable | str | Iterable[str] | None = None,
    ) -> Block:
        table = self._resolve_delimiters(delimiters)
        try:
            block = separate(
                text,
                table,
                strict=self._config.strict,
                max_depth=self._config.max_depth,
            )
        except BlockParseException as exc:
            logger.warning("Block separation failed: %s", exc)
            raise

        # depth() walks the whole tree
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Separated %d characters into %d top-level items (%d blocks, depth %d) using '%s'",
                len(text),
                len(block),
                len(block.inner_blocks()),
                block.depth(),
                table,
            )
        return block

    def separate_file(
        self,
        path: Path | str,
        delimiters: DelimiterTable | str | Iterable[str] | None = None,
    ) -> Block:
        text = self._loader.load(path)
        return self.separate_text(text, delimiters)

    def split_text(self, text: str, separators: Iterable[str]) -> list[str]:
        separator_set = set(separators)
        if not separator_set:
            raise InvalidDelimiterTableException("Separator set cannot be empty")
        pieces = split_by_delimiters(text, separator_set)
        logger.debug("Split %d characters into %d pieces", len(text), len(pieces))
        return pieces

    def split_file(self, path: Path | str, separators: Iterable[str]) -> list[str]:
        text = self._loader.load(path)
        return self.split_text(text, separators)

    def _resolve_delimiters(
        self, delimiters: DelimiterTable | str | Iterable[str] | None
    ) -> DelimiterTable:
        if delimiters is None:
            return self._delimiters
        if isinstance(delimiters, DelimiterTable):
            return delimiters
        return DelimiterTable.parse(delimiters)
