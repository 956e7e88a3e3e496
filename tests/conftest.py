"""Shared test fixtures for block_separator tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from block_separator.config import ParserConfig
from block_separator.domain.services import BlockSeparationService
from block_separator.domain.value_objects import DelimiterTable
from block_separator.presentation.formatter import BlockFormatter


@pytest.fixture
def braces_and_parens() -> DelimiterTable:
    return DelimiterTable.parse("{} ()")


@pytest.fixture
def sample_sources() -> list[str]:
    return [
        "",
        "plain text without markers",
        "A;{B} C() {D}",
        "X{Y {Z} W}",
        "{}",
        "{A}{B}",
        '"use strict";{dawha} export function dadwa() {\ndhadwajd;\n}',
        "function f(a) {\n  if (a) { return {x: 1}; }\n}\n",
    ]


@pytest.fixture
def parser_config() -> ParserConfig:
    return ParserConfig()


@pytest.fixture
def service(parser_config: ParserConfig) -> BlockSeparationService:
    return BlockSeparationService(parser_config)


@pytest.fixture
def formatter() -> BlockFormatter:
    return BlockFormatter()


@pytest.fixture
def write_source(tmp_path: Path) -> Callable[..., Path]:
    def _write(content: str, name: str = "source.txt", encoding: str = "utf-8") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding=encoding)
        return path

    return _write
