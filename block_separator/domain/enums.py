"""Output format enumeration."""

from __future__ import annotations

from enum import Enum


class OutputFormat(Enum):
    DEBUG = "debug"
    TREE = "tree"
    JSON = "json"

    @classmethod
    def from_string(cls, format_str: str) -> OutputFormat | None:
        return _STRING_MAPPING.get(format_str.strip().lower())


_STRING_MAPPING: dict[str, OutputFormat] = {
    "debug": OutputFormat.DEBUG,
    "list": OutputFormat.DEBUG,
    "tree": OutputFormat.TREE,
    "outline": OutputFormat.TREE,
    "json": OutputFormat.JSON,
}
