"""Delimiter pair and delimiter table value objects."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from .exceptions import InvalidDelimiterTableException


@dataclass(frozen=True)
class DelimiterPair:
    open: str
    close: str

    def __str__(self) -> str:
        return f"{self.open}{self.close}"


@dataclass(frozen=True)
class DelimiterTable:
    """Ordered delimiter pairs recognised by the separator.

    No semantic validation is done: duplicate open markers or pairs whose open
    and close are the same character are accepted, and the first pair in table
    order wins when several share an open marker.
    """

    pairs: tuple[DelimiterPair, ...]

    @classmethod
    def of(cls, *pairs: tuple[str, str]) -> DelimiterTable:
        return cls(tuple(DelimiterPair(o, c) for o, c in pairs))

    @classmethod
    def parse(cls, value: str | Iterable[str]) -> DelimiterTable:
        """Build a table from ``"{} ()"`` or ``["{}", "()"]``.

        Each entry must be exactly two characters: the open marker followed by
        the close marker.
        """
        entries = value.split() if isinstance(value, str) else list(value)
        if not entries:
            raise InvalidDelimiterTableException("Delimiter table cannot be empty")

        pairs: list[DelimiterPair] = []
        for entry in entries:
            entry = str(entry)
            if len(entry) != 2:
                raise InvalidDelimiterTableException(
                    f"Invalid delimiter pair '{entry}': expected two characters, e.g. '{{}}'"
                )
            pairs.append(DelimiterPair(entry[0], entry[1]))
        return cls(tuple(pairs))

    def open_lookup(self) -> dict[str, DelimiterPair]:
        """Map each open marker to its first pair in table order."""
        lookup: dict[str, DelimiterPair] = {}
        for pair in self.pairs:
            lookup.setdefault(pair.open, pair)
        return lookup

    @property
    def close_markers(self) -> frozenset[str]:
        return frozenset(pair.close for pair in self.pairs)

    def __iter__(self) -> Iterator[DelimiterPair]:
        return iter(self.pairs)

    def __len__(self) -> int:
        return len(self.pairs)

    def __str__(self) -> str:
        return " ".join(str(pair) for pair in self.pairs)


DEFAULT_DELIMITERS = DelimiterTable.of(("{", "}"))
