"""Flat splitter on a set of single-character separators."""

from __future__ import annotations

from typing import Iterable


def split_by_delimiters(text: str, separators: Iterable[str]) -> list[str]:
    """Split ``text`` on any of ``separators``, dropping empty pieces.

    Unlike the block separator this has no notion of nesting.
    """
    separator_set = set(separators)
    pieces: list[str] = []
    start = 0

    for i, char in enumerate(text):
        if char in separator_set:
            if i != start:
                pieces.append(text[start:i])
            start = i + 1

    if start < len(text):
        pieces.append(text[start:])

    return pieces
