"""Source loader: reads input text files for the separator."""

from __future__ import annotations

import logging
from pathlib import Path

from block_separator.domain.exceptions import SourceLoadException

logger = logging.getLogger(__name__)

BOM = "\ufeff"


class SourceLoader:
    """Reads a whole text file into memory before parsing."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self._encoding = encoding

    def load(self, path: Path | str) -> str:
        path = Path(path)
        if not path.is_file():
            raise SourceLoadException(f"Source file not found: '{path}'")

        try:
            text = path.read_text(encoding=self._encoding)
        except UnicodeDecodeError as exc:
            raise SourceLoadException(
                f"Cannot decode '{path}' as {self._encoding}: {exc.reason}"
            ) from exc
        except LookupError as exc:
            raise SourceLoadException(f"Unknown encoding: {self._encoding}") from exc
        except OSError as exc:
            raise SourceLoadException(f"Cannot read '{path}': {exc.strerror or exc}") from exc

        if text.startswith(BOM):
            text = text[1:]

        logger.debug("Loaded %s (%d characters)", path, len(text))
        return text
