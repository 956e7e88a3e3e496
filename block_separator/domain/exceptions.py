"""Domain exception hierarchy."""


class DomainException(Exception):
    pass


class InvalidDelimiterTableException(DomainException):
    pass


class SourceLoadException(DomainException):
    pass


class BlockParseException(DomainException):
    """Base for failures of the block separation scan.

    ``position`` is the offset in the source where the failure was detected.
    """

    def __init__(self, message: str, position: int) -> None:
        super().__init__(message)
        self.position = position


class UnterminatedBlockException(BlockParseException):
    """An open marker has no matching close marker before end of input."""

    def __init__(self, open_marker: str, close_marker: str, position: int) -> None:
        super().__init__(
            f"Unterminated block: '{open_marker}' at position {position} "
            f"has no matching '{close_marker}'",
            position,
        )
        self.open_marker = open_marker
        self.close_marker = close_marker


class MismatchedDelimiterException(BlockParseException):
    def __init__(self, found: str, expected: str | None, position: int) -> None:
        if expected is None:
            message = f"Unexpected '{found}' at position {position} outside of any block"
        else:
            message = f"Expected '{expected}', got '{found}' at position {position}"
        super().__init__(message, position)
        self.found = found
        self.expected = expected


class NestingTooDeepException(BlockParseException):
    def __init__(self, max_depth: int, position: int) -> None:
        super().__init__(
            f"Nesting deeper than {max_depth} levels at position {position}",
            position,
        )
        self.max_depth = max_depth
