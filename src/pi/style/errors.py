"""Parse errors raised for malformed style markup.

All errors are raised synchronously at parse time and indicate a bug in the
template, not in the data being displayed. Each carries the index of the
failing segment, the character offset inside that segment, the offset in
the concatenated literal text and a human-readable reason.
"""

from __future__ import annotations


class MarkupError(ValueError):
    """Base class for style markup parse errors."""

    kind = "markup error"

    def __init__(
        self,
        reason: str,
        *,
        offset: int,
        segment_index: int = 0,
        position: int | None = None,
    ) -> None:
        self.reason = reason
        self.offset = offset
        self.segment_index = segment_index
        self.position = offset if position is None else position
        super().__init__(f"{reason} (segment {segment_index}, offset {offset})")


class UnknownAttribute(MarkupError):
    """A style list named an attribute outside the attribute table."""

    kind = "unknown attribute"

    def __init__(
        self,
        name: str,
        *,
        offset: int,
        segment_index: int = 0,
        position: int | None = None,
    ) -> None:
        self.name = name
        reason = f"unknown attribute {name!r}" if name else "empty attribute name"
        super().__init__(reason, offset=offset, segment_index=segment_index, position=position)


class UnmatchedOpenBrace(MarkupError):
    """A ``{`` block was never closed (or its style list never terminated)."""

    kind = "unmatched open brace"

    def __init__(
        self,
        *,
        offset: int,
        segment_index: int = 0,
        position: int | None = None,
        reason: str = "unmatched '{'",
    ) -> None:
        super().__init__(reason, offset=offset, segment_index=segment_index, position=position)


class UnmatchedCloseBrace(MarkupError):
    """A ``}`` appeared with no open block."""

    kind = "unmatched close brace"

    def __init__(
        self,
        *,
        offset: int,
        segment_index: int = 0,
        position: int | None = None,
    ) -> None:
        super().__init__("unmatched '}'", offset=offset, segment_index=segment_index, position=position)


class EmptyStyleList(MarkupError):
    """A ``{`` was followed by whitespace or ``}`` with no style names."""

    kind = "empty style list"

    def __init__(
        self,
        *,
        offset: int,
        segment_index: int = 0,
        position: int | None = None,
    ) -> None:
        super().__init__("empty style list", offset=offset, segment_index=segment_index, position=position)
