"""State machine for the inline style markup.

Syntax, recognized only inside ``Literal`` segments:

* ``{red text}`` -- apply a single attribute to ``text``
* ``{bold.red text}`` -- chain attributes with ``.``
* ``{bold outer {red inner} outer}`` -- nested blocks inherit the
  enclosing block's style
* ``{bold.red a {~red b} a}`` -- ``~`` removes an inherited attribute
* ``{{`` / ``}}`` -- literal ``{`` / ``}``

The style list runs from the ``{`` up to the first whitespace character,
which is consumed as syntax. ``}}`` is always an escape, so two blocks
closing back to back need text between them (``{bold a {red b} }``).
``{red}`` is an empty block and produces nothing. The parser yields
:class:`StyledRun` pairs of text and the style active for it; it does not
encode anything itself.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, Literal as TypingLiteral, NoReturn

from pi.style.attributes import attribute_from_name
from pi.style.errors import (
    EmptyStyleList,
    MarkupError,
    UnknownAttribute,
    UnmatchedCloseBrace,
    UnmatchedOpenBrace,
)
from pi.style.segments import ExpressionMarker, Literal, Segment, Value
from pi.style.style_set import StyleSet, StyleToken

logger = logging.getLogger(__name__)

ParserState = TypingLiteral["text", "style_list", "error"]


@dataclass(frozen=True)
class StyledRun:
    """A run of visible text and the style it is displayed with."""

    text: str
    style: StyleSet


@dataclass(frozen=True)
class Frame:
    """One level of markup nesting and the resolved style inside it.

    The location fields point at the block's opening ``{``; the root frame
    uses ``-1`` for all of them.
    """

    style: StyleSet
    segment_index: int = -1
    offset: int = -1
    position: int = -1


@dataclass(frozen=True)
class _Location:
    segment_index: int
    offset: int
    position: int


class MarkupParser:
    """Incremental markup parser fed one segment at a time.

    Call :meth:`feed` for each segment and :meth:`close` at end of input;
    both return the runs completed so far. The first error puts the parser
    in a terminal error state and every later call raises it again.
    """

    def __init__(self) -> None:
        self._stack: list[Frame] = [Frame(StyleSet.empty())]
        self._state: ParserState = "text"
        self._error: MarkupError | None = None
        self._closed = False

        self._segment_index = 0
        self._position = 0

        self._buffer: list[str] = []
        self._runs: list[StyledRun] = []

        # Style list being collected
        self._opener: _Location | None = None
        self._tokens: list[tuple[str, _Location]] = []
        self._token: list[str] = []
        self._token_start: _Location | None = None

    # -- Introspection ------------------------------------------------------

    @property
    def state(self) -> ParserState:
        return self._state

    @property
    def style(self) -> StyleSet:
        """The style active at the current position."""
        return self._stack[-1].style

    @property
    def depth(self) -> int:
        """Number of open blocks (the root frame is not counted)."""
        return len(self._stack) - 1

    @property
    def frames(self) -> tuple[Frame, ...]:
        return tuple(self._stack)

    # -- Public API ---------------------------------------------------------

    def feed(self, segment: Segment) -> list[StyledRun]:
        """Process one segment and return the runs it completed."""
        self._check_usable()

        index = self._segment_index
        self._segment_index += 1

        if isinstance(segment, Literal):
            self._feed_literal(segment.text, index)
            self._position += len(segment.text)
        elif isinstance(segment, Value):
            self._feed_value(segment)
        elif isinstance(segment, ExpressionMarker):
            pass
        else:
            raise TypeError(f"Unsupported segment type: {type(segment).__name__}")

        self._flush()
        return self._take_runs()

    def close(self) -> list[StyledRun]:
        """Signal end of input, validating that every block was closed."""
        self._check_usable()

        if self._state == "style_list":
            assert self._opener is not None
            self._fail(UnmatchedOpenBrace(**self._location_kwargs(self._opener)))
        if self.depth > 0:
            top = self._stack[-1]
            self._fail(
                UnmatchedOpenBrace(
                    offset=top.offset,
                    segment_index=top.segment_index,
                    position=top.position,
                )
            )

        self._closed = True
        self._flush()
        return self._take_runs()

    # -- Segment handlers ---------------------------------------------------

    def _feed_value(self, value: Value) -> None:
        if self._state == "style_list":
            assert self._opener is not None
            self._fail(
                UnmatchedOpenBrace(
                    **self._location_kwargs(self._opener),
                    reason="style list not terminated before interpolated value",
                )
            )
        self._buffer.append(value.to_text())

    def _feed_literal(self, text: str, index: int) -> None:
        n = len(text)
        i = 0
        while i < n:
            ch = text[i]
            nxt = text[i + 1] if i + 1 < n else ""

            if self._state == "text":
                if ch == "{":
                    if nxt == "{":
                        self._buffer.append("{")
                        i += 2
                        continue
                    self._begin_style_list(self._loc(index, i))
                elif ch == "}":
                    if nxt == "}":
                        self._buffer.append("}")
                        i += 2
                        continue
                    if self.depth == 0:
                        self._fail(UnmatchedCloseBrace(**self._location_kwargs(self._loc(index, i))))
                    self._pop_frame()
                else:
                    self._buffer.append(ch)
            else:
                if ch.isspace():
                    self._end_style_list(open_block=True)
                elif ch == "}":
                    self._end_style_list(open_block=False)
                elif ch == ".":
                    self._end_token()
                    self._token_start = self._loc(index, i + 1)
                else:
                    self._token.append(ch)
            i += 1

    # -- Style lists --------------------------------------------------------

    def _begin_style_list(self, opener: _Location) -> None:
        self._state = "style_list"
        self._opener = opener
        self._tokens = []
        self._token = []
        self._token_start = _Location(opener.segment_index, opener.offset + 1, opener.position + 1)

    def _end_token(self) -> None:
        assert self._token_start is not None
        self._tokens.append(("".join(self._token), self._token_start))
        self._token = []
        self._token_start = None

    def _end_style_list(self, *, open_block: bool) -> None:
        assert self._opener is not None
        self._end_token()

        if len(self._tokens) == 1 and not self._tokens[0][0]:
            self._fail(EmptyStyleList(**self._location_kwargs(self._opener)))

        style = self.style.apply(self._resolve_tokens())
        opener = self._opener
        self._state = "text"
        self._opener = None
        self._tokens = []

        if open_block:
            self._flush()
            self._stack.append(
                Frame(
                    style=style,
                    segment_index=opener.segment_index,
                    offset=opener.offset,
                    position=opener.position,
                )
            )

    def _resolve_tokens(self) -> list[StyleToken]:
        resolved: list[StyleToken] = []
        for raw, loc in self._tokens:
            negated = raw.startswith("~")
            name = raw[1:] if negated else raw
            attr = attribute_from_name(name)
            if attr is None:
                self._fail(UnknownAttribute(name, **self._location_kwargs(loc)))
            resolved.append(StyleToken(attribute=attr, negated=negated))
        return resolved

    # -- Frames and output --------------------------------------------------

    def _pop_frame(self) -> None:
        self._flush()
        self._stack.pop()

    def _flush(self) -> None:
        if self._buffer:
            self._runs.append(StyledRun("".join(self._buffer), self.style))
            self._buffer = []

    def _take_runs(self) -> list[StyledRun]:
        runs = self._runs
        self._runs = []
        return runs

    # -- Errors -------------------------------------------------------------

    def _loc(self, index: int, offset: int) -> _Location:
        return _Location(index, offset, self._position + offset)

    @staticmethod
    def _location_kwargs(loc: _Location) -> dict[str, int]:
        return {"offset": loc.offset, "segment_index": loc.segment_index, "position": loc.position}

    def _check_usable(self) -> None:
        if self._error is not None:
            raise self._error
        if self._closed:
            raise RuntimeError("MarkupParser is already closed")

    def _fail(self, error: MarkupError) -> NoReturn:
        logger.debug("Markup parse failed: %s", error)
        self._state = "error"
        self._error = error
        self._buffer = []
        self._runs = []
        raise error


def parse(segments: Iterable[Segment]) -> Iterator[StyledRun]:
    """Lazily parse *segments* into styled runs."""
    parser = MarkupParser()
    for segment in segments:
        yield from parser.feed(segment)
    yield from parser.close()
