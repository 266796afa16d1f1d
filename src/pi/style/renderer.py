"""Render segment sequences into styled terminal text.

:class:`Renderer` drives :mod:`pi.style.markup` and :mod:`pi.style.codec`
together and writes the result to a caller-supplied sink. The module-level
helpers are the usual entry points::

    styled_text("CPU: {red ", cpu, "%} Status: {green OK}")
    styled_writeln(t"{{bold.cyan {status}}} done")
"""

from __future__ import annotations

import logging
import sys
from typing import Any, Iterable, Iterator, Protocol, Union

from pi.style.codec import encode_transition
from pi.style.config import StyleConfig
from pi.style.markup import StyledRun, parse
from pi.style.segments import Literal, Segment, to_segments
from pi.style.style_set import StyleSet

logger = logging.getLogger(__name__)


class Sink(Protocol):
    """Append-only text destination, e.g. ``io.StringIO`` or ``sys.stdout``."""

    def write(self, text: str, /) -> Any: ...


TemplateInput = Union[str, Iterable[Segment]]


def _coerce(template: TemplateInput) -> Iterable[Segment]:
    if isinstance(template, str):
        return [Literal(template)]
    return template


class Renderer:
    """Turns segments into styled text.

    Every rendered output ends with the terminal back at the empty style,
    so rendered strings can be concatenated without leaking attributes.
    A renderer holds no per-call state; concurrent calls that share a sink
    must be serialized by the caller.
    """

    def __init__(self, config: StyleConfig | None = None) -> None:
        self.config = config if config is not None else StyleConfig()

    def chunks(self, template: TemplateInput) -> Iterator[str]:
        """Lazily yield output chunks: control sequences and run text."""
        return self._encode_runs(parse(_coerce(template)))

    def render(self, template: TemplateInput, sink: Sink) -> None:
        """Render *template* into *sink* atomically.

        The whole template is parsed before anything is written, so a
        :class:`~pi.style.errors.MarkupError` leaves the sink untouched.
        """
        logger.debug("Rendering template (color=%s)", self.config.color)
        output = "".join(self.chunks(template))
        sink.write(output)
        logger.debug("Rendered %d characters", len(output))

    def stream(self, template: TemplateInput, sink: Sink) -> None:
        """Render *template* into *sink* incrementally.

        Chunks are written as soon as they are produced. If the template is
        malformed, the sink keeps the output preceding the error and the
        :class:`~pi.style.errors.MarkupError` propagates.
        """
        logger.debug("Streaming template (color=%s)", self.config.color)
        written = 0
        for chunk in self.chunks(template):
            sink.write(chunk)
            written += len(chunk)
        logger.debug("Streamed %d characters", written)

    def render_to_string(self, template: TemplateInput) -> str:
        return "".join(self.chunks(template))

    def _encode_runs(self, runs: Iterable[StyledRun]) -> Iterator[str]:
        color = self.config.color
        current = StyleSet.empty()
        for run in runs:
            if color:
                seq = encode_transition(current, run.style)
                if seq:
                    yield seq
                current = run.style
            yield run.text
        if color:
            seq = encode_transition(current, StyleSet.empty())
            if seq:
                yield seq


# ---------------------------------------------------------------------------
# Convenience API
# ---------------------------------------------------------------------------


def render(template: TemplateInput, sink: Sink, config: StyleConfig | None = None) -> None:
    Renderer(config).render(template, sink)


def render_to_string(template: TemplateInput, config: StyleConfig | None = None) -> str:
    return Renderer(config).render_to_string(template)


def styled_text(*parts: Any) -> str:
    """Render positional parts (or a single ``t"..."`` template) to a string.

    ``str`` parts are markup; any other object is an interpolated value.
    """
    return render_to_string(to_segments(*parts))


class StyledText:
    """Lazy styled text, rendered each time it is converted to ``str``."""

    def __init__(self, segments: list[Segment], config: StyleConfig | None = None) -> None:
        self.segments = segments
        self.config = config

    def write_to(self, sink: Sink) -> None:
        render(self.segments, sink, self.config)

    def __str__(self) -> str:
        return render_to_string(self.segments, self.config)

    def __repr__(self) -> str:
        return f"StyledText({self.segments!r})"


def styled(*parts: Any) -> StyledText:
    return StyledText(to_segments(*parts))


def _write(stream: Sink, parts: tuple[Any, ...], end: str) -> None:
    Renderer(StyleConfig.from_env()).render(to_segments(*parts), stream)
    if end:
        stream.write(end)


def styled_write(*parts: Any) -> None:
    """Write styled parts to stdout."""
    _write(sys.stdout, parts, "")


def styled_writeln(*parts: Any) -> None:
    """Write styled parts to stdout followed by a newline."""
    _write(sys.stdout, parts, "\n")


def styled_write_err(*parts: Any) -> None:
    """Write styled parts to stderr."""
    _write(sys.stderr, parts, "")


def styled_writeln_err(*parts: Any) -> None:
    """Write styled parts to stderr followed by a newline."""
    _write(sys.stderr, parts, "\n")
