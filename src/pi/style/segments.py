"""Template segments and the front ends that produce them.

A template is a sequence of segments: raw ``Literal`` text that may contain
style markup, informational ``ExpressionMarker`` entries naming the source
of the next value, and opaque ``Value`` payloads that are stringified and
never scanned for markup.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Union


@dataclass(frozen=True)
class Literal:
    """Raw template text; the only segment scanned for markup."""

    text: str


@dataclass(frozen=True)
class ExpressionMarker:
    """Source text of an interpolated expression (ignored when rendering)."""

    source: str


@dataclass(frozen=True)
class Value:
    """A runtime value emitted as plain text under the active style."""

    payload: Any
    conversion: str | None = None
    format_spec: str = ""

    def to_text(self) -> str:
        value = self.payload
        if self.conversion == "r":
            value = repr(value)
        elif self.conversion == "s":
            value = str(value)
        elif self.conversion == "a":
            value = ascii(value)
        return format(value, self.format_spec)


Segment = Union[Literal, ExpressionMarker, Value]

_SEGMENT_TYPES = (Literal, ExpressionMarker, Value)


def is_segment(obj: object) -> bool:
    return isinstance(obj, _SEGMENT_TYPES)


# ---------------------------------------------------------------------------
# Front ends
# ---------------------------------------------------------------------------


def from_parts(*parts: Any) -> list[Segment]:
    """Build segments from positional parts.

    ``str`` parts become literals, segment instances pass through and any
    other object becomes a value. Wrap a string in :class:`Value` to emit it
    without markup scanning.
    """
    segments: list[Segment] = []
    for part in parts:
        if isinstance(part, str):
            segments.append(Literal(part))
        elif is_segment(part):
            segments.append(part)
        else:
            segments.append(Value(part))
    return segments


def from_template(template: Iterable[Any]) -> list[Segment]:
    """Build segments from a template-string object (``t"..."``).

    Iterating the template yields literal strings and interpolation objects
    exposing ``value``, ``expression``, ``conversion`` and ``format_spec``.
    """
    segments: list[Segment] = []
    for item in template:
        if isinstance(item, str):
            if item:
                segments.append(Literal(item))
            continue
        expression = getattr(item, "expression", "")
        if expression:
            segments.append(ExpressionMarker(expression))
        segments.append(
            Value(
                item.value,
                conversion=getattr(item, "conversion", None),
                format_spec=getattr(item, "format_spec", "") or "",
            )
        )
    return segments


def from_dollar_template(
    source: str,
    mapping: Mapping[str, Any] | None = None,
    **kwargs: Any,
) -> list[Segment]:
    """Split *source* on ``string.Template`` placeholders.

    ``$name`` and ``${name}`` become values looked up in *mapping* and
    *kwargs* (keyword arguments win); ``$$`` is a literal ``$``. A missing
    name raises ``KeyError`` and an invalid placeholder raises
    ``ValueError``, matching ``string.Template.substitute``.
    """
    values: dict[str, Any] = dict(mapping or {})
    values.update(kwargs)

    segments: list[Segment] = []
    literal: list[str] = []
    last = 0

    for match in string.Template.pattern.finditer(source):
        literal.append(source[last : match.start()])
        last = match.end()

        if match.group("escaped") is not None:
            literal.append("$")
            continue

        name = match.group("named") or match.group("braced")
        if name is None:
            raise ValueError(f"Invalid placeholder in template at offset {match.start()}")

        if literal:
            text = "".join(literal)
            if text:
                segments.append(Literal(text))
            literal = []
        segments.append(ExpressionMarker(name))
        segments.append(Value(values[name]))

    literal.append(source[last:])
    text = "".join(literal)
    if text:
        segments.append(Literal(text))
    return segments


def to_segments(*parts: Any) -> list[Segment]:
    """Normalize the arguments of the ``styled*`` helpers.

    A single template-string object is expanded with :func:`from_template`;
    anything else goes through :func:`from_parts`.
    """
    if len(parts) == 1 and hasattr(parts[0], "interpolations") and not isinstance(parts[0], str):
        return from_template(parts[0])
    return from_parts(*parts)
