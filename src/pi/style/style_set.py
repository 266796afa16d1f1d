"""Immutable sets of simultaneously active SGR attributes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator

from pi.style.attributes import Attribute, attribute_from_name
from pi.style.errors import EmptyStyleList, UnknownAttribute


@dataclass(frozen=True)
class StyleToken:
    """One element of a style list, e.g. ``bold`` or ``~red``."""

    attribute: Attribute
    negated: bool = False

    def __str__(self) -> str:
        return ("~" if self.negated else "") + self.attribute.name


@dataclass(frozen=True)
class StyleSet:
    """The combination of currently active attributes.

    Holds at most one foreground and one background color; decorations
    accumulate. Two sets are equal iff they denote the same attributes.
    Iteration yields decorations in table order, then the foreground color,
    then the background color, so equal sets always encode identically.
    """

    foreground: Attribute | None = None
    background: Attribute | None = None
    decorations: frozenset[Attribute] = field(default_factory=frozenset)

    @classmethod
    def empty(cls) -> StyleSet:
        return _EMPTY

    @classmethod
    def of(cls, *names: str) -> StyleSet:
        """Build a set from attribute names, applied left to right."""
        return _EMPTY.apply(parse_style_list(".".join(names)))

    def apply(self, tokens: Iterable[StyleToken]) -> StyleSet:
        """Return a new set with *tokens* applied in order.

        A plain token adds its attribute, replacing any color of the same
        kind. A negated token removes its attribute; negating an attribute
        that is not active is a no-op.
        """
        fg = self.foreground
        bg = self.background
        decorations = set(self.decorations)

        for token in tokens:
            attr = token.attribute
            if token.negated:
                if attr.kind == "foreground":
                    if fg == attr:
                        fg = None
                elif attr.kind == "background":
                    if bg == attr:
                        bg = None
                else:
                    decorations.discard(attr)
            elif attr.kind == "foreground":
                fg = attr
            elif attr.kind == "background":
                bg = attr
            else:
                decorations.add(attr)

        return StyleSet(foreground=fg, background=bg, decorations=frozenset(decorations))

    def contains(self, attr: Attribute) -> bool:
        if attr.kind == "foreground":
            return self.foreground == attr
        if attr.kind == "background":
            return self.background == attr
        return attr in self.decorations

    def issuperset(self, other: StyleSet) -> bool:
        return all(self.contains(attr) for attr in other)

    def __contains__(self, attr: object) -> bool:
        return isinstance(attr, Attribute) and self.contains(attr)

    def __iter__(self) -> Iterator[Attribute]:
        yield from sorted(self.decorations, key=lambda a: a.order)
        if self.foreground is not None:
            yield self.foreground
        if self.background is not None:
            yield self.background

    def __len__(self) -> int:
        return len(self.decorations) + (self.foreground is not None) + (self.background is not None)

    def __bool__(self) -> bool:
        return len(self) > 0

    def __repr__(self) -> str:
        return "StyleSet(" + ", ".join(repr(a.name) for a in self) + ")"


_EMPTY = StyleSet()


def parse_style_list(spec: str) -> list[StyleToken]:
    """Parse a dot-separated style list such as ``"bold.~red"``.

    Raises :class:`EmptyStyleList` for an empty *spec* and
    :class:`UnknownAttribute` (with the token's offset) for any name outside
    the attribute table, including empty names.
    """
    if not spec:
        raise EmptyStyleList(offset=0)

    tokens: list[StyleToken] = []
    start = 0
    for raw in spec.split("."):
        negated = raw.startswith("~")
        name = raw[1:] if negated else raw
        attr = attribute_from_name(name)
        if attr is None:
            raise UnknownAttribute(name, offset=start)
        tokens.append(StyleToken(attribute=attr, negated=negated))
        start += len(raw) + 1
    return tokens
