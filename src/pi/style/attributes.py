"""The fixed set of SGR attributes a style block can name.

Each attribute carries its SGR parameter and a *kind*: at most one
``foreground`` and one ``background`` attribute can be active at once,
while ``decoration`` attributes accumulate.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

AttributeKind = Literal["decoration", "foreground", "background"]


@dataclass(frozen=True)
class Attribute:
    """A single visual trait that can be toggled on terminal output."""

    name: str
    code: int
    kind: AttributeKind
    order: int

    @property
    def is_color(self) -> bool:
        return self.kind != "decoration"

    def __repr__(self) -> str:
        return f"Attribute({self.name!r})"


# ---------------------------------------------------------------------------
# Attribute table
# ---------------------------------------------------------------------------

_TABLE: list[tuple[str, int, AttributeKind]] = [
    # Text decorations
    ("bold", 1, "decoration"),
    ("dim", 2, "decoration"),
    ("italic", 3, "decoration"),
    ("underline", 4, "decoration"),
    ("inverse", 7, "decoration"),
    ("hidden", 8, "decoration"),
    ("strikethrough", 9, "decoration"),
    # Foreground colors
    ("black", 30, "foreground"),
    ("red", 31, "foreground"),
    ("green", 32, "foreground"),
    ("yellow", 33, "foreground"),
    ("blue", 34, "foreground"),
    ("magenta", 35, "foreground"),
    ("cyan", 36, "foreground"),
    ("white", 37, "foreground"),
    ("gray", 90, "foreground"),
    ("brightRed", 91, "foreground"),
    ("brightGreen", 92, "foreground"),
    ("brightYellow", 93, "foreground"),
    ("brightBlue", 94, "foreground"),
    ("brightMagenta", 95, "foreground"),
    ("brightCyan", 96, "foreground"),
    ("brightWhite", 97, "foreground"),
    # Background colors
    ("bgBlack", 40, "background"),
    ("bgRed", 41, "background"),
    ("bgGreen", 42, "background"),
    ("bgYellow", 43, "background"),
    ("bgBlue", 44, "background"),
    ("bgMagenta", 45, "background"),
    ("bgCyan", 46, "background"),
    ("bgWhite", 47, "background"),
    ("bgGray", 100, "background"),
    ("bgBrightRed", 101, "background"),
    ("bgBrightGreen", 102, "background"),
    ("bgBrightYellow", 103, "background"),
    ("bgBrightBlue", 104, "background"),
    ("bgBrightMagenta", 105, "background"),
    ("bgBrightCyan", 106, "background"),
    ("bgBrightWhite", 107, "background"),
]

ATTRIBUTES: dict[str, Attribute] = {
    name: Attribute(name=name, code=code, kind=kind, order=i)
    for i, (name, code, kind) in enumerate(_TABLE)
}

# Alternate spellings resolve to the same attribute.
_ALIASES: dict[str, str] = {
    "grey": "gray",
    "bgGrey": "bgGray",
}


def attribute_from_name(name: str) -> Attribute | None:
    """Look up an attribute by its (case-sensitive) markup name.

    Returns ``None`` for names outside the attribute table.
    """
    attr = ATTRIBUTES.get(name)
    if attr is not None:
        return attr
    canonical = _ALIASES.get(name)
    if canonical is not None:
        return ATTRIBUTES[canonical]
    return None


def is_attribute_name(name: str) -> bool:
    return attribute_from_name(name) is not None
