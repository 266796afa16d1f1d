"""OSC 8 terminal hyperlinks.

Wraps text in OSC 8 sequences so terminal emulators that support it render
the text as a clickable link. The sequences are skipped by
:func:`~pi.style.width.visible_width`.
"""

from __future__ import annotations

from typing import Literal

from pi.style.codec import BEL, ST, stylize

OscTerminator = Literal["bel", "st"]


def _terminator(terminator: OscTerminator) -> str:
    if terminator == "st":
        return ST
    if terminator == "bel":
        return BEL
    raise ValueError(f"Unknown OSC terminator: {terminator!r}")


def osc_link_open(uri: str, id: str | None = None, terminator: OscTerminator = "bel") -> str:
    """Return the OSC 8 sequence that opens a link to *uri*."""
    params = f"id={id}" if id is not None else ""
    return f"\x1b]8;{params};{uri}{_terminator(terminator)}"


def osc_link_close(terminator: OscTerminator = "bel") -> str:
    return f"\x1b]8;;{_terminator(terminator)}"


def osc_link(
    text: str,
    uri: str,
    *,
    style: tuple[str, ...] | str | None = None,
    id: str | None = None,
    terminator: OscTerminator = "bel",
) -> str:
    """Wrap *text* in a hyperlink to *uri*.

    *style* names attributes (``"blue"`` or ``("bold", "blue")``) applied to
    the text inside the link. The styled text ends with a full reset, so a
    styled link also clears whatever style surrounds it. Inside markup,
    leave *style* unset and pass the link as a
    :class:`~pi.style.segments.Value` within a block instead.
    """
    if style:
        names = (style,) if isinstance(style, str) else style
        text = stylize(text, *names)
    return osc_link_open(uri, id=id, terminator=terminator) + text + osc_link_close(terminator)
