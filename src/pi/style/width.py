"""Visible-width measurement of text that may contain control sequences."""

from __future__ import annotations

from pi.style.codec import ESC, scan_control_sequence


def visible_width(text: str) -> int:
    """Count the user-visible codepoints in *text*.

    Control sequences recognized by :func:`scan_control_sequence` are
    skipped; a malformed sequence counts as ordinary visible text. Every
    other codepoint counts as one column.
    """
    if not text:
        return 0

    # Fast path: nothing to skip
    if ESC not in text:
        return len(text)

    width = 0
    i = 0
    n = len(text)
    while i < n:
        if text[i] == ESC:
            length = scan_control_sequence(text, i)
            if length is not None:
                i += length
                continue
        width += 1
        i += 1
    return width


def pad_to_width(text: str, width: int, fill: str = " ") -> str:
    """Right-pad *text* with *fill* until its visible width reaches *width*.

    *fill* must be exactly one column wide; it may carry control sequences
    of its own. Text that is already at least *width* wide is returned
    unchanged.
    """
    if visible_width(fill) != 1:
        raise ValueError(f"fill must be one visible column wide, got {fill!r}")
    missing = width - visible_width(text)
    if missing <= 0:
        return text
    return text + fill * missing
