"""SGR encoding of style sets and scanning of embedded control sequences.

Encodings are always a single ``ESC[ p1;p2;... m`` sequence so that
:func:`scan_control_sequence` covers a complete encoding in one step.
"""

from __future__ import annotations

from pi.style.style_set import StyleSet

ESC = "\x1b"
BEL = "\x07"
ST = "\x1b\\"
RESET = "\x1b[0m"


def _sgr(codes: list[int]) -> str:
    if not codes:
        return ""
    return f"{ESC}[{';'.join(str(c) for c in codes)}m"


# ---------------------------------------------------------------------------
# Encoding
# ---------------------------------------------------------------------------


def encode_full(style: StyleSet) -> str:
    """Return the full (non-incremental) encoding of *style*.

    The empty set encodes to the empty string.
    """
    return _sgr([attr.code for attr in style])


def encode_transition(before: StyleSet, after: StyleSet) -> str:
    """Return the sequence that moves the terminal from *before* to *after*.

    Pure additions emit only the added attributes. Any removal (including a
    color being replaced by another of the same kind) emits a full reset
    followed by the complete encoding of *after*, since decorations cannot
    be cleared individually on every terminal.
    """
    if before == after:
        return ""
    if after.issuperset(before):
        return _sgr([attr.code for attr in after if attr not in before])
    return _sgr([0, *(attr.code for attr in after)])


# ---------------------------------------------------------------------------
# Scanning
# ---------------------------------------------------------------------------


def _scan_csi(text: str, pos: int) -> int | None:
    # ESC [ <parameter bytes 0x30-0x3F>* <intermediate bytes 0x20-0x2F>* <final 0x40-0x7E>
    i = pos + 2
    n = len(text)
    while i < n and "\x30" <= text[i] <= "\x3f":
        i += 1
    while i < n and "\x20" <= text[i] <= "\x2f":
        i += 1
    if i < n and "\x40" <= text[i] <= "\x7e":
        return i + 1 - pos
    return None


def _scan_string_terminated(text: str, pos: int) -> int | None:
    # OSC / APC payload ends at BEL or ST (ESC \)
    i = pos + 2
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == BEL:
            return i + 1 - pos
        if ch == ESC:
            if i + 1 < n and text[i + 1] == "\\":
                return i + 2 - pos
            return None
        i += 1
    return None


def scan_control_sequence(text: str, pos: int = 0) -> int | None:
    """Return the length of the control sequence starting at *pos*, if any.

    Recognizes CSI sequences (including SGR ``ESC[...m``), OSC sequences
    such as OSC 8 hyperlinks (``ESC]8;;uri BEL``) and APC sequences.
    Returns ``None`` when *pos* does not start a complete, well-formed
    sequence; such input is treated as ordinary text by callers.
    """
    if pos < 0 or pos + 1 >= len(text) or text[pos] != ESC:
        return None

    introducer = text[pos + 1]
    if introducer == "[":
        return _scan_csi(text, pos)
    if introducer in "]_":
        return _scan_string_terminated(text, pos)
    return None


def strip_control_sequences(text: str) -> str:
    """Remove every recognized control sequence from *text*."""
    if ESC not in text:
        return text

    parts: list[str] = []
    i = 0
    start = 0
    while i < len(text):
        length = scan_control_sequence(text, i) if text[i] == ESC else None
        if length is None:
            i += 1
            continue
        parts.append(text[start:i])
        i += length
        start = i
    parts.append(text[start:])
    return "".join(parts)


def stylize(text: str, *names: str, reset_after: bool = True) -> str:
    """Wrap plain *text* in the encoding of the named attributes.

    ``stylize("error", "bold", "red")`` returns ``ESC[1;31merrorESC[0m``.
    Unknown names raise :class:`~pi.style.errors.UnknownAttribute`.
    """
    prefix = encode_full(StyleSet.of(*names)) if names else ""
    if not prefix:
        return text
    return prefix + text + (RESET if reset_after else "")
