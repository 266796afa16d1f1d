"""pi-style: inline style markup and SGR rendering for terminal text."""

# Attributes and style sets
from pi.style.attributes import ATTRIBUTES, Attribute, AttributeKind, attribute_from_name, is_attribute_name
from pi.style.style_set import StyleSet, StyleToken, parse_style_list

# Encoding and scanning
from pi.style.codec import (
    RESET,
    encode_full,
    encode_transition,
    scan_control_sequence,
    strip_control_sequences,
    stylize,
)

# Configuration
from pi.style.config import StyleConfig

# Errors
from pi.style.errors import (
    EmptyStyleList,
    MarkupError,
    UnknownAttribute,
    UnmatchedCloseBrace,
    UnmatchedOpenBrace,
)

# Markup parsing
from pi.style.markup import Frame, MarkupParser, StyledRun, parse

# Hyperlinks
from pi.style.osc_link import osc_link, osc_link_close, osc_link_open

# Rendering
from pi.style.renderer import (
    Renderer,
    Sink,
    StyledText,
    render,
    render_to_string,
    styled,
    styled_text,
    styled_write,
    styled_write_err,
    styled_writeln,
    styled_writeln_err,
)

# Segments and front ends
from pi.style.segments import (
    ExpressionMarker,
    Literal,
    Segment,
    Value,
    from_dollar_template,
    from_parts,
    from_template,
    to_segments,
)

# Width measurement
from pi.style.width import pad_to_width, visible_width

__all__ = [
    # Attributes
    "ATTRIBUTES",
    "Attribute",
    "AttributeKind",
    "attribute_from_name",
    "is_attribute_name",
    # Style sets
    "StyleSet",
    "StyleToken",
    "parse_style_list",
    # Codec
    "RESET",
    "encode_full",
    "encode_transition",
    "scan_control_sequence",
    "strip_control_sequences",
    "stylize",
    # Config
    "StyleConfig",
    # Errors
    "EmptyStyleList",
    "MarkupError",
    "UnknownAttribute",
    "UnmatchedCloseBrace",
    "UnmatchedOpenBrace",
    # Markup
    "Frame",
    "MarkupParser",
    "StyledRun",
    "parse",
    # Hyperlinks
    "osc_link",
    "osc_link_close",
    "osc_link_open",
    # Rendering
    "Renderer",
    "Sink",
    "StyledText",
    "render",
    "render_to_string",
    "styled",
    "styled_text",
    "styled_write",
    "styled_write_err",
    "styled_writeln",
    "styled_writeln_err",
    # Segments
    "ExpressionMarker",
    "Literal",
    "Segment",
    "Value",
    "from_dollar_template",
    "from_parts",
    "from_template",
    "to_segments",
    # Width
    "pad_to_width",
    "visible_width",
]
