"""Tests for pi.style.renderer -- rendering templates into sinks."""

from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Any

import pytest

from pi.style.config import StyleConfig
from pi.style.errors import UnmatchedCloseBrace, UnmatchedOpenBrace
from pi.style.renderer import (
    Renderer,
    StyledText,
    render,
    render_to_string,
    styled,
    styled_text,
    styled_write,
    styled_writeln,
    styled_writeln_err,
)
from pi.style.segments import Value, from_dollar_template, from_parts


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


@dataclass
class FakeInterpolation:
    value: Any
    expression: str
    conversion: str | None = None
    format_spec: str = ""


class FakeTemplate:
    """Minimal stand-in for a ``t"..."`` template object."""

    def __init__(self, *items: Any) -> None:
        self._items = items

    @property
    def interpolations(self) -> tuple[Any, ...]:
        return tuple(i for i in self._items if not isinstance(i, str))

    def __iter__(self):
        return iter(self._items)


class RecordingSink:
    def __init__(self) -> None:
        self.writes: list[str] = []

    def write(self, text: str) -> int:
        self.writes.append(text)
        return len(text)


# ---------------------------------------------------------------------------
# Exact output
# ---------------------------------------------------------------------------


class TestRenderOutput:
    """Exact escape sequences for rendered markup."""

    def test_plain_text_passes_through(self) -> None:
        assert styled_text("plain text") == "plain text"

    def test_single_style(self) -> None:
        assert styled_text("{red hi}") == "\x1b[31mhi\x1b[0m"

    def test_escaped_braces(self) -> None:
        assert styled_text("Use {{literal}} here") == "Use {literal} here"

    def test_negation_resets_and_reapplies(self) -> None:
        result = styled_text("{bold.red Both {~red just bold} both again}")
        assert result == (
            "\x1b[1;31m"  # bold, red
            "Both "
            "\x1b[0;1m"  # removal: reset, then bold
            "just bold"
            "\x1b[31m"  # pure addition of red
            " both again"
            "\x1b[0m"
        )

    def test_deep_nesting_restores_parent(self) -> None:
        result = styled_text("{bold A {italic B {underline C} B} A}")
        assert result == (
            "\x1b[1mA "
            "\x1b[3mB "
            "\x1b[4mC"
            "\x1b[0;1;3m B"
            "\x1b[0;1m A"
            "\x1b[0m"
        )

    def test_adjacent_blocks(self) -> None:
        assert styled_text("{red error} and {green success}") == (
            "\x1b[31merror\x1b[0m and \x1b[32msuccess\x1b[0m"
        )

    def test_inherited_style_is_not_reemitted(self) -> None:
        assert styled_text("{red outer {red inner} outer}") == "\x1b[31mouter inner outer\x1b[0m"

    def test_background_and_foreground(self) -> None:
        assert styled_text("{red.bgWhite text}") == "\x1b[31;47mtext\x1b[0m"

    def test_values_are_stringified_under_active_style(self) -> None:
        assert styled_text("Value: {green ", 42, "}") == "Value: \x1b[32m42\x1b[0m"
        assert styled_text("{green ", 1, " + ", 2, "}") == "\x1b[32m1 + 2\x1b[0m"

    def test_value_with_markup_is_verbatim(self) -> None:
        assert styled_text(Value("{red fake}")) == "{red fake}"

    def test_empty_block(self) -> None:
        assert styled_text("{red}") == ""
        assert styled_text("a{bold}b") == "ab"

    def test_template_string_object(self) -> None:
        template = FakeTemplate(
            "CPU: {red ",
            FakeInterpolation(75, "cpu"),
            "%} Temp: {yellow ",
            FakeInterpolation(65.54, "temp", format_spec=".1f"),
            "}",
        )
        assert styled_text(template) == "CPU: \x1b[31m75%\x1b[0m Temp: \x1b[33m65.5\x1b[0m"


class TestColorDisabled:
    """Rendering with color turned off."""

    def test_no_sequences_emitted(self) -> None:
        renderer = Renderer(StyleConfig(color=False))
        assert renderer.render_to_string("{bold.red Both {~red just bold} end}") == "Both just bold end"

    def test_markup_still_validated(self) -> None:
        renderer = Renderer(StyleConfig(color=False))
        with pytest.raises(UnmatchedOpenBrace):
            renderer.render_to_string("{green unterminated")


# ---------------------------------------------------------------------------
# Sinks
# ---------------------------------------------------------------------------


class TestSinks:
    """Atomic and streaming writes to a sink."""

    def test_render_writes_to_sink(self) -> None:
        sink = io.StringIO()
        render("{red hi}", sink)
        assert sink.getvalue() == "\x1b[31mhi\x1b[0m"

    def test_render_is_atomic_on_error(self) -> None:
        sink = io.StringIO()
        segments = from_parts("ok {red fine}", 1, " }")
        with pytest.raises(UnmatchedCloseBrace):
            Renderer().render(segments, sink)
        assert sink.getvalue() == ""

    def test_render_writes_once(self) -> None:
        sink = RecordingSink()
        Renderer().render(from_parts("a {red ", 1, "} b"), sink)
        assert sink.writes == ["a \x1b[31m1\x1b[0m b"]

    def test_stream_keeps_prefix_on_error(self) -> None:
        sink = io.StringIO()
        segments = from_parts("ok {red fine}", 1, " }")
        with pytest.raises(UnmatchedCloseBrace):
            Renderer().stream(segments, sink)
        assert sink.getvalue() == "ok \x1b[31mfine\x1b[0m1"

    def test_stream_matches_render(self) -> None:
        sink = RecordingSink()
        segments = from_parts("{bold x ", 3, " {~bold y} z}")
        Renderer().stream(segments, sink)
        assert len(sink.writes) > 1
        assert "".join(sink.writes) == render_to_string(segments)

    def test_chunks_are_lazy(self) -> None:
        chunks = Renderer().chunks("{red a}}")
        # Nothing is parsed until iteration starts
        with pytest.raises(UnmatchedOpenBrace):
            list(chunks)


# ---------------------------------------------------------------------------
# Lazy wrapper and stdio helpers
# ---------------------------------------------------------------------------


class TestStyled:
    """Lazily rendered styled text."""

    def test_lazy_wrapper_renders_on_str(self) -> None:
        lazy = styled("Test: {blue ", 99, "}")
        assert isinstance(lazy, StyledText)
        assert str(lazy) == "Test: \x1b[34m99\x1b[0m"
        assert f"{lazy}" == "Test: \x1b[34m99\x1b[0m"

    def test_lazy_wrapper_defers_errors(self) -> None:
        lazy = styled("{oops")
        with pytest.raises(UnmatchedOpenBrace):
            str(lazy)

    def test_write_to_sink(self) -> None:
        sink = io.StringIO()
        styled("{dim ", "x", "}").write_to(sink)
        assert sink.getvalue() == "\x1b[2mx\x1b[0m"


class TestStdioHelpers:
    """Writing styled text to stdout and stderr."""

    def test_styled_writeln(self, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FORCE_COLOR", "1")
        styled_writeln("{green OK}")
        assert capsys.readouterr().out == "\x1b[32mOK\x1b[0m\n"

    def test_styled_write_honors_no_color(
        self, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("FORCE_COLOR", raising=False)
        monkeypatch.setenv("NO_COLOR", "1")
        styled_write("{green OK}")
        assert capsys.readouterr().out == "OK"

    def test_styled_writeln_err(self, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("FORCE_COLOR", "1")
        styled_writeln_err("{red.bold ERROR:} ", "boom")
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "\x1b[1;31mERROR:\x1b[0m boom\n"


# ---------------------------------------------------------------------------
# Documented examples
# ---------------------------------------------------------------------------


class TestDocumentedExamples:
    """Every markup example shown in the README and module docstrings renders."""

    def test_status_line(self) -> None:
        line = styled_text("CPU: {red ", 75, "%} Status: {bold.green OK}")
        assert line == "CPU: \x1b[31m75%\x1b[0m Status: \x1b[1;32mOK\x1b[0m"

    def test_nested_negation_with_trailing_text(self) -> None:
        result = styled_text("{bold.red Error:} {dim see {~dim.underline the log} for details}")
        assert result == (
            "\x1b[1;31mError:\x1b[0m "
            "\x1b[2msee "
            "\x1b[0;4mthe log"
            "\x1b[0;2m for details"
            "\x1b[0m"
        )

    @pytest.mark.parametrize(
        ("markup", "expected"),
        [
            ("{red text}", "\x1b[31mtext\x1b[0m"),
            ("{bold.red text}", "\x1b[1;31mtext\x1b[0m"),
            ("{bold a {italic b} a}", "\x1b[1ma \x1b[3mb\x1b[0;1m a\x1b[0m"),
            ("{bold.red a {~red b} a}", "\x1b[1;31ma \x1b[0;1mb\x1b[31m a\x1b[0m"),
            ("{bold a {red b} }", "\x1b[1ma \x1b[31mb\x1b[0;1m \x1b[0m"),
        ],
    )
    def test_markup_table(self, markup: str, expected: str) -> None:
        assert styled_text(markup) == expected

    def test_back_to_back_closing_braces_are_an_escape(self) -> None:
        with pytest.raises(UnmatchedOpenBrace):
            styled_text("{bold.red a {~red b}}")

    def test_template_string_with_doubled_braces(self) -> None:
        # t"{{bold {name}}}" and t"{{bold.cyan {status}}} done"
        name = FakeTemplate("{bold ", FakeInterpolation("Ann", "name"), "}")
        assert styled_text(name) == "\x1b[1mAnn\x1b[0m"
        status = FakeTemplate("{bold.cyan ", FakeInterpolation("up", "status"), "} done")
        assert styled_text(status) == "\x1b[1;36mup\x1b[0m done"

    def test_dollar_template(self) -> None:
        assert render_to_string(from_dollar_template("{red $cpu%}", cpu=75)) == "\x1b[31m75%\x1b[0m"
