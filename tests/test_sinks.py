"""Tests for the diagnostic sinks."""

import logging
from io import StringIO

from rich.console import Console

from focuslint import check_focus
from focuslint.rules import Diagnostic, FocusTrapRule, KeyboardAccessibleRule
from focuslint.sinks import CollectingSink, ConsoleSink, DiagnosticSink, LoggingSink, NullSink

TRAP = Diagnostic(
    rule="focus-trap",
    message="Modal/dialog lacks focusable elements, causing a potential focus trap.",
    fragment='<div role="dialog">',
    line=2,
)


def _console() -> tuple[Console, StringIO]:
    buffer = StringIO()
    return Console(file=buffer, width=200, color_system=None), buffer


def test_all_sinks_satisfy_protocol():
    console, _ = _console()
    for sink in (LoggingSink(), CollectingSink(), ConsoleSink(console), NullSink()):
        assert isinstance(sink, DiagnosticSink)


def test_console_sink_prints_each_diagnostic():
    console, buffer = _console()
    sink = ConsoleSink(console)

    sink.record(TRAP)
    sink.record(Diagnostic(rule="focus-order", message="Focus order is not logical or meaningful.", level="warning"))

    lines = buffer.getvalue().splitlines()
    assert lines == [
        "ERROR: [focus-trap] line 2 - Modal/dialog lacks focusable elements, causing a potential focus trap.",
        "WARNING: [focus-order] - Focus order is not logical or meaningful.",
    ]


def test_console_sink_does_not_interpret_markup():
    """Raw tag text like ``[bold]`` inside a message is printed as-is."""
    console, buffer = _console()

    message = 'Clickable element <a title="[bold]x"> is not keyboard accessible.'
    ConsoleSink(console).record(Diagnostic(rule="keyboard-accessible", message=message))

    assert '<a title="[bold]x">' in buffer.getvalue()


def test_console_sink_through_engine():
    console, buffer = _console()

    assert check_focus('<p>\n<div role="dialog">text</div>', sink=ConsoleSink(console), rules=[FocusTrapRule()]) is False

    assert buffer.getvalue().startswith("ERROR: [focus-trap] line 2 - ")


def test_collecting_sink_for_rule_and_clear():
    sink = CollectingSink()
    check_focus('<div role="dialog">text</div><button>x</button>', sink=sink)

    assert len(sink) == 4
    assert [d.rule for d in sink.for_rule("focus-trap")] == ["focus-trap"]
    assert sink.for_rule("focus-order") == []

    sink.clear()

    assert len(sink) == 0
    assert sink.diagnostics == []
    KeyboardAccessibleRule().check("<select></select>", sink=sink)
    assert [d.rule for d in sink.diagnostics] == ["keyboard-accessible"]


def test_logging_sink_prefixes_source(caplog):
    sink = LoggingSink(source="site/index.html")

    with caplog.at_level(logging.WARNING, logger="focuslint.diagnostics"):
        sink.record(TRAP)
        LoggingSink().record(TRAP)

    messages = [rec.getMessage() for rec in caplog.records]
    assert messages == [
        "site/index.html: [focus-trap] Modal/dialog lacks focusable elements, causing a potential focus trap.",
        "[focus-trap] Modal/dialog lacks focusable elements, causing a potential focus trap.",
    ]


def test_logging_sink_custom_level(caplog):
    logger = logging.getLogger("focuslint.tests")

    with caplog.at_level(logging.INFO, logger="focuslint.tests"):
        LoggingSink(logger=logger, level=logging.INFO).record(TRAP)

    assert [rec.levelno for rec in caplog.records] == [logging.INFO]
