"""Diagnostic sinks.

A sink receives every diagnostic a rule emits. The engine only ever calls
``record``; where the diagnostic ends up is the embedding application's choice.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from rich.console import Console

if TYPE_CHECKING:
    from .rules import Diagnostic

DIAGNOSTICS_LOGGER = "focuslint.diagnostics"


@runtime_checkable
class DiagnosticSink(Protocol):
    def record(self, diagnostic: Diagnostic) -> None:
        ...


class LoggingSink:
    """Log each diagnostic on the ``focuslint.diagnostics`` logger (WARNING by default).

    ``source`` names the document being checked and prefixes every record.
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        level: int = logging.WARNING,
        source: str | None = None,
    ):
        self.logger = logger or logging.getLogger(DIAGNOSTICS_LOGGER)
        self.level = level
        self.source = source

    def record(self, diagnostic: Diagnostic) -> None:
        if self.source is None:
            self.logger.log(self.level, "[%s] %s", diagnostic.rule, diagnostic.message)
        else:
            self.logger.log(self.level, "%s: [%s] %s", self.source, diagnostic.rule, diagnostic.message)


class CollectingSink:
    """Keep diagnostics in memory, in emission order."""

    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []

    def record(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    def clear(self) -> None:
        self.diagnostics.clear()

    def for_rule(self, rule_id: str) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.rule == rule_id]

    def __len__(self) -> int:
        return len(self.diagnostics)


class ConsoleSink:
    """Print each diagnostic as it arrives with rich (stderr by default)."""

    _styles = {"error": "bold red", "warning": "yellow", "info": "dim"}

    def __init__(self, console: Console | None = None):
        self.console = console or Console(stderr=True)

    def record(self, diagnostic: Diagnostic) -> None:
        self.console.print(str(diagnostic), style=self._styles.get(diagnostic.level), markup=False, highlight=False)


class NullSink:
    """Discard everything."""

    def record(self, diagnostic: Diagnostic) -> None:
        pass
