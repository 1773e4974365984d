"""Rule engine: run an ordered set of focus rules over one document."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

from .rules import Diagnostic, FocusRule, RuleResult, default_rules
from .sinks import DiagnosticSink, LoggingSink

logger = logging.getLogger(__name__)


@dataclass
class CheckReport:
    """Per-rule results for one document, in evaluation order."""

    results: list[RuleResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(r.passed for r in self.results)

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return [d for r in self.results for d in r.diagnostics]

    @property
    def failed_rules(self) -> list[str]:
        return [r.rule for r in self.results if not r.passed]

    def result_for(self, rule_id: str) -> RuleResult | None:
        for r in self.results:
            if r.rule == rule_id:
                return r
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "passed": self.passed,
            "failed_rules": self.failed_rules,
            "rules": [r.to_dict() for r in self.results],
        }


class FocusChecker:
    """Run every configured rule and AND their verdicts.

    All rules run over the same markup even after a failure, so every
    applicable diagnostic reaches the sink.
    """

    def __init__(self, rules: Sequence[FocusRule] | None = None, sink: DiagnosticSink | None = None):
        self.rules: tuple[FocusRule, ...] = tuple(rules) if rules is not None else tuple(default_rules())
        self.sink = sink if sink is not None else LoggingSink()

    @property
    def rule_ids(self) -> list[str]:
        return [rule.id for rule in self.rules]

    def run(self, markup: str) -> CheckReport:
        report = CheckReport()
        for rule in self.rules:
            result = rule.evaluate(markup)
            logger.debug("rule %s: %s (%d diagnostic(s))", rule.id, "pass" if result.passed else "fail", len(result.diagnostics))
            for diagnostic in result.diagnostics:
                self.sink.record(diagnostic)
            report.results.append(result)
        return report

    def check(self, markup: str) -> bool:
        return self.run(markup).passed


def check_focus(
    markup: str,
    sink: DiagnosticSink | None = None,
    rules: Sequence[FocusRule] | None = None,
) -> bool:
    """Return True when ``markup`` satisfies every focus rule.

    Args:
        markup: Serialized markup; may be empty or malformed
        sink: Where diagnostics go (defaults to a LoggingSink)
        rules: Rules to run, in order (defaults to all five)

    Returns:
        Logical AND of the rule verdicts
    """
    return FocusChecker(rules=rules, sink=sink).check(markup)
