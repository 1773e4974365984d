"""Static keyboard-focus accessibility checks for serialized markup."""

from .engine import CheckReport, FocusChecker, check_focus
from .rules import (
    Diagnostic,
    FocusIndicatorRule,
    FocusOrderRule,
    FocusRule,
    FocusTrapRule,
    KeyboardAccessibleRule,
    RuleResult,
    SkipLinkRule,
    default_rules,
    get_rule_ids,
)
from .sinks import CollectingSink, ConsoleSink, DiagnosticSink, LoggingSink, NullSink

__version__ = "0.1.0"

__all__ = [
    "check_focus",
    "FocusChecker",
    "CheckReport",
    "Diagnostic",
    "RuleResult",
    "FocusRule",
    "SkipLinkRule",
    "FocusIndicatorRule",
    "KeyboardAccessibleRule",
    "FocusOrderRule",
    "FocusTrapRule",
    "default_rules",
    "get_rule_ids",
    "DiagnosticSink",
    "LoggingSink",
    "CollectingSink",
    "ConsoleSink",
    "NullSink",
]
