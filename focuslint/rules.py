"""Focus rules for markup validation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Literal

from .markup import ContentMatcher, LineIndex, TagMatch, TagMatcher, attribute_value, has_token, integer_attribute
from .sinks import DiagnosticSink, LoggingSink

Level = Literal["error", "warning", "info"]

FOCUSABLE_TAGS = ("a", "button", "input", "textarea", "select")
CLICKABLE_TAGS = ("button", "a", "input", "select")
ORDERED_TAGS = ("button", "a", "input", "select", "textarea", "div")

DEFAULT_HIDDEN_CLASSES = ("sr-only", "visually-hidden")
DEFAULT_SKIP_TEXT = "Skip to main content"


@dataclass(frozen=True)
class Diagnostic:
    """A single rule violation."""

    rule: str
    message: str
    level: Level = "error"
    fragment: str | None = None
    line: int | None = None

    def __str__(self) -> str:
        loc = f" line {self.line}" if self.line else ""
        return f"{self.level.upper()}: [{self.rule}]{loc} - {self.message}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "rule": self.rule,
            "level": self.level,
            "message": self.message,
            "fragment": self.fragment,
            "line": self.line,
        }


@dataclass
class RuleResult:
    """Verdict of one rule over one document."""

    rule: str
    passed: bool
    diagnostics: list[Diagnostic] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "rule": self.rule,
            "passed": self.passed,
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }


class FocusRule(ABC):
    """A named, independently runnable focus check.

    Subclasses implement ``_violations`` as a single scan over the markup.
    A rule passes exactly when it yields no diagnostics.
    """

    id: str = ""
    title: str = ""
    wcag: str = ""

    def evaluate(self, markup: str) -> RuleResult:
        """Evaluate the rule without emitting anything."""
        diagnostics = list(self._violations(markup, LineIndex(markup)))
        return RuleResult(rule=self.id, passed=not diagnostics, diagnostics=diagnostics)

    def check(self, markup: str, sink: DiagnosticSink | None = None) -> bool:
        """Evaluate the rule, send its diagnostics to ``sink`` and return the verdict."""
        sink = sink if sink is not None else LoggingSink()
        result = self.evaluate(markup)
        for diagnostic in result.diagnostics:
            sink.record(diagnostic)
        return result.passed

    @abstractmethod
    def _violations(self, markup: str, lines: LineIndex) -> list[Diagnostic]:
        ...

    def _diagnostic(self, message: str, lines: LineIndex, tag: TagMatch | None = None) -> Diagnostic:
        if tag is None:
            return Diagnostic(rule=self.id, message=message)
        return Diagnostic(rule=self.id, message=message, fragment=tag.raw, line=lines.line_of(tag.start))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class SkipLinkRule(FocusRule):
    """The first focusable element must be a visually hidden skip link."""

    id = "skip-link"
    title = "Skip to main content"
    wcag = "WCAG 2.1 SC 2.4.1 Bypass Blocks"

    def __init__(
        self,
        hidden_classes: tuple[str, ...] | list[str] = DEFAULT_HIDDEN_CLASSES,
        skip_text: str = DEFAULT_SKIP_TEXT,
    ):
        self.hidden_classes = tuple(c.lower() for c in hidden_classes)
        self.skip_text = skip_text
        self._focusable = TagMatcher(FOCUSABLE_TAGS)
        self._anchor_content = ContentMatcher("a")

    def __repr__(self) -> str:
        return f"SkipLinkRule(hidden_classes={self.hidden_classes!r}, skip_text={self.skip_text!r})"

    def is_skip_link(self, markup: str, tag: TagMatch) -> bool:
        if tag.name != "a":
            return False
        classes = (attribute_value(tag.attrs, "class") or "").lower()
        if not any(token in classes for token in self.hidden_classes):
            return False
        content = self._anchor_content.content_after(markup, tag)
        return content is not None and self.skip_text.lower() in content.lower()

    def _violations(self, markup: str, lines: LineIndex) -> list[Diagnostic]:
        first = self._focusable.first(markup)
        if first is not None and self.is_skip_link(markup, first):
            return []
        return [
            self._diagnostic(
                f'"{self.skip_text}" link is missing or not the first focusable element.',
                lines,
                first,
            )
        ]


class FocusIndicatorRule(FocusRule):
    """Keyboard-operable elements must carry an outline or border hint."""

    id = "focus-indicator"
    title = "Focus indicator"
    wcag = "WCAG 2.1 SC 2.4.7 Focus Visible"

    tokens = ("outline", "border")

    def __init__(self) -> None:
        self._elements = TagMatcher(("button", "a", "input", "select", "textarea"))

    def _violations(self, markup: str, lines: LineIndex) -> list[Diagnostic]:
        results = []
        for tag in self._elements.finditer(markup):
            if not any(has_token(tag.attrs, token) for token in self.tokens):
                results.append(
                    self._diagnostic(f"Element {tag.raw} may lack a visible focus indicator.", lines, tag)
                )
        return results


class KeyboardAccessibleRule(FocusRule):
    """Clickable elements must declare an explicit tabindex."""

    id = "keyboard-accessible"
    title = "Keyboard accessible"
    wcag = "WCAG 2.1 SC 2.1.1 Keyboard"

    def __init__(self) -> None:
        self._elements = TagMatcher(CLICKABLE_TAGS)

    def _violations(self, markup: str, lines: LineIndex) -> list[Diagnostic]:
        results = []
        for tag in self._elements.finditer(markup):
            if integer_attribute(tag.attrs, "tabindex") is None:
                results.append(
                    self._diagnostic(f"Clickable element {tag.raw} is not keyboard accessible.", lines, tag)
                )
        return results


class FocusOrderRule(FocusRule):
    """Effective tabindex values must not decrease in document order.

    A missing, negative or non-integer tabindex counts as 0.
    """

    id = "focus-order"
    title = "Focus order"
    wcag = "WCAG 2.1 SC 2.4.3 Focus Order"

    def __init__(self) -> None:
        self._elements = TagMatcher(ORDERED_TAGS)

    @staticmethod
    def effective_index(tag: TagMatch) -> int:
        value = integer_attribute(tag.attrs, "tabindex")
        if value is None or value < 0:
            return 0
        return value

    def _violations(self, markup: str, lines: LineIndex) -> list[Diagnostic]:
        previous: int | None = None
        for tag in self._elements.finditer(markup):
            index = self.effective_index(tag)
            if previous is not None and index < previous:
                # One diagnostic per document, anchored at the first inversion.
                return [self._diagnostic("Focus order is not logical or meaningful.", lines, tag)]
            previous = index
        return []


class FocusTrapRule(FocusRule):
    """Every dialog must contain at least one focusable element."""

    id = "focus-trap"
    title = "Focus trap prevention"
    wcag = "WCAG 2.1 SC 2.1.2 No Keyboard Trap"

    def __init__(self) -> None:
        self._divs = TagMatcher(("div",))
        self._div_content = ContentMatcher("div")
        self._focusable = TagMatcher(FOCUSABLE_TAGS)

    @staticmethod
    def is_dialog(tag: TagMatch) -> bool:
        role = attribute_value(tag.attrs, "role")
        return role is not None and role.lower() == "dialog"

    def _violations(self, markup: str, lines: LineIndex) -> list[Diagnostic]:
        results = []
        for tag, content in self._div_content.elements(markup, self._divs, where=self.is_dialog):
            if not self._focusable.search(content):
                results.append(
                    self._diagnostic(
                        "Modal/dialog lacks focusable elements, causing a potential focus trap.",
                        lines,
                        tag,
                    )
                )
        return results


# Canonical evaluation order
RULE_TYPES: dict[str, type[FocusRule]] = {
    SkipLinkRule.id: SkipLinkRule,
    FocusIndicatorRule.id: FocusIndicatorRule,
    KeyboardAccessibleRule.id: KeyboardAccessibleRule,
    FocusOrderRule.id: FocusOrderRule,
    FocusTrapRule.id: FocusTrapRule,
}


class UnknownRuleError(ValueError):
    """Raised when a rule id is not registered."""

    def __init__(self, rule_id: str):
        self.rule_id = rule_id
        super().__init__(f"Unknown rule: {rule_id!r} (known: {', '.join(get_rule_ids())})")


def get_rule_ids() -> list[str]:
    """Rule ids in canonical order."""
    return list(RULE_TYPES)


def get_rule(rule_id: str) -> type[FocusRule]:
    try:
        return RULE_TYPES[rule_id.lower().strip()]
    except KeyError:
        raise UnknownRuleError(rule_id) from None


def default_rules() -> list[FocusRule]:
    return [rule_type() for rule_type in RULE_TYPES.values()]


RULE_EXPLANATIONS: dict[str, str] = {
    "skip-link": """
# skip-link

The first focusable element (`a`, `button`, `input`, `textarea`, `select`) in
document order must be a "Skip to main content" link.

A skip link is an `a` element whose `class` contains a visually-hidden token
(`sr-only` or `visually-hidden` by default) and whose text contains
"Skip to main content".

Markup with no focusable element at all fails: nothing can be first.

**Reference**: WCAG 2.1 SC 2.4.1 Bypass Blocks
""",
    "focus-indicator": """
# focus-indicator

Every `button`, `a`, `input`, `select` and `textarea` must carry the word
`outline` or `border` somewhere in its attributes.

Only inline hints are seen. Stylesheet rules are not resolved, and
`outline:none` still counts as a hint.

**Reference**: WCAG 2.1 SC 2.4.7 Focus Visible
""",
    "keyboard-accessible": """
# keyboard-accessible

Every `button`, `a`, `input` and `select` must declare a quoted integer
`tabindex` (negative values included).

Natively focusable elements are held to the same convention so that focus
management is explicit and auditable.

**Reference**: WCAG 2.1 SC 2.1.1 Keyboard
""",
    "focus-order": """
# focus-order

Collect `button`, `a`, `input`, `select`, `textarea` and `div` elements in
document order. Their effective tabindex (0 when absent or negative) must never
decrease.

One diagnostic is reported per document, at the first inversion.

**Reference**: WCAG 2.1 SC 2.4.3 Focus Order
""",
    "focus-trap": """
# focus-trap

Every `div` with `role="dialog"` must contain a focusable element before the
next closing `</div>`.

The capture is not nesting-aware: a nested `div` ends it early.

**Reference**: WCAG 2.1 SC 2.1.2 No Keyboard Trap
""",
}
