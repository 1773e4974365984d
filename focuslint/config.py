"""Rule selection and per-rule options loaded from TOML.

The schema is intentionally small: which rules run, and options for the rules
that take any.

    [rules]
    enable = ["skip-link", "focus-trap"]
    disable = ["keyboard-accessible"]

    [rules.skip-link]
    hidden_classes = ["sr-only", "visually-hidden"]
    skip_text = "Skip to main content"
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Iterable

from .rules import RULE_TYPES, FocusRule, SkipLinkRule, UnknownRuleError, get_rule, get_rule_ids

CONFIG_FILENAME = "focuslint.toml"

# Options each rule accepts, mapped to their expected type
RULE_OPTIONS: dict[str, dict[str, type]] = {
    SkipLinkRule.id: {"hidden_classes": list, "skip_text": str},
}


class ConfigError(ValueError):
    """Raised for an invalid configuration file or selection."""


@dataclass(frozen=True)
class CheckConfig:
    enable: tuple[str, ...] | None = None
    disable: tuple[str, ...] = ()
    options: dict[str, dict[str, Any]] = field(default_factory=dict)
    source: Path | None = None

    def with_overrides(
        self,
        enable: Iterable[str] | None = None,
        disable: Iterable[str] | None = None,
    ) -> CheckConfig:
        """Merge CLI selections: ``enable`` replaces, ``disable`` accumulates."""
        new_enable = self.enable
        if enable:
            new_enable = _rule_ids(enable, "enable")
        new_disable = self.disable
        if disable:
            new_disable = tuple(dict.fromkeys((*self.disable, *_rule_ids(disable, "disable"))))
        return replace(self, enable=new_enable, disable=new_disable)

    @property
    def selected_rule_ids(self) -> list[str]:
        """Rule ids to run, always in canonical order."""
        wanted = set(self.enable) if self.enable is not None else set(get_rule_ids())
        wanted -= set(self.disable)
        return [rid for rid in get_rule_ids() if rid in wanted]


def _rule_ids(values: Iterable[Any], key: str) -> tuple[str, ...]:
    ids = []
    for value in values:
        if not isinstance(value, str):
            raise ConfigError(f"rules.{key} must be a list of rule ids")
        try:
            ids.append(get_rule(value).id)
        except UnknownRuleError as exc:
            raise ConfigError(str(exc)) from None
    return tuple(ids)


def _coerce_options(rule_id: str, raw: dict[str, Any]) -> dict[str, Any]:
    allowed = RULE_OPTIONS.get(rule_id, {})
    options: dict[str, Any] = {}
    for key, value in raw.items():
        expected = allowed.get(key)
        if expected is None:
            raise ConfigError(f"rules.{rule_id}: unknown option {key!r}")
        if not isinstance(value, expected):
            raise ConfigError(f"rules.{rule_id}.{key} must be a {expected.__name__}")
        if expected is list:
            if not all(isinstance(v, str) for v in value):
                raise ConfigError(f"rules.{rule_id}.{key} must be a list of strings")
            value = tuple(value)
        options[key] = value
    return options


def parse_config(data: dict[str, Any], source: Path | None = None) -> CheckConfig:
    rules = data.get("rules", {})
    if not isinstance(rules, dict):
        raise ConfigError("[rules] must be a table")

    enable: tuple[str, ...] | None = None
    disable: tuple[str, ...] = ()
    options: dict[str, dict[str, Any]] = {}

    for key, value in rules.items():
        if key in ("enable", "disable"):
            if not isinstance(value, list):
                raise ConfigError(f"rules.{key} must be a list of rule ids")
            if key == "enable":
                enable = _rule_ids(value, key)
            else:
                disable = _rule_ids(value, key)
            continue
        if key not in RULE_TYPES:
            raise ConfigError(f"Unknown rule: {key!r} (known: {', '.join(get_rule_ids())})")
        if not isinstance(value, dict):
            raise ConfigError(f"[rules.{key}] must be a table")
        options[key] = _coerce_options(key, value)

    return CheckConfig(enable=enable, disable=disable, options=options, source=source)


def load_config(path: Path) -> CheckConfig:
    """Load a configuration file."""
    import tomllib

    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"{path}: {exc}") from exc
    try:
        return parse_config(data, source=path)
    except ConfigError as exc:
        raise ConfigError(f"{path}: {exc}") from exc


def find_config(start: Path) -> Path | None:
    """Find ``focuslint.toml`` by walking up from ``start``."""
    cur = start.resolve()
    for p in (cur, *cur.parents):
        candidate = p / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def build_rules(config: CheckConfig | None = None) -> list[FocusRule]:
    """Instantiate the selected rules in canonical order."""
    config = config or CheckConfig()
    return [get_rule(rid)(**config.options.get(rid, {})) for rid in config.selected_rule_ids]
