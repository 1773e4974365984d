from __future__ import annotations

from pathlib import Path

import pytest

from focuslint.config import (
    CONFIG_FILENAME,
    CheckConfig,
    ConfigError,
    build_rules,
    find_config,
    load_config,
)
from focuslint.rules import SkipLinkRule, get_rule_ids


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_default_config_selects_all_rules() -> None:
    rules = build_rules(CheckConfig())

    assert [r.id for r in rules] == get_rule_ids()


def test_enable_keeps_canonical_order(tmp_path: Path) -> None:
    path = _write(
        tmp_path / CONFIG_FILENAME,
        """
[rules]
enable = ["focus-trap", "skip-link"]
""",
    )

    config = load_config(path)

    assert config.source == path
    assert [r.id for r in build_rules(config)] == ["skip-link", "focus-trap"]


def test_disable_and_rule_options(tmp_path: Path) -> None:
    path = _write(
        tmp_path / CONFIG_FILENAME,
        """
[rules]
disable = ["keyboard-accessible", "focus-indicator"]

[rules.skip-link]
hidden_classes = ["offscreen"]
skip_text = "Skip navigation"
""",
    )

    rules = build_rules(load_config(path))

    assert [r.id for r in rules] == ["skip-link", "focus-order", "focus-trap"]
    skip = rules[0]
    assert isinstance(skip, SkipLinkRule)
    assert skip.hidden_classes == ("offscreen",)
    assert skip.skip_text == "Skip navigation"


@pytest.mark.parametrize(
    "text",
    [
        '[rules]\nenable = ["color-contrast"]\n',
        '[rules]\ndisable = "focus-trap"\n',
        "[rules.focus-trap]\nstrict = true\n",
        "[rules.skip-link]\nskip_text = 3\n",
        '[rules.skip-link]\nhidden_classes = ["ok", 1]\n',
        "[rules.unknown-rule]\n",
        "rules = 1\n",
        "[rules\n",
    ],
)
def test_invalid_config_raises(tmp_path: Path, text: str) -> None:
    path = _write(tmp_path / CONFIG_FILENAME, text)

    with pytest.raises(ConfigError) as excinfo:
        load_config(path)

    assert str(excinfo.value).startswith(f"{path}: ")


def test_overrides_merge() -> None:
    config = CheckConfig(disable=("focus-order",)).with_overrides(
        enable=["Focus-Trap", "focus-order"],
        disable=["keyboard-accessible"],
    )

    assert config.enable == ("focus-trap", "focus-order")
    assert config.disable == ("focus-order", "keyboard-accessible")
    assert config.selected_rule_ids == ["focus-trap"]

    with pytest.raises(ConfigError):
        CheckConfig().with_overrides(disable=["nope"])


def test_find_config_walks_up(tmp_path: Path) -> None:
    path = _write(tmp_path / CONFIG_FILENAME, "[rules]\n")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)

    assert find_config(nested) == path.resolve()


def test_find_config_missing(tmp_path: Path) -> None:
    nested = tmp_path / "empty"
    nested.mkdir()

    found = find_config(nested)

    # Nothing in tmp_path; any hit must come from outside the test tree
    assert found is None or tmp_path not in found.parents
