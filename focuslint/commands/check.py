"""Check command implementation."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..config import CheckConfig, ConfigError, build_rules, find_config, load_config
from ..engine import CheckReport, FocusChecker
from ..rules import RULE_EXPLANATIONS, RULE_TYPES, get_rule_ids
from ..sinks import CollectingSink, LoggingSink

MARKUP_SUFFIXES = {".html", ".htm"}
STDIN = "-"


@dataclass
class DocumentReport:
    path: str
    report: CheckReport

    def to_dict(self) -> dict:
        return {"path": self.path, **self.report.to_dict()}


def collect_documents(paths: Iterable[str | Path]) -> list[str]:
    """Expand directories into sorted markup files; keep files and ``-`` as given."""
    documents: list[str] = []
    for raw in paths:
        if str(raw) == STDIN:
            documents.append(STDIN)
            continue
        path = Path(raw)
        if path.is_dir():
            documents.extend(
                str(p) for p in sorted(path.rglob("*")) if p.is_file() and p.suffix.lower() in MARKUP_SUFFIXES
            )
        else:
            documents.append(str(path))
    return documents


def read_document(document: str) -> str:
    if document == STDIN:
        return sys.stdin.read()
    try:
        return Path(document).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise click.FileError(document, hint=str(exc)) from exc


def resolve_config(config_path: Path | None) -> CheckConfig:
    """Load ``config_path``, or an auto-detected ``focuslint.toml``, or defaults."""
    path = config_path or find_config(Path.cwd())
    if path is None:
        return CheckConfig()
    try:
        return load_config(path)
    except ConfigError as exc:
        if config_path is None:
            raise click.UsageError(f"Invalid auto-detected configuration {exc}") from exc
        raise click.BadParameter(str(exc), param_hint="--config") from exc


def run_check(
    paths: Iterable[str | Path],
    config_path: Path | None = None,
    enable: Iterable[str] | None = None,
    disable: Iterable[str] | None = None,
    output_json: bool = False,
    quiet: bool = False,
    verbose: bool = False,
) -> int:
    """Check markup documents for focus accessibility violations.

    Args:
        paths: Files, directories (searched for *.html / *.htm) or "-" for stdin
        config_path: Explicit config file (defaults to an auto-detected focuslint.toml)
        enable: Only run these rules
        disable: Skip these rules
        output_json: Output results as JSON instead of human-readable
        quiet: Only print failing documents and the summary
        verbose: Also log each diagnostic as it is recorded

    Returns:
        Exit code (0 = all documents pass, 1 = violations found)
    """
    console = Console(stderr=True)

    try:
        config = resolve_config(config_path).with_overrides(enable=enable, disable=disable)
    except ConfigError as exc:
        raise click.BadParameter(str(exc)) from exc

    rules = build_rules(config)
    documents = collect_documents(paths)
    if not documents:
        console.print("No markup documents found.", style="yellow")
        return 0

    reports: list[DocumentReport] = []
    for document in documents:
        markup = read_document(document)
        sink = LoggingSink(source=document) if verbose else CollectingSink()
        report = FocusChecker(rules=rules, sink=sink).run(markup)
        reports.append(DocumentReport(path=document, report=report))

    if output_json:
        _output_json(reports, [r.id for r in rules])
    else:
        _print_human_output(console, reports, quiet=quiet)

    return 0 if all(r.report.passed for r in reports) else 1


def _output_json(reports: list[DocumentReport], rule_ids: list[str]) -> None:
    failed = sum(1 for r in reports if not r.report.passed)
    output = {
        "rules": rule_ids,
        "documents": [r.to_dict() for r in reports],
        "summary": {
            "documents": len(reports),
            "passed": len(reports) - failed,
            "failed": failed,
            "diagnostics": sum(len(r.report.diagnostics) for r in reports),
        },
    }
    print(json.dumps(output, indent=2))


def _print_human_output(console: Console, reports: list[DocumentReport], quiet: bool = False) -> None:
    """Print per-document results grouped by rule."""
    for doc in reports:
        report = doc.report
        if report.passed:
            if not quiet:
                console.print(f"✓ {escape(doc.path)}", style="bold green")
                console.print(f"  ✓ All {len(report.results)} rule(s) passing", style="dim green")
            continue

        console.print()
        console.print(f"✗ {escape(doc.path)}", style="bold red")
        for result in report.results:
            if result.passed:
                if not quiet:
                    console.print(f"  ✓ {result.rule}", style="dim green")
                continue
            rule_type = RULE_TYPES.get(result.rule)
            reference = f" ({rule_type.wcag})" if rule_type and rule_type.wcag else ""
            console.print(f"  ✗ Rule: {result.rule}{escape(reference)}", style="bold")
            for d in result.diagnostics:
                prefix = {"error": "ERROR", "warning": "WARN"}.get(d.level, "INFO")
                style = {"error": "bold red", "warning": "yellow"}.get(d.level, "dim")
                loc = f"line {d.line}: " if d.line else ""
                console.print(f"    {prefix}: {loc}{escape(d.message)}", style=style, soft_wrap=True)

    failed = [r for r in reports if not r.report.passed]
    total = sum(len(r.report.diagnostics) for r in reports)
    console.print()
    if failed:
        console.print(
            f"❌ {len(failed)} of {len(reports)} document(s) failed ({total} diagnostic(s))",
            style="bold red",
        )
    else:
        console.print(f"✅ {len(reports)} document(s) passed", style="bold green")


def run_list_rules() -> int:
    """Print the registered rules in evaluation order."""
    console = Console()

    table = Table(title="Focus Rules")
    table.add_column("#", justify="right", style="dim", no_wrap=True)
    table.add_column("Rule", style="cyan", no_wrap=True)
    table.add_column("Title")
    table.add_column("Reference", style="dim")

    for i, rule_id in enumerate(get_rule_ids(), start=1):
        rule_type = RULE_TYPES[rule_id]
        table.add_row(str(i), rule_id, rule_type.title, rule_type.wcag)

    console.print(table)
    return 0


def run_explain(rule_id: str) -> int:
    """Explain a specific focus rule.

    Args:
        rule_id: Rule ID to explain

    Returns:
        Exit code (0 = success, 1 = rule not found)
    """
    from rich.markdown import Markdown

    console = Console()

    rule_id = rule_id.lower().strip()

    if rule_id not in RULE_EXPLANATIONS:
        console.print(f"Unknown rule: {escape(rule_id)}", style="bold red")
        console.print()
        console.print("Known rules:", style="bold")
        for rid in get_rule_ids():
            console.print(f"  - {rid}")
        return 1

    console.print(Markdown(RULE_EXPLANATIONS[rule_id]))
    return 0
