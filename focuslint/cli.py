"""CLI entrypoint for focuslint."""

import logging
import sys
from pathlib import Path

import click

from . import __version__
from .rules import get_rule_ids


def _setup_logging() -> None:
    from rich.console import Console
    from rich.logging import RichHandler

    logging.basicConfig(
        level=logging.DEBUG,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(__version__, prog_name="focuslint")
@click.option("--verbose", "-v", is_flag=True, help="Log rule verdicts and diagnostics to stderr")
@click.pass_context
def cli(ctx: click.Context, verbose: bool) -> None:
    """focuslint - Keyboard-focus accessibility checks for rendered markup.

    Scans serialized markup lexically for a skip link, focus indicators,
    explicit tabindex, monotonic focus order and dialogs without focus traps.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    if verbose:
        _setup_logging()


@cli.command()
@click.argument(
    "paths",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, allow_dash=True, path_type=Path),
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to focuslint.toml (defaults to the nearest one above the working directory)",
)
@click.option(
    "--rule",
    "enable",
    multiple=True,
    type=click.Choice(get_rule_ids(), case_sensitive=False),
    metavar="RULE_ID",
    help="Only run this rule (repeatable)",
)
@click.option(
    "--skip",
    "disable",
    multiple=True,
    type=click.Choice(get_rule_ids(), case_sensitive=False),
    metavar="RULE_ID",
    help="Do not run this rule (repeatable)",
)
@click.option("--json", "output_json", is_flag=True, help="Output results as JSON")
@click.option("--quiet", "-q", is_flag=True, help="Only print failing documents and the summary")
@click.pass_context
def check(
    ctx: click.Context,
    paths: tuple[Path, ...],
    config_path: Path | None,
    enable: tuple[str, ...],
    disable: tuple[str, ...],
    output_json: bool,
    quiet: bool,
) -> None:
    """Check markup files for focus accessibility violations.

    PATHS may be files, directories (searched for *.html and *.htm) or - for stdin.
    Exits with status 1 when any document fails a rule.
    """
    from .commands.check import run_check

    exit_code = run_check(
        [str(p) for p in paths],
        config_path=config_path,
        enable=enable,
        disable=disable,
        output_json=output_json,
        quiet=quiet,
        verbose=ctx.obj.get("verbose", False),
    )
    sys.exit(exit_code)


@cli.command("rules")
def list_rules() -> None:
    """List the focus rules in evaluation order."""
    from .commands.check import run_list_rules

    sys.exit(run_list_rules())


@cli.command()
@click.argument("rule_id")
def explain(rule_id: str) -> None:
    """Explain a focus rule (e.g., focuslint explain focus-trap)."""
    from .commands.check import run_explain

    sys.exit(run_explain(rule_id))


def main() -> None:
    """Main entrypoint."""
    cli()


if __name__ == "__main__":
    main()
