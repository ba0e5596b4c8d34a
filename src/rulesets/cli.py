"""rulesets CLI — Typer application with check, list, and init commands."""

from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any, List, NoReturn, Optional, Type

import typer
from rich.console import Console

from rulesets import __version__
from rulesets.config.schema import RulesetsConfig

app = typer.Typer(
    name="rulesets",
    help="Evaluate business-rule sets against a subject.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)


def _fail(label: str, exc: BaseException) -> NoReturn:
    console.print(f"[bold red]{label}:[/bold red] {exc}")
    raise typer.Exit(code=2) from exc


def _import_modules(modules: List[str]) -> None:
    for module in modules:
        try:
            importlib.import_module(module)
        except ImportError as exc:
            _fail("Cannot import rule module", exc)


def _prepare(
    config: Optional[str],
    modules: List[str],
    verbose: bool,
) -> RulesetsConfig:
    """Load config, configure logging, import rules and YAML declarations."""
    from rulesets.config.loader import ConfigError, load_config
    from rulesets.log import configure_logging
    from rulesets.rules.registry import DeclarationError, default_registry

    root = Path.cwd()
    try:
        cfg = load_config(root, config)
    except ConfigError as exc:
        _fail("Config error", exc)

    configure_logging("debug" if verbose else cfg.logging.level, cfg.logging.format)

    _import_modules([*cfg.rules.modules, *modules])

    try:
        default_registry.load_declarations(root / cfg.rules.declarations)
    except DeclarationError as exc:
        _fail("Declaration error", exc)

    return cfg


def _resolve_ruleset(name: str) -> Type[Any]:
    from rulesets.rules.registry import UnknownRuleError, default_registry
    from rulesets.rules.ruleset import Ruleset

    try:
        found = default_registry.resolve(name)
    except UnknownRuleError as exc:
        _fail("Unknown ruleset", exc)
    if not issubclass(found, Ruleset):
        console.print(f"[bold red]Not a ruleset:[/bold red] {name} is a single rule")
        raise typer.Exit(code=2)
    return found


# ── check ─────────────────────────────────────────────────────────────────────


@app.command()
def check(
    name: str = typer.Argument(..., help="Registered ruleset identifier"),
    subject: Optional[Path] = typer.Option(None, "--subject", "-s", help="Subject file: JSON, YAML or TOML"),
    module: List[str] = typer.Option([], "--module", "-m", help="Import this module to register rules"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .rulesets.toml"),
    force: Optional[bool] = typer.Option(None, "--force/--no-force", help="Count forceable rules as passed"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json"),
    fail_on_not_applicable: Optional[bool] = typer.Option(
        None, "--fail-on-not-applicable/--allow-not-applicable",
        help="Fail when the ruleset does not apply",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Evaluate a ruleset against a subject. Exit 1 when it is not satisfied."""
    from rulesets.evaluation.engine import evaluate
    from rulesets.output import json_report, terminal
    from rulesets.rules.registry import UnknownRuleError
    from rulesets.rules.ruleset import EmptyRuleset
    from rulesets.subject import SubjectError, load_subject

    cfg = _prepare(config, module, verbose)

    # --- CLI overrides ---
    if format:
        if format not in ("terminal", "json"):
            console.print(f"[bold red]Invalid format:[/bold red] {format}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]
    if force is not None:
        cfg.evaluation.force = force
    if fail_on_not_applicable is not None:
        cfg.evaluation.fail_on_not_applicable = fail_on_not_applicable

    ruleset_type = _resolve_ruleset(name)

    try:
        data = load_subject(subject)
    except SubjectError as exc:
        _fail("Subject error", exc)

    # --- Build and evaluate ---
    try:
        ruleset = ruleset_type(data)
        verdict = evaluate(
            ruleset,
            force=cfg.evaluation.force,
            fail_on_not_applicable=cfg.evaluation.fail_on_not_applicable,
        )
    except EmptyRuleset as exc:
        _fail("Empty ruleset", exc)
    except UnknownRuleError as exc:
        _fail("Unknown rule", exc)
    except NotImplementedError as exc:
        _fail("Incomplete rule", exc)

    # --- Output ---
    if cfg.output.format == "json":
        print(json_report.render(verdict))
    else:
        terminal.render(verdict, show_summary=cfg.output.show_summary)

    raise typer.Exit(code=0 if verdict.passed else 1)


# ── list ──────────────────────────────────────────────────────────────────────


@app.command("list")
def list_rules(
    name: Optional[str] = typer.Argument(None, help="Ruleset to show; omit to list identifiers"),
    module: List[str] = typer.Option([], "--module", "-m", help="Import this module to register rules"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .rulesets.toml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Show registered identifiers, or the declared tree of one ruleset."""
    from rulesets.output import terminal
    from rulesets.rules.registry import UnknownRuleError, default_registry

    _prepare(config, module, verbose)

    if name is None:
        if not len(default_registry):
            console.print("[dim]No rules registered.[/dim]")
            raise typer.Exit(code=0)
        for identifier in default_registry.names:
            print(identifier)
        raise typer.Exit(code=0)

    ruleset_type = _resolve_ruleset(name)
    try:
        terminal.render_tree(ruleset_type)
    except UnknownRuleError as exc:
        _fail("Unknown rule", exc)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .rulesets.toml in the current directory."""
    from rulesets.config.defaults import DEFAULT_TOML
    from rulesets.config.loader import CONFIG_FILENAME

    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {config_path}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {config_path}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"rulesets {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """rulesets — evaluate business-rule sets against a subject."""
