"""Rich terminal reporter — outcome table, status pills, rule trees."""

from __future__ import annotations

from typing import Any, Type

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from rulesets.evaluation.models import Verdict
from rulesets.rules.ruleset import Ruleset, StrongRuleset

_STATUS_STYLE = {
    "satisfied": "bold black on green",
    "forced": "bold black on yellow",
    "not_applicable": "bold white on grey37",
    "unsatisfied": "bold white on red",
}

_STATUS_ICON = {
    "satisfied": "✅",
    "forced": "⚠️ ",
    "not_applicable": "➖",
    "unsatisfied": "❌",
}


def _status_pill(status: str) -> Text:
    style = _STATUS_STYLE.get(status, "")
    icon = _STATUS_ICON.get(status, "")
    return Text(f" {icon} {status.replace('_', ' ').upper()} ", style=style)


def _flag(value: bool) -> str:
    return "[green]yes[/green]" if value else "[red]no[/red]"


def render(verdict: Verdict, *, show_summary: bool = True) -> None:
    """Print a verdict to the terminal using Rich."""
    console = Console(stderr=True)

    console.print()
    kind = "strong ruleset" if verdict.strong else "ruleset"
    table = Table(
        title=f"{verdict.ruleset} ({kind})",
        show_lines=True,
        title_style="bold",
        border_style="dim",
    )
    table.add_column("Status", justify="center", width=18)
    table.add_column("Rule", style="cyan", min_width=20)
    table.add_column("Applicable", justify="center")
    table.add_column("Forceable", justify="center")
    table.add_column("Description")

    for outcome in verdict.outcomes:
        table.add_row(
            _status_pill(outcome.status),
            outcome.rule,
            _flag(outcome.applicable),
            _flag(outcome.forceable),
            outcome.description or "-",
        )

    console.print(table)

    if show_summary:
        _print_summary(console, verdict)

    console.print()
    if verdict.passed and verdict.forced_outcomes:
        console.print(
            f"[bold yellow]⚠️  {verdict.ruleset} satisfied by force "
            f"({len(verdict.forced_outcomes)} rule(s) forced).[/bold yellow]"
        )
    elif verdict.passed:
        console.print(f"[bold green]✅ {verdict.ruleset} is satisfied.[/bold green]")
    elif verdict.fail_on_not_applicable and not verdict.applicable:
        console.print(f"[bold red]❌ {verdict.ruleset} does not apply to this subject.[/bold red]")
    else:
        hint = " Forcing would satisfy it." if verdict.forceable and not verdict.force else ""
        console.print(f"[bold red]❌ {verdict.ruleset} is not satisfied.{hint}[/bold red]")


def _print_summary(console: Console, verdict: Verdict) -> None:
    console.print()
    console.print(f"[dim]Rules:[/dim]          {verdict.total_rules}")
    console.print(f"[dim]Unsatisfied:[/dim]    {len(verdict.unsatisfied_outcomes)}")
    console.print(f"[dim]Forced:[/dim]         {len(verdict.forced_outcomes)}")
    console.print(f"[dim]Not applicable:[/dim] {len(verdict.not_applicable_outcomes)}")
    console.print(f"[dim]Applicable:[/dim]     {'yes' if verdict.applicable else 'no'}")
    console.print(f"[dim]Forceable:[/dim]      {'yes' if verdict.forceable else 'no'}")
    console.print(f"[dim]Duration:[/dim]       {verdict.duration_ms:.0f}ms")


def _node_label(node_type: type) -> str:
    label = node_type.label()
    suffix = f" [dim]— {label}[/dim]" if label else ""
    if issubclass(node_type, StrongRuleset):
        return f"[bold magenta]{node_type.__name__}[/bold magenta] [dim](strong)[/dim]{suffix}"
    if issubclass(node_type, Ruleset):
        return f"[bold]{node_type.__name__}[/bold]{suffix}"
    return f"[cyan]{node_type.__name__}[/cyan]{suffix}"


def _add_children(tree: Tree, ruleset_type: Type[Ruleset[Any]]) -> None:
    for child in ruleset_type.rule_types():
        branch = tree.add(_node_label(child))
        if issubclass(child, Ruleset):
            _add_children(branch, child)


def build_tree(ruleset_type: Type[Ruleset[Any]]) -> Tree:
    """Rich Tree of the declared rule tree, resolved through its registry."""
    tree = Tree(_node_label(ruleset_type))
    _add_children(tree, ruleset_type)
    return tree


def render_tree(ruleset_type: Type[Ruleset[Any]]) -> None:
    Console().print(build_tree(ruleset_type))
