"""
Replay command: run an action script through the reconciler
"""

import json
from typing import Any, Optional

import typer
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from optimist.config import ReconcilerConfig
from optimist.core.canonical import canonicalize, state_hash
from optimist.core.errors import OptimistError
from optimist.reconciler import Reconciler
from optimist.replay import read_actions, replay

from cli.reducers import REDUCERS

console = Console()


def parse_initial(raw: Optional[str]) -> Any:
    """Parse --initial as JSON; None when not given."""
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except ValueError as ex:
        raise OptimistError(f"--initial is not valid JSON: {ex}") from ex


def build_reconciler(reducer_name: str, strict: bool) -> Reconciler:
    if reducer_name not in REDUCERS:
        raise OptimistError(
            f"unknown reducer {reducer_name!r} (choose from: {', '.join(sorted(REDUCERS))})"
        )
    base = ReconcilerConfig.from_env()
    config = ReconcilerConfig(strict=strict or base.strict, log_key=base.log_key)
    return Reconciler(REDUCERS[reducer_name], config)


def replay_command(
    actions_path: str = typer.Option(..., "--actions", "-a", help="Path to JSONL action script"),
    reducer_name: str = typer.Option("set", "--reducer", "-r", help="Domain reducer: set, counter, merge"),
    initial: Optional[str] = typer.Option(None, "--initial", "-i", help="Initial domain state as JSON"),
    until: Optional[int] = typer.Option(None, "--until", "-u", help="Stop after N actions"),
    strict: bool = typer.Option(False, "--strict", help="Fail on COMMIT/REVERT of unknown transactions"),
    show_log: bool = typer.Option(False, "--show-log", "-s", help="Show the final transaction log"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Replay an action script and print the final state.

    Examples:
        optimist replay --actions script.jsonl
        optimist replay --actions script.jsonl --reducer counter --initial 10
        optimist replay --actions script.jsonl --show-log --json
    """
    try:
        reconciler = build_reconciler(reducer_name, strict)
        result = replay(read_actions(actions_path), reconciler, parse_initial(initial), until=until)
    except FileNotFoundError:
        if json_output:
            print(json.dumps({"error": "Action file not found", "path": actions_path}))
        else:
            console.print(f"[red]Error: Action file not found:[/red] {actions_path}")
        raise typer.Exit(2)
    except OptimistError as e:
        if json_output:
            print(json.dumps({"error": str(e)}))
        else:
            console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    final = result.state
    pending = final.log.pending_ids()

    if json_output:
        output = {
            "success": True,
            "actions_applied": result.applied,
            "domain_state": canonicalize(final.domain_state),
            "state_hash": state_hash(final),
            "log_size": len(final.log),
            "pending": pending,
        }
        if show_log:
            output["log"] = canonicalize(final.log)
        print(json.dumps(output, indent=2))
        return

    console.print(f"[green]✓ Replayed {result.applied} actions successfully[/green]")
    console.print(f"  Log size: [cyan]{len(final.log)}[/cyan]")
    console.print(f"  Pending: [yellow]{', '.join(str(p) for p in pending) or 'none'}[/yellow]")
    console.print(f"  State hash: [dim]{state_hash(final)}[/dim]")
    console.print("\n[bold]Domain State:[/bold]")
    console.print(Syntax(json.dumps(canonicalize(final.domain_state), indent=2), "json", theme="monokai"))

    if show_log:
        table = Table(title="Transaction Log")
        table.add_column("#", style="cyan", justify="right")
        table.add_column("Type", style="green")
        table.add_column("Marker", style="yellow")
        table.add_column("Snapshot", style="dim")
        for idx, entry in enumerate(final.log):
            marker = entry.action.transaction
            table.add_row(
                str(idx),
                entry.action.type,
                f"{marker.to_dict()['kind']} {marker.id}" if marker else "-",
                json.dumps(canonicalize(entry.snapshot)) if entry.has_snapshot else "-",
            )
        console.print(table)
