"""
Transaction log commands: trace
"""

import json
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from optimist.core.canonical import canonicalize, canonical_json_str
from optimist.core.errors import OptimistError
from optimist.replay import read_actions
from optimist.state import split_state

from cli.commands.replay import build_reconciler, parse_initial

app = typer.Typer()
console = Console()


@app.command()
def trace(
    actions_path: str = typer.Option(..., "--actions", "-a", help="Path to JSONL action script"),
    reducer_name: str = typer.Option("set", "--reducer", "-r", help="Domain reducer: set, counter, merge"),
    initial: Optional[str] = typer.Option(None, "--initial", "-i", help="Initial domain state as JSON"),
    strict: bool = typer.Option(False, "--strict", help="Fail on COMMIT/REVERT of unknown transactions"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Show log size, pending transactions and domain state after every action.

    Examples:
        optimist log trace --actions script.jsonl
        optimist log trace --actions script.jsonl --reducer merge --json
    """
    steps = []
    try:
        reconciler = build_reconciler(reducer_name, strict)
        state = split_state(parse_initial(initial), reconciler.config.log_key)
        for action in read_actions(actions_path):
            state = reconciler(state, action)
            marker = action.transaction
            steps.append(
                {
                    "seq": len(steps),
                    "type": action.type,
                    "marker": marker.to_dict() if marker else None,
                    "log_size": len(state.log),
                    "pending": state.log.pending_ids(),
                    "domain_state": canonicalize(state.domain_state),
                }
            )
    except FileNotFoundError:
        if json_output:
            print(json.dumps({"error": "Action file not found", "path": actions_path}))
        else:
            console.print(f"[red]Error: Action file not found:[/red] {actions_path}")
        raise typer.Exit(2)
    except OptimistError as e:
        if json_output:
            print(json.dumps({"error": str(e), "applied": len(steps)}))
        else:
            console.print(f"[red]Error after {len(steps)} actions:[/red] {e}")
        raise typer.Exit(2)

    if json_output:
        print(json.dumps({"steps": steps, "count": len(steps)}, indent=2))
        return

    if not steps:
        console.print("[yellow]Action script is empty[/yellow]")
        return

    table = Table(title=f"Trace: {actions_path}")
    table.add_column("Seq", style="cyan", justify="right")
    table.add_column("Type", style="green")
    table.add_column("Marker", style="yellow")
    table.add_column("Log", justify="right")
    table.add_column("Pending", style="magenta")
    table.add_column("Domain State", style="dim")

    for step in steps:
        marker = step["marker"]
        table.add_row(
            str(step["seq"]),
            step["type"],
            f"{marker['kind']} {marker['id']}" if marker else "-",
            str(step["log_size"]),
            ", ".join(str(p) for p in step["pending"]) or "-",
            canonical_json_str(step["domain_state"]),
        )

    console.print(table)
    console.print(f"\n[bold]Total actions:[/bold] {len(steps)}")
