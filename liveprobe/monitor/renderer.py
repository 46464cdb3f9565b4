"""Rich terminal rendering for liveness results and inspection snapshots.

Color scheme
------------
- green     : MATCH_FOUND
- yellow    : TIMED_OUT
- bold red  : NOT_RUNNING
- dim       : aborted (no outcome)
"""

from __future__ import annotations

from rich.panel import Panel
from rich.table import Table

from liveprobe.models.inspection import InspectionSnapshot
from liveprobe.models.outcome import Outcome, ProbeResult

_OUTCOME_LABELS: dict[Outcome, str] = {
    Outcome.MATCH_FOUND: "[bold green]LIVE[/bold green]",
    Outcome.TIMED_OUT: "[bold yellow]TIMED OUT[/bold yellow]",
    Outcome.NOT_RUNNING: "[bold red]NOT RUNNING[/bold red]",
}

_OUTCOME_BORDERS: dict[Outcome, str] = {
    Outcome.MATCH_FOUND: "green",
    Outcome.TIMED_OUT: "yellow",
    Outcome.NOT_RUNNING: "red",
}


def render_snapshot(snapshot: InspectionSnapshot) -> Table:
    """Render a single inspection as a two-column table."""
    table = Table(show_header=True, header_style="bold cyan", expand=True)
    table.add_column("Field", min_width=12)
    table.add_column("Value")

    running = "[green]yes[/green]" if snapshot.running else "[bold red]no[/bold red]"
    table.add_row("Target", snapshot.target)
    table.add_row("Running", running)
    table.add_row("Status", snapshot.status or "[dim]-[/dim]")
    table.add_row(
        "Exit code",
        str(snapshot.exit_code) if snapshot.exit_code is not None else "[dim]-[/dim]",
    )
    table.add_row(
        "Started",
        snapshot.started_at.strftime("%Y-%m-%d %H:%M:%S %Z").strip()
        if snapshot.started_at
        else "[dim]-[/dim]",
    )
    table.add_row(
        "Observed", snapshot.observed_at.strftime("%Y-%m-%d %H:%M:%S UTC")
    )
    return table


def render_result(result: ProbeResult) -> Panel:
    """Render a ProbeResult as a Rich Panel."""
    if result.outcome is None:
        label, border = "[dim]ABORTED[/dim]", "blue"
    else:
        label, border = _OUTCOME_LABELS[result.outcome], _OUTCOME_BORDERS[result.outcome]

    lines = [
        f"[bold]Outcome:[/bold]     {label}",
        f"[bold]Target:[/bold]      {result.target}",
    ]
    if result.probe is not None:
        lines.append(f"[bold]Looking for:[/bold] {result.probe.log_contains!r}")
        lines.append(
            f"[bold]Budget:[/bold]      {result.probe.poll_time}ms "
            f"every {result.probe.poll_interval}ms"
        )
    else:
        lines.append("[bold]Mode:[/bold]        running check")
    lines.append(f"[bold]Iterations:[/bold]  {result.iterations}")

    elapsed = (result.finished_at - result.started_at).total_seconds()
    lines.append(f"[bold]Elapsed:[/bold]     {elapsed:.1f}s")

    if result.last_inspection is not None:
        lines.append(f"[dim]Last inspection: {result.last_inspection.describe()}[/dim]")

    return Panel(
        "\n".join(lines),
        title="[bold]Liveness Probe[/bold]",
        border_style=border,
        padding=(1, 2),
    )
