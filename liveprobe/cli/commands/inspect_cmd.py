"""``liveprobe inspect TARGET`` — show a container's current running state."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.panel import Panel

from liveprobe.config import settings
from liveprobe.core.errors import InspectionFailedError
from liveprobe.monitor.renderer import render_snapshot
from liveprobe.runtime.docker_cli import inspector_from_settings

console = Console()


def inspect_cmd(
    target: str = typer.Argument(
        ...,
        help="Container ID or name to inspect.",
    ),
) -> None:
    """Inspect a container once and print its state.

    Exits 1 if the container is not running or cannot be inspected.
    """
    inspector = inspector_from_settings(settings)
    try:
        snapshot = inspector.inspect(target)
    except InspectionFailedError as exc:
        console.print(f"[bold red]Inspection failed:[/bold red] {exc}")
        raise typer.Exit(code=1) from exc

    console.print(
        Panel(
            render_snapshot(snapshot),
            title=f"[bold]{target}[/bold]",
            border_style="green" if snapshot.running else "red",
            padding=(1, 2),
        )
    )
    if not snapshot.running:
        raise typer.Exit(code=1)
