"""``liveprobe probe TARGET`` — wait until a container proves it is alive.

Without ``--log-contains`` this is a single running check.  With it, the
container's log is polled until the text appears, the budget runs out, or
the container stops.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import typer
from rich.console import Console

from liveprobe.config import settings
from liveprobe.core.errors import (
    InvalidConfigurationError,
    LivenessProbeError,
    ProbeCancelledError,
)
from liveprobe.core.poller import LivenessPoller
from liveprobe.models.probe import probe as build_probe
from liveprobe.monitor.progress import NullProgressSink, RichProgressSink
from liveprobe.monitor.renderer import render_result
from liveprobe.runtime.docker_cli import inspector_from_settings, log_source_from_settings

logger = logging.getLogger(__name__)

console = Console()

EXIT_FAILED = 1
EXIT_INVALID = 2
EXIT_CANCELLED = 130


def _parse_since(value: str | None) -> datetime | None:
    if value is None:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError as exc:
        raise typer.BadParameter(
            f"expected an ISO 8601 timestamp, got {value!r}", param_hint="--since"
        ) from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def probe_cmd(
    target: str = typer.Argument(
        ...,
        help="Container ID or name to probe.",
    ),
    log_contains: str = typer.Option(
        None,
        "--log-contains",
        "-c",
        help="Text that must appear in the container log. Omit for a plain running check.",
    ),
    poll_time: int = typer.Option(
        None,
        "--poll-time",
        "-t",
        help="Total polling budget in milliseconds (default 600000).",
    ),
    poll_interval: int = typer.Option(
        None,
        "--poll-interval",
        "-i",
        help="Milliseconds between polls (default 30000).",
    ),
    since: str = typer.Option(
        None,
        "--since",
        help="Only consider log output after this ISO 8601 time (default: now).",
    ),
    tail: int = typer.Option(
        None,
        "--tail",
        "-n",
        help="Maximum log lines fetched per poll (default 10).",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress the progress spinner and result panel.",
    ),
) -> None:
    """Probe a container for liveness.

    Exits 0 when the container is live, 1 when it stopped, timed out or
    could not be queried, 2 on invalid probe options, and 130 on Ctrl+C.
    """
    since_at = _parse_since(since)

    probe = None
    if log_contains is not None:
        try:
            probe = build_probe(
                poll_time if poll_time is not None else settings.default_poll_time,
                poll_interval if poll_interval is not None else settings.default_poll_interval,
                log_contains,
            )
        except InvalidConfigurationError as exc:
            console.print(f"[bold red]Invalid probe:[/bold red] {exc}")
            raise typer.Exit(code=EXIT_INVALID) from exc
    elif poll_time is not None or poll_interval is not None:
        console.print(
            "[bold red]Invalid probe:[/bold red] --poll-time and --poll-interval "
            "require --log-contains"
        )
        raise typer.Exit(code=EXIT_INVALID)

    progress = NullProgressSink() if quiet else RichProgressSink(console=console)
    poller = LivenessPoller(
        inspector_from_settings(settings),
        log_source_from_settings(settings),
        progress,
    )

    try:
        result = poller.run(
            target,
            probe,
            since=since_at,
            tail_count=tail if tail is not None else settings.default_tail_count,
        )
    except KeyboardInterrupt:
        console.print(f"[yellow]Liveness probe on '{target}' interrupted.[/yellow]")
        raise typer.Exit(code=EXIT_CANCELLED)
    except ProbeCancelledError as exc:
        console.print(f"[yellow]{exc}[/yellow]")
        raise typer.Exit(code=EXIT_CANCELLED) from exc
    except LivenessProbeError as exc:
        logger.debug("Liveness probe failed", exc_info=True)
        if exc.result is not None and not quiet:
            console.print(render_result(exc.result))
        console.print(f"[bold red]Liveness probe failed:[/bold red] {exc}")
        raise typer.Exit(code=EXIT_FAILED) from exc

    if not quiet:
        console.print(render_result(result))
    console.print(f"[bold green]Container '{target}' is live.[/bold green]")
