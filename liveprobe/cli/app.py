"""Main Typer application — imports and registers all CLI commands.

Entry point: ``liveprobe`` (configured via pyproject.toml console_scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console

from liveprobe import __version__
from liveprobe.cli.commands.inspect_cmd import inspect_cmd
from liveprobe.cli.commands.probe_cmd import probe_cmd
from liveprobe.config import settings

app = typer.Typer(
    name="liveprobe",
    help="liveprobe: gate deployments on container liveness.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def _configure(
    log_level: str = typer.Option(
        None,
        "--log-level",
        help="Logging level (default from LIVEPROBE_LOG_LEVEL, else INFO).",
    ),
) -> None:
    """liveprobe: gate deployments on container liveness."""
    level = (log_level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# Register subcommands
app.command(name="probe", help="Wait for a container to become live.")(probe_cmd)
app.command(name="inspect", help="Show a container's running state.")(inspect_cmd)


@app.command(name="version", help="Show the liveprobe version.")
def version_cmd() -> None:
    """Print the installed liveprobe version."""
    Console().print(f"liveprobe {__version__}")


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
