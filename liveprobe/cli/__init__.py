"""liveprobe CLI — Typer-based command-line interface.

Provides the ``liveprobe`` command with subcommands for probing a container
for liveness, inspecting its state, and printing the version.

All output uses Rich for formatted terminal display.
"""
