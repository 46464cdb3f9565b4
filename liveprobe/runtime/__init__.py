"""Container runtime adapters for the liveness poller."""

from liveprobe.runtime.docker_cli import (
    DockerCliInspector,
    DockerCliLogSource,
    inspector_from_settings,
    log_source_from_settings,
)

__all__ = [
    "DockerCliInspector",
    "DockerCliLogSource",
    "inspector_from_settings",
    "log_source_from_settings",
]
