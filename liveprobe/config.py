"""Runtime configuration — env-driven via pydantic-settings.

Reads from a .env file and LIVEPROBE_* environment variables.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class ProbeSettings(BaseSettings):
    """liveprobe settings with environment variable overrides.

    Examples
    --------
    Override via environment::

        export LIVEPROBE_LOG_LEVEL=DEBUG
        export LIVEPROBE_RUNTIME_BINARY=podman
        export LIVEPROBE_RUNTIME_HOST=tcp://10.0.0.5:2375

    Or via .env file::

        LIVEPROBE_DEFAULT_POLL_INTERVAL=5000
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="LIVEPROBE_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Runtime environment
    environment: str = "development"
    log_level: str = "INFO"
    debug: bool = False

    # Container runtime CLI
    runtime_binary: str = "docker"
    runtime_host: str | None = None
    command_timeout_seconds: float = 30.0

    # Probe defaults (milliseconds / lines)
    default_poll_time: int = 600000
    default_poll_interval: int = 30000
    default_tail_count: int = 10

    @property
    def is_production(self) -> bool:
        """Whether running in production mode."""
        return self.environment == "production"


# Module-level singleton: import as `from liveprobe.config import settings`
settings = ProbeSettings()
