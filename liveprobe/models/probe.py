"""Liveness probe definition — how long to poll, how often, and for what."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from liveprobe.core.errors import InvalidConfigurationError

# Ten minutes of polling at thirty second intervals.
DEFAULT_POLL_TIME = 600000
DEFAULT_POLL_INTERVAL = 30000


class LivenessProbe(BaseModel):
    """Immutable description of a log-based liveness probe.

    All durations are in milliseconds.

    Parameters
    ----------
    poll_time:
        Total time budget for the polling loop.
    poll_interval:
        Time between successive poll iterations.
    log_contains:
        Substring that must appear in the container log to declare liveness.
    """

    model_config = ConfigDict(frozen=True)

    poll_time: int = Field(gt=0)
    poll_interval: int = Field(gt=0)
    log_contains: str = Field(min_length=1)

    @property
    def max_iterations(self) -> int:
        """Number of iterations the loop runs before timing out.

        A ``poll_interval`` larger than ``poll_time`` still yields one
        iteration.
        """
        return -(-self.poll_time // self.poll_interval)

    def __str__(self) -> str:
        return (
            f"LivenessProbe(poll_time={self.poll_time}, "
            f"poll_interval={self.poll_interval}, "
            f"log_contains={self.log_contains!r})"
        )


def probe(*args: int | str) -> LivenessProbe:
    """Build a :class:`LivenessProbe`.

    Accepts either ``probe(log_contains)``, which polls for ten minutes at
    thirty second intervals, or ``probe(poll_time, poll_interval, log_contains)``.

    Raises
    ------
    InvalidConfigurationError
        If the substring is empty or either duration is not positive.
    """
    if len(args) == 1:
        poll_time, poll_interval, log_contains = (
            DEFAULT_POLL_TIME,
            DEFAULT_POLL_INTERVAL,
            args[0],
        )
    elif len(args) == 3:
        poll_time, poll_interval, log_contains = args
    else:
        raise TypeError(
            f"probe() takes 1 or 3 positional arguments but {len(args)} were given"
        )

    if isinstance(poll_time, bool) or not isinstance(poll_time, int):
        raise InvalidConfigurationError(f"poll_time must be an integer, got {poll_time!r}")
    if isinstance(poll_interval, bool) or not isinstance(poll_interval, int):
        raise InvalidConfigurationError(
            f"poll_interval must be an integer, got {poll_interval!r}"
        )
    if not isinstance(log_contains, str):
        raise InvalidConfigurationError(
            f"log_contains must be a string, got {log_contains!r}"
        )

    try:
        return LivenessProbe(
            poll_time=poll_time,
            poll_interval=poll_interval,
            log_contains=log_contains,
        )
    except ValidationError as exc:
        reasons = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or 'probe'}: {err['msg']}"
            for err in exc.errors()
        )
        raise InvalidConfigurationError(f"Invalid liveness probe: {reasons}") from exc
