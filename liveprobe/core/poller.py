"""LivenessPoller — decide whether a running workload has come alive.

Two paths share one entry point:

- **No probe**: a single inspection; the target must be running.
- **Probe**: poll until the probe's substring shows up in the target's log,
  the budget runs out, or the target stops running.

Each probe iteration inspects first, then fetches logs, then matches.  A
not-running inspection short-circuits before any fetch.  The log buffer is
truncated after every non-matching iteration so that it only ever holds one
interval's worth of output; a match cannot straddle two intervals.

Progress messages report ``iterations * poll_interval`` as the elapsed
minutes.  This is an approximation that ignores time spent inspecting and
fetching, and is kept for output compatibility.
"""

from __future__ import annotations

import io
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone

from liveprobe.core.collaborators import LogTailSource, ProgressSink, RuntimeInspector
from liveprobe.core.errors import (
    ContainerNotRunningError,
    ProbeCancelledError,
    ProbeTimeoutError,
)
from liveprobe.models.inspection import InspectionSnapshot
from liveprobe.models.outcome import Outcome, ProbeResult
from liveprobe.models.probe import LivenessProbe
from liveprobe.monitor.progress import NullProgressSink

logger = logging.getLogger(__name__)

DEFAULT_TAIL_COUNT = 10


@dataclass
class PollCursor:
    """Mutable loop state for a single probe run."""

    remaining: int
    iterations: int = 0
    sink: io.StringIO = field(default_factory=io.StringIO)
    last_inspection: InspectionSnapshot | None = None

    def reset_sink(self) -> None:
        """Drop the current interval's log text, keeping the buffer object."""
        self.sink.seek(0)
        self.sink.truncate(0)


class LivenessPoller:
    """Polls a target until it proves it is alive.

    Parameters
    ----------
    inspector:
        Reports the target's running state.
    log_source:
        Supplies log output written since a given instant.
    progress:
        Receives started/progress/completed notifications.  Defaults to a
        no-op sink.
    sleep:
        Optional ``sleep(seconds)`` used between iterations instead of waiting
        on the cancellation event.  Mainly for tests.
    clock:
        Returns the current UTC time; used for the default ``since`` and
        result timestamps.

    A poller holds no per-run state other than the most recent result, so a
    single instance may be reused for sequential runs.
    """

    def __init__(
        self,
        inspector: RuntimeInspector,
        log_source: LogTailSource,
        progress: ProgressSink | None = None,
        *,
        sleep: Callable[[float], None] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._inspector = inspector
        self._log_source = log_source
        self._progress = progress or NullProgressSink()
        self._sleep = sleep
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._last_result: ProbeResult | None = None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def run(
        self,
        target: str,
        probe: LivenessProbe | None = None,
        *,
        since: datetime | None = None,
        tail_count: int | None = None,
        cancel: threading.Event | None = None,
    ) -> ProbeResult:
        """Run a liveness check against *target*.

        Returns the :class:`ProbeResult` on success.  Every failure raises a
        :class:`~liveprobe.core.errors.LivenessProbeError` subclass whose
        ``result`` attribute holds the same record.  Errors raised by the
        inspector or log source propagate unchanged.

        Parameters
        ----------
        target:
            Container id or name.
        probe:
            Log probe to apply.  When omitted, a single running check is made.
        since:
            Only log output newer than this is considered.  Defaults to the
            time the run started.
        tail_count:
            Maximum log lines requested per iteration.  Defaults to 10.
        cancel:
            Event that abandons the run when set.  Honoured while waiting
            between iterations and before each inspection.
        """
        self._last_result = None
        started_at = self._clock()
        logger.info("Starting liveness probe on container with ID '%s'.", target)

        if probe is None:
            return self._check_running(target, started_at)

        return self._poll(
            target,
            probe,
            since=since or started_at,
            tail_count=tail_count or DEFAULT_TAIL_COUNT,
            cancel=cancel or threading.Event(),
            started_at=started_at,
        )

    def last_inspection(self) -> InspectionSnapshot | None:
        """Return the last snapshot taken by the most recent run, if any."""
        if self._last_result is None:
            return None
        return self._last_result.last_inspection

    @property
    def last_result(self) -> ProbeResult | None:
        """The result of the most recent run, successful or not."""
        return self._last_result

    # ------------------------------------------------------------------
    # No-probe path
    # ------------------------------------------------------------------

    def _check_running(self, target: str, started_at: datetime) -> ProbeResult:
        snapshot = self._inspector.inspect(target)
        if not snapshot.running:
            result = self._finish(
                target, Outcome.NOT_RUNNING, None, 1, snapshot, started_at
            )
            logger.warning("Container '%s' is not running: %s", target, snapshot.describe())
            raise ContainerNotRunningError(
                f"Container with ID '{target}' is not running "
                f"({snapshot.describe()}).",
                target=target,
                result=result,
            )
        return self._finish(target, Outcome.MATCH_FOUND, None, 1, snapshot, started_at)

    # ------------------------------------------------------------------
    # Probe path
    # ------------------------------------------------------------------

    def _poll(
        self,
        target: str,
        probe: LivenessProbe,
        *,
        since: datetime,
        tail_count: int,
        cancel: threading.Event,
        started_at: datetime,
    ) -> ProbeResult:
        cursor = PollCursor(remaining=probe.poll_time)
        outcome: Outcome | None = None

        self._progress.started()
        try:
            while cursor.remaining > 0:
                if cancel.is_set():
                    break
                cursor.iterations += 1

                snapshot = self._inspect(target, cursor)
                if not snapshot.running:
                    outcome = Outcome.NOT_RUNNING
                    break

                self._log_source.fetch_since(target, since, tail_count, cursor.sink)

                log_text = cursor.sink.getvalue()
                if log_text and probe.log_contains in log_text:
                    outcome = Outcome.MATCH_FOUND
                    break

                logger.debug(
                    "Iteration %d on '%s': no match for %r in %d chars of log",
                    cursor.iterations,
                    target,
                    probe.log_contains,
                    len(log_text),
                )
                total_minutes = (cursor.iterations * probe.poll_interval) // 60000
                self._progress.progress(f"Waiting on lock for {total_minutes}m...")

                cursor.reset_sink()
                cursor.remaining -= probe.poll_interval
                self._suspend(probe.poll_interval, cancel)
                if cancel.is_set():
                    break
            else:
                outcome = Outcome.TIMED_OUT
        finally:
            self._progress.completed()
            self._last_result = self._result(
                target, outcome, probe, cursor, started_at
            )

        return self._conclude(target, probe, outcome, cursor)

    def _inspect(self, target: str, cursor: PollCursor) -> InspectionSnapshot:
        snapshot = self._inspector.inspect(target)
        cursor.last_inspection = snapshot
        return snapshot

    def _suspend(self, interval_ms: int, cancel: threading.Event) -> None:
        seconds = interval_ms / 1000
        if self._sleep is not None:
            self._sleep(seconds)
        else:
            cancel.wait(seconds)

    def _conclude(
        self,
        target: str,
        probe: LivenessProbe,
        outcome: Outcome | None,
        cursor: PollCursor,
    ) -> ProbeResult:
        result = self._last_result
        assert result is not None

        if outcome == Outcome.MATCH_FOUND:
            logger.info(
                "Liveness probe matched %r on '%s' after %d iteration(s).",
                probe.log_contains,
                target,
                cursor.iterations,
            )
            return result

        if outcome == Outcome.NOT_RUNNING:
            snapshot = cursor.last_inspection
            state = snapshot.describe() if snapshot else "no inspection"
            logger.warning(
                "Container '%s' stopped running during liveness probe: %s", target, state
            )
            raise ContainerNotRunningError(
                f"Container with ID '{target}' is not running and so can't "
                f"perform liveness probe ({state}).",
                target=target,
                result=result,
            )

        if outcome == Outcome.TIMED_OUT:
            logger.warning(
                "Liveness probe on '%s' timed out after %d iteration(s): %s",
                target,
                cursor.iterations,
                probe,
            )
            raise ProbeTimeoutError(
                f"Liveness probe failed to find a match: {probe} "
                f"(target '{target}', {cursor.iterations} iteration(s))",
                result=result,
            )

        logger.info(
            "Liveness probe on '%s' cancelled after %d iteration(s).",
            target,
            cursor.iterations,
        )
        raise ProbeCancelledError(
            f"Liveness probe on container with ID '{target}' was cancelled "
            f"after {cursor.iterations} iteration(s): {probe}",
            result=result,
        )

    # ------------------------------------------------------------------
    # Result assembly
    # ------------------------------------------------------------------

    def _result(
        self,
        target: str,
        outcome: Outcome | None,
        probe: LivenessProbe,
        cursor: PollCursor,
        started_at: datetime,
    ) -> ProbeResult:
        return ProbeResult(
            target=target,
            outcome=outcome,
            probe=probe,
            iterations=cursor.iterations,
            last_inspection=cursor.last_inspection,
            started_at=started_at,
            finished_at=self._clock(),
        )

    def _finish(
        self,
        target: str,
        outcome: Outcome,
        probe: LivenessProbe | None,
        iterations: int,
        snapshot: InspectionSnapshot,
        started_at: datetime,
    ) -> ProbeResult:
        self._last_result = ProbeResult(
            target=target,
            outcome=outcome,
            probe=probe,
            iterations=iterations,
            last_inspection=snapshot,
            started_at=started_at,
            finished_at=self._clock(),
        )
        return self._last_result
