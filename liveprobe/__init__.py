"""liveprobe: container liveness probing for deployment gates.

Observes a running container until it is provably live, either by spotting
a marker in its log within a time budget or, with no marker configured, by
confirming it is running.
"""

__version__ = "0.1.0"
__description__ = "Gate deployment steps on container liveness"

from liveprobe.core.poller import LivenessPoller
from liveprobe.models.probe import LivenessProbe, probe

__all__ = ["LivenessPoller", "LivenessProbe", "probe", "__version__"]
