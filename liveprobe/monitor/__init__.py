"""liveprobe terminal output.

Modules
-------
progress
    Progress sinks for the poller: no-op, logging, and a Rich spinner.
renderer
    Turns ``ProbeResult`` and ``InspectionSnapshot`` into Rich renderables.
"""
