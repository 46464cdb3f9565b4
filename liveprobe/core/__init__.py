"""liveprobe core — the liveness polling loop and its collaborator contracts."""
