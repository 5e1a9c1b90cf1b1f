from __future__ import annotations

__all__ = ["FROZEN", "RUNNING", "STATES", "STOPPED", "UNKNOWN", "valid_state"]

STOPPED = "STOPPED"
STARTING = "STARTING"
RUNNING = "RUNNING"
STOPPING = "STOPPING"
ABORTING = "ABORTING"
FREEZING = "FREEZING"
FROZEN = "FROZEN"
THAWED = "THAWED"
UNKNOWN = "UNKNOWN"

# Vocabulary reported by lxc-info and accepted by lxc-wait
STATES: frozenset[str] = frozenset(
    {STOPPED, STARTING, RUNNING, STOPPING, ABORTING, FREEZING, FROZEN, THAWED, UNKNOWN}
)


def valid_state(state: str) -> bool:
    """Return True if ``state`` is a recognised container state (case-sensitive)."""
    return state in STATES
