"""Data models for audit logging."""

from dataclasses import dataclass, field
from typing import Any

__all__ = ["LogEvent", "LEVELS"]

LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")


@dataclass
class LogEvent:
    """One structured audit event (one JSONL line).

    Attributes
    ----------
    ts : str
        ISO8601 UTC timestamp.
    run_id : str
        Run identifier.
    level : str
        One of LEVELS.
    event : str
        Event type (e.g., "run_started", "link_rewritten").
    stage : str | None
        Stage name, if any.
    rid : str | None
        Record identifier (citation key), if record-specific.
    data : dict[str, Any]
        Event payload.
    """

    ts: str
    run_id: str
    level: str
    event: str
    stage: str | None = None
    rid: str | None = None
    data: dict[str, Any] = field(default_factory=dict)
