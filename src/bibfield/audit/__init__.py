"""Audit logging subsystem for bibfield.

Main Components
---------------
- AuditLogger: JSONL event logger
- generate_run_id: run identifier factory
"""

from bibfield.audit.helpers import generate_run_id, get_package_version
from bibfield.audit.logger import AuditLogger
from bibfield.audit.models import LogEvent
from bibfield.utils import get_iso_timestamp

__all__ = [
    "AuditLogger",
    "LogEvent",
    "generate_run_id",
    "get_package_version",
    "get_iso_timestamp",
]
