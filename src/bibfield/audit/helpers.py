"""Helper utilities for audit logging."""

import importlib.metadata
import secrets

from bibfield.utils import get_iso_timestamp

__all__ = ["generate_run_id", "get_package_version"]


def generate_run_id() -> str:
    """Generate a run identifier: ``<UTC timestamp>__<8 hex digits>``."""
    return f"{get_iso_timestamp()}__{secrets.token_hex(4)}"


def get_package_version() -> str:
    """Return the installed bibfield version, or "unknown" when not installed."""
    try:
        return importlib.metadata.version("bibfield")
    except importlib.metadata.PackageNotFoundError:
        return "unknown"
