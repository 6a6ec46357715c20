"""Run configuration dataclasses."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from bibfield.sorting.stack import SortKey, parse_sort_keys


@dataclass
class SortConfig:
    """Configuration for sorting a record file.

    Attributes
    ----------
    sort_keys : list[SortKey] | str
        Sort keys in priority order, or a specification such as
        "-year,author". Strings are parsed on construction.
    audit_log : Path | None
        JSONL audit log path. If None, no events are written.
    """

    sort_keys: list[SortKey] | str = "author"
    audit_log: Path | None = None

    def __post_init__(self) -> None:
        """Parse keys and validate."""
        if isinstance(self.sort_keys, str):
            self.sort_keys = parse_sort_keys(self.sort_keys)
        if not self.sort_keys:
            raise ValueError("sort_keys must name at least one field")
        if self.audit_log is not None:
            self.audit_log = Path(self.audit_log)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "sort_keys": [str(key) for key in self.sort_keys],
            "audit_log": str(self.audit_log) if self.audit_log is not None else None,
        }


@dataclass
class LinkConfig:
    """Configuration for cleaning link fields.

    Attributes
    ----------
    fields : list[str]
        Fields holding links (default: url).
    clean_redirects : bool
        Unwrap search-engine redirect links before sanitizing.
    audit_log : Path | None
        JSONL audit log path. If None, no events are written.
    """

    fields: list[str] = field(default_factory=lambda: ["url"])
    clean_redirects: bool = True
    audit_log: Path | None = None

    def __post_init__(self) -> None:
        """Normalize field names and validate."""
        self.fields = [name.strip().lower() for name in self.fields if name.strip()]
        if not self.fields:
            raise ValueError("fields must name at least one link field")
        if self.audit_log is not None:
            self.audit_log = Path(self.audit_log)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "fields": list(self.fields),
            "clean_redirects": self.clean_redirects,
            "audit_log": str(self.audit_log) if self.audit_log is not None else None,
        }
