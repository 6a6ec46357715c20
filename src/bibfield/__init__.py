"""Field-aware sorting and link cleaning for bibliographic records.

This package provides:
- Data models (bibfield.models) — record type and JSON schema
- Normalization (bibfield.normalize) — author keys, years, months, DOIs
- Sorting (bibfield.sorting) — field comparators and multi-key sorting
- Links (bibfield.links) — search redirect unwrapping and URL sanitizing
- Audit (bibfield.audit) — JSONL event logging
- CLI (bibfield.cli) — command-line interface
- Public API (bibfield.api) — high-level convenience functions
"""

__version__ = "0.1.0"
__license__ = "MIT"

from bibfield.api import (
    RecordFileError,
    clean_links_file,
    read_jsonl,
    sanitize_records,
    sort_file,
    write_jsonl,
)
from bibfield.links import clean_search_redirect, sanitize_url
from bibfield.models import TYPE_HEADER, BibRecord
from bibfield.sorting import FieldComparator, sort_records

__all__ = [
    "__version__",
    "__license__",
    "BibRecord",
    "TYPE_HEADER",
    "FieldComparator",
    "sort_records",
    "clean_search_redirect",
    "sanitize_url",
    "read_jsonl",
    "write_jsonl",
    "sort_file",
    "clean_links_file",
    "sanitize_records",
    "RecordFileError",
]
