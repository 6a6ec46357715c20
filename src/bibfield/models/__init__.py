"""Shared data types for bibfield.

This package contains the record dataclass and its JSON schema, consumed
by sorting, link cleaning and the public API.
"""

from bibfield.models.records import TYPE_HEADER, BibRecord
from bibfield.models.schema import RECORD_SCHEMA, validate_record_dict

__all__ = [
    # Schema
    "RECORD_SCHEMA",
    "validate_record_dict",
    # Record model
    "BibRecord",
    "TYPE_HEADER",
]
