"""Bibliographic record data model for bibfield.

This module defines the minimal record shape consumed by the sorting
and link-cleaning code: an entry type, a citation key and a mapping of
field names to raw string values.
"""

from dataclasses import dataclass, field
from typing import Any

# Pseudo-field name that sorts by entry type instead of a stored field
TYPE_HEADER = "entrytype"


@dataclass(frozen=True)
class BibRecord:
    """Immutable bibliographic record.

    Field names are case-insensitive and stored lower-case. Blank values
    are dropped at construction so that an unset field and an empty field
    look the same to consumers.

    Attributes
    ----------
    entry_type : str
        Entry type name (e.g., 'article', 'book').
    citation_key : str | None
        Citation key, if any.
    fields : dict[str, str]
        Field name to raw value mapping.
    """

    entry_type: str
    citation_key: str | None = None
    fields: dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Normalize field names and drop blank values."""
        cleaned = {
            name.strip().lower(): value
            for name, value in self.fields.items()
            if value is not None and str(value).strip()
        }
        object.__setattr__(self, "fields", cleaned)

    @property
    def type_name(self) -> str:
        """Return the entry type name."""
        return self.entry_type

    def get_field(self, name: str) -> str | None:
        """Look up a field value.

        Parameters
        ----------
        name : str
            Field name (case-insensitive).

        Returns
        -------
        str | None
            Raw field value, or None if unset.
        """
        return self.fields.get(name.lower())

    def with_field(self, name: str, value: str | None) -> "BibRecord":
        """Return a copy with one field replaced (or removed if value is None).

        Parameters
        ----------
        name : str
            Field name.
        value : str | None
            New value.

        Returns
        -------
        BibRecord
            New record instance.
        """
        updated = dict(self.fields)
        if value is None:
            updated.pop(name.lower(), None)
        else:
            updated[name.lower()] = value
        return BibRecord(
            entry_type=self.entry_type,
            citation_key=self.citation_key,
            fields=updated,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert record to dictionary for JSON serialization.

        Returns
        -------
        dict[str, Any]
            Dictionary representation compatible with RECORD_SCHEMA.
        """
        return {
            "entry_type": self.entry_type,
            "citation_key": self.citation_key,
            "fields": dict(self.fields),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BibRecord":
        """Reconstruct a BibRecord from a dictionary.

        JSON null field values are treated as unset. Numbers are rendered
        as text, with integral floats written without a fractional part
        (``1999.0`` becomes ``"1999"``).

        Parameters
        ----------
        data : dict[str, Any]
            Dictionary with 'entry_type', optional 'citation_key' and 'fields'.

        Returns
        -------
        BibRecord
            Reconstructed record.
        """
        fields = {
            str(name): _field_text(value)
            for name, value in (data.get("fields") or {}).items()
            if value is not None
        }
        return cls(
            entry_type=data["entry_type"],
            citation_key=data.get("citation_key"),
            fields=fields,
        )


def _field_text(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
