"""Multi-key record sorting.

Chains FieldComparator instances so that later keys only break ties
left by earlier ones (e.g., newest year first, then author).

Sort specifications are comma-separated field names. A leading '-'
reverses that field's natural order: "year,author" lists the newest
years first, "-year,author" the oldest.
"""

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from functools import cmp_to_key

from bibfield.models.records import BibRecord
from bibfield.sorting.comparator import FieldComparator

__all__ = ["SortKey", "FieldComparatorStack", "parse_sort_keys", "sort_records"]

_REVERSE_PREFIX = "-"
_FIELD_NAME_RE = re.compile(r"^[A-Za-z][\w.-]*$")


@dataclass(frozen=True, slots=True)
class SortKey:
    """One sort key.

    Attributes
    ----------
    field : str
        Field name.
    reverse : bool
        True to reverse the field's natural order.
    """

    field: str
    reverse: bool = False

    def comparator(self) -> FieldComparator:
        """Build the comparator for this key."""
        return FieldComparator(self.field, reverse=self.reverse)

    def __str__(self) -> str:
        return f"{_REVERSE_PREFIX if self.reverse else ''}{self.field}"


def parse_sort_keys(spec: str) -> list[SortKey]:
    """Parse a comma-separated sort specification.

    Parameters
    ----------
    spec : str
        Field names in priority order, each optionally prefixed with '-'
        to reverse it, e.g. "-year,author".

    Returns
    -------
    list[SortKey]
        Parsed keys in priority order.

    Raises
    ------
    ValueError
        If a key is not a valid field name or the specification is empty.
    """
    keys: list[SortKey] = []
    for part in spec.split(","):
        part = part.strip()
        if not part:
            continue
        reverse = part.startswith(_REVERSE_PREFIX)
        field = part[len(_REVERSE_PREFIX) :].strip() if reverse else part
        if not _FIELD_NAME_RE.match(field):
            raise ValueError(f"Invalid field name in sort key {part!r}")
        keys.append(SortKey(field, reverse))

    if not keys:
        raise ValueError(f"No sort keys in {spec!r}")
    return keys


class FieldComparatorStack:
    """Comparator that consults several FieldComparators in order.

    Parameters
    ----------
    comparators : Iterable[FieldComparator]
        Comparators in priority order.
    """

    def __init__(self, comparators: Iterable[FieldComparator]) -> None:
        self.comparators = tuple(comparators)

    @classmethod
    def from_keys(cls, keys: Iterable[SortKey]) -> "FieldComparatorStack":
        """Build a stack from sort keys."""
        return cls(key.comparator() for key in keys)

    def compare(self, first: BibRecord, second: BibRecord) -> int:
        """Return the first non-zero comparator result, or 0."""
        for comparator in self.comparators:
            result = comparator.compare(first, second)
            if result != 0:
                return result
        return 0

    def __call__(self, first: BibRecord, second: BibRecord) -> int:
        return self.compare(first, second)


def sort_records(
    records: Iterable[BibRecord],
    sort_keys: Sequence[SortKey] | str,
) -> list[BibRecord]:
    """Sort records by one or more fields.

    The sort is stable: records that compare equal on every key keep
    their input order.

    Parameters
    ----------
    records : Iterable[BibRecord]
        Records to sort.
    sort_keys : Sequence[SortKey] | str
        Sort keys, or a specification string for parse_sort_keys().

    Returns
    -------
    list[BibRecord]
        New sorted list.
    """
    if isinstance(sort_keys, str):
        sort_keys = parse_sort_keys(sort_keys)
    stack = FieldComparatorStack.from_keys(sort_keys)
    return sorted(records, key=cmp_to_key(stack.compare))
